# shasper

Building blocks for working with beacon-chain style data in Python:

- an SSZ (SimpleSerialize) codec with unsigned integers, booleans,
  fixed-length vectors and bitvectors, bounded lists and bitlists,
  32-byte hashes and containers built from named fields;
- Keccak-256 hashing;
- parsing and discovery of consensus test-vector directory layouts;
- an in-memory model of Casper FFG justification, finalization and
  slashing checks.

## Installation

```
pip install shasper
```

Run the test suite with:

```
pip install "shasper[test]"
pytest
```

## The SSZ codec

Every type descriptor is an `SSZType` from `shasper.codec`. Each one
offers `encode(value)` returning `bytes`, `decode(data)` returning the
value, a `size` property (a byte count, or `None` for variable-sized
types), and `is_fixed()` / `is_variable()`.

| Module              | Types                                       |
|---------------------|---------------------------------------------|
| `shasper.basic`     | `Uint(bits)`, `Boolean`                     |
| `shasper.fixed`     | `Vector(element_type, length)`, `Bitvector(length)`, `Hash256` |
| `shasper.variable`  | `List(element_type, max_length=None)`, `Bitlist(max_length=None)` |
| `shasper.container` | `Container(fields, factory=None)`, `Field(name, type)` |

Ready-made instances are `uint8`, `uint16`, `uint32`, `uint64`, `uint128`
and `boolean` in `shasper.basic`, and `hash256` in `shasper.fixed`.

```python
from shasper.basic import uint16, uint64
from shasper.fixed import Bitvector
from shasper.variable import Bitlist, List
from shasper.container import Container, Field

uint16.encode(0xABCD)                       # b'\xcd\xab'
Bitvector(4).encode([False, True, False, True])   # b'\x0a'
Bitlist().decode(b'\x03')                   # [True]

pair = Container([Field("a", uint64), Field("b", List(uint16))])
data = pair.encode({"a": 1, "b": [2, 3]})
pair.decode(data)                           # {'a': 1, 'b': [2, 3]}
```

Integers are little-endian. Bitvectors pack bits least-significant first;
bitlists add a single terminating `1` bit after the last element.
Variable-sized elements inside lists and containers are placed after the
fixed part and referenced by 4-byte little-endian offsets. The
lower-level `Series`, `SeriesItem` and `ItemKind` in `shasper.series`, and
`encode_list` / `decode_list` in `shasper.lists`, expose that layout
directly. Static sizes are combined with `size_add`, `size_mul`,
`size_div` and `size_sum` from `shasper.size`, where `None` stands for
"variable".

Container values to encode may be mappings or objects with matching
attributes. Decoding returns a `dict`, or `factory(**fields)` when a
factory is given.

Malformed input raises a subclass of `SSZError` (itself a `ValueError`):
`IncorrectSize`, `InvalidType`, `InvalidLength` or `ListTooLarge`.

## Keccak-256

```python
from shasper.keccak import keccak256, KECCAK_EMPTY

keccak256(b"") == KECCAK_EMPTY   # True
keccak256(b"").hex()
# 'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
```

`KECCAK_NULL_RLP` holds the digest of the RLP encoding of an empty string.

## Test-vector descriptions

`shasper.description` understands directories laid out as
`<network>/<phase>/<category>/<kind>/<origin>/<name>`.

- `read_descriptions(root)` walks a tree and returns one `TestDescription`
  for every directory that has no subdirectories, with `path` set to its
  resolved location;
- `TestDescription.parse(text)` and `TestType.parse(text)` parse the
  path components into `TestNetwork`, `TestPhase` and one of the per-category
  enums (`BLSType`, `SszGenericType`, `EpochProcessingType`, `GenesisType`,
  `OperationsType`, `SanityType`, `ShufflingType`, `SszStaticType`);
- `test_name(path)` returns the last six `/`-separated components of a path.

Unknown names and malformed paths raise `DescriptionError`.

## Casper FFG

`shasper.casper` models the finality gadget. `CasperState` holds the
validator set (`(id, weight)` pairs, ids being Ed25519 public keys), a map
of block numbers to hashes, epochs, justified and finalized checkpoints,
and the collected `Attestation`s of `Checkpoint`s.

- `attest(attestation, signature)` accepts a signed attestation for the
  previous or current epoch and records a `CasperEvent`;
- `slash(...)` checks two signed attestations for a double or surround
  vote and calls the optional `on_slashing` callback;
- `on_new_session(changed, new_validators, block_number)` justifies and
  finalizes checkpoints and opens the next epoch;
- `on_disabled(index)` zeroes a validator's weight;
- `offchain_attestations(block_number, signing_keys)` builds signed
  attestations for local `nacl.signing.SigningKey`s that are validators;
- `validate_unsigned(call)` describes how an attest or slash call enters a
  transaction pool;
- `current_justified_block()`, `previous_justified_block()` and
  `finalized_block()` return checkpoint block hashes.

Rejections raise `CasperError`.

## What this package does not do

- It has no command-line tool.
- It finds and describes test-vector directories but does not run them:
  there is no beacon-chain state transition, YAML loading or SSZ
  hash-tree-root computation here.
- The Casper model keeps all state in memory; it does not talk to a
  network, store blocks or submit transactions.