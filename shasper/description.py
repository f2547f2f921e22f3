"""Descriptions of conformance test cases, parsed from their directory layout."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional, TypeVar, Union

PathLike = Union[str, "os.PathLike[str]"]

_E = TypeVar("_E", bound=Enum)


class DescriptionError(ValueError):
    """A path or name does not describe a known kind of test."""


def _parse_enum(enum_cls: type[_E], text: str) -> _E:
    try:
        return enum_cls(text)
    except ValueError:
        raise DescriptionError(
            f"unknown {enum_cls.__name__} {text!r}"
        ) from None


class TestPhase(Enum):
    """Protocol phase that a test targets."""

    __test__ = False

    PHASE0 = "phase0"


class TestNetwork(Enum):
    """Network configuration that a test runs under."""

    __test__ = False

    GENERAL = "general"
    MAINNET = "mainnet"
    MINIMAL = "minimal"


class BLSType(Enum):
    """Kinds of BLS tests."""

    AGGREGATE_PUBKEYS = "aggregate_pubkeys"
    AGGREGATE_SIGS = "aggregate_sigs"
    MSG_HASH_COMPRESSED = "msg_hash_compressed"
    MSG_HASH_UNCOMPRESSED = "msg_hash_uncompressed"
    PRIV_TO_PUB = "priv_to_pub"
    SIGN_MSG = "sign_msg"


class SszGenericType(Enum):
    """Kinds of generic SSZ tests."""

    BASIC_VECTOR = "basic_vector"
    BITLIST = "bitlist"
    BITVECTOR = "bitvector"
    BOOLEAN = "boolean"
    CONTAINERS = "containers"
    UINTS = "uints"


class EpochProcessingType(Enum):
    """Kinds of epoch processing tests."""

    FINAL_UPDATES = "final_updates"
    JUSTIFICATION_AND_FINALIZATION = "justification_and_finalization"
    REGISTRY_UPDATES = "registry_updates"
    REWARDS_AND_PENALTIES = "rewards_and_penalties"
    SLASHINGS = "slashings"


class GenesisType(Enum):
    """Kinds of genesis tests."""

    INITIALIZATION = "initialization"
    VALIDITY = "validity"


class OperationsType(Enum):
    """Kinds of block operation tests."""

    ATTESTATION = "attestation"
    ATTESTER_SLASHING = "attester_slashing"
    BLOCK_HEADER = "block_header"
    DEPOSIT = "deposit"
    PROPOSER_SLASHING = "proposer_slashing"
    VOLUNTARY_EXIT = "voluntary_exit"


class SanityType(Enum):
    """Kinds of sanity tests."""

    BLOCKS = "blocks"
    SLOTS = "slots"


class ShufflingType(Enum):
    """Kinds of shuffling tests."""

    CORE = "core"


class SszStaticType(Enum):
    """Container types covered by static SSZ tests."""

    AGGREGATE_AND_PROOF = "AggregateAndProof"
    ATTESTATION = "Attestation"
    ATTESTATION_DATA = "AttestationData"
    ATTESTATION_DATA_AND_CUSTODY_BIT = "AttestationDataAndCustodyBit"
    ATTESTER_SLASHING = "AttesterSlashing"
    BEACON_BLOCK = "BeaconBlock"
    BEACON_BLOCK_BODY = "BeaconBlockBody"
    BEACON_BLOCK_HEADER = "BeaconBlockHeader"
    BEACON_STATE = "BeaconState"
    CHECKPOINT = "Checkpoint"
    DEPOSIT = "Deposit"
    DEPOSIT_DATA = "DepositData"
    ETH1_DATA = "Eth1Data"
    FORK = "Fork"
    HISTORICAL_BATCH = "HistoricalBatch"
    INDEXED_ATTESTATION = "IndexedAttestation"
    PENDING_ATTESTATION = "PendingAttestation"
    PROPOSER_SLASHING = "ProposerSlashing"
    VALIDATOR = "Validator"
    VOLUNTARY_EXIT = "VoluntaryExit"


_CATEGORIES: dict[str, type[Enum]] = {
    "bls": BLSType,
    "ssz_generic": SszGenericType,
    "epoch_processing": EpochProcessingType,
    "genesis": GenesisType,
    "operations": OperationsType,
    "sanity": SanityType,
    "shuffling": ShufflingType,
    "ssz_static": SszStaticType,
}


@dataclass(frozen=True)
class TestType:
    """A test category together with the kind of test within it."""

    __test__ = False

    category: str
    kind: Enum

    @classmethod
    def parse(cls, text: str) -> TestType:
        """Parse a "category/kind" string such as "sanity/blocks"."""
        parts = text.split("/")
        if len(parts) != 2:
            raise DescriptionError(f"test type {text!r} is not of the form category/kind")
        category, kind = parts
        try:
            kind_enum = _CATEGORIES[category]
        except KeyError:
            raise DescriptionError(f"unknown test category {category!r}") from None
        return cls(category, _parse_enum(kind_enum, kind))

    def __str__(self) -> str:
        return f"{self.category}/{self.kind.value}"


@dataclass(frozen=True)
class TestDescription:
    """Where a test case sits: network, phase, type, origin and name."""

    __test__ = False

    network: TestNetwork
    phase: TestPhase
    typ: TestType
    origin: str
    name: str
    path: Optional[Path] = None

    @classmethod
    def parse(cls, text: str) -> TestDescription:
        """Parse "network/phase/category/kind/origin/name"."""
        parts = text.split("/")
        if len(parts) != 6:
            raise DescriptionError(
                f"test description {text!r} does not have six components"
            )
        network, phase, category, kind, origin, name = parts
        return cls(
            network=_parse_enum(TestNetwork, network),
            phase=_parse_enum(TestPhase, phase),
            typ=TestType.parse(f"{category}/{kind}"),
            origin=origin,
            name=name,
        )


def test_name(path: PathLike) -> str:
    """Return the last six "/"-separated components of path, joined by "/"."""
    parts = os.fspath(path).split("/")
    if len(parts) < 6:
        raise DescriptionError(f"path {os.fspath(path)!r} has fewer than six components")
    return "/".join(parts[-6:])


test_name.__test__ = False  # type: ignore[attr-defined]


def read_descriptions(root: PathLike) -> list[TestDescription]:
    """Collect a description for every leaf directory under root.

    A directory that holds no subdirectories is a test case; its description
    is parsed from the last six components of its resolved path.
    """
    root_path = Path(root)
    subdirs = sorted(entry for entry in root_path.iterdir() if entry.is_dir())
    if subdirs:
        return [desc for sub in subdirs for desc in read_descriptions(sub)]

    resolved = root_path.resolve(strict=True)
    return [replace(TestDescription.parse(test_name(resolved)), path=resolved)]