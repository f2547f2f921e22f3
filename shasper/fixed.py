"""Fixed-length SSZ types: vectors, bitvectors and 256-bit hashes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from shasper.basic import uint8
from shasper.codec import IncorrectSize, InvalidLength, InvalidType, SSZType
from shasper.lists import decode_list, encode_list
from shasper.size import size_mul

HASH_LENGTH = 32


@dataclass(frozen=True)
class Vector(SSZType):
    """A sequence of exactly `length` values of element_type."""

    element_type: SSZType
    length: int

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"vector length must not be negative, got {self.length}")

    @property
    def size(self) -> Optional[int]:
        return size_mul(self.element_type.size, self.length)

    def encode(self, value: Sequence[Any]) -> bytes:
        values = list(value)
        if len(values) != self.length:
            raise InvalidLength(
                f"vector needs {self.length} elements, got {len(values)}"
            )
        return encode_list(self.element_type, values)

    def decode(self, data: bytes) -> list[Any]:
        values = decode_list(self.element_type, data)
        if len(values) != self.length:
            raise InvalidLength(
                f"vector needs {self.length} elements, decoded {len(values)}"
            )
        return values


@dataclass(frozen=True)
class Bitvector(SSZType):
    """Exactly `length` booleans packed eight to a byte, lowest bit first."""

    length: int

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"bitvector length must not be negative, got {self.length}")

    @property
    def size(self) -> int:
        return (self.length + 7) // 8

    def encode(self, value: Sequence[bool]) -> bytes:
        bits = list(value)
        if len(bits) != self.length:
            raise InvalidLength(
                f"bitvector needs {self.length} bits, got {len(bits)}"
            )
        out = bytearray(self.size)
        for i, bit in enumerate(bits):
            if bit:
                out[i // 8] |= 1 << (i % 8)
        return bytes(out)

    def decode(self, data: bytes) -> list[bool]:
        data = bytes(data)
        if len(data) < self.size:
            raise IncorrectSize(
                f"bitvector of {self.length} bits needs {self.size} bytes, got {len(data)}"
            )
        return [bool(data[i // 8] & (1 << (i % 8))) for i in range(self.length)]


@dataclass(frozen=True)
class Hash256(SSZType):
    """A 32-byte hash, encoded as its raw bytes."""

    @property
    def size(self) -> int:
        return HASH_LENGTH

    def encode(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidType(f"hash expects bytes, got {type(value).__name__}")
        raw = bytes(value)
        if len(raw) != HASH_LENGTH:
            raise InvalidLength(f"hash needs {HASH_LENGTH} bytes, got {len(raw)}")
        return encode_list(uint8, raw)

    def decode(self, data: bytes) -> bytes:
        values = decode_list(uint8, data)
        if len(values) != HASH_LENGTH:
            raise InvalidLength(f"hash needs {HASH_LENGTH} bytes, got {len(values)}")
        return bytes(values)


hash256 = Hash256()