"""Basic SSZ types: unsigned integers and booleans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shasper.codec import IncorrectSize, InvalidType, SSZType


@dataclass(frozen=True)
class Uint(SSZType):
    """Little-endian unsigned integer of the given bit width."""

    bits: int

    def __post_init__(self) -> None:
        if self.bits <= 0 or self.bits % 8:
            raise ValueError(f"bit width must be a positive multiple of 8, got {self.bits}")

    @property
    def size(self) -> int:
        return self.bits // 8

    def encode(self, value: Any) -> bytes:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidType(f"uint{self.bits} expects an int, got {type(value).__name__}")
        if not 0 <= value < 1 << self.bits:
            raise InvalidType(f"{value} is out of range for uint{self.bits}")
        return value.to_bytes(self.size, "little")

    def decode(self, data: bytes) -> int:
        if len(data) != self.size:
            raise IncorrectSize(
                f"uint{self.bits} needs {self.size} bytes, got {len(data)}"
            )
        return int.from_bytes(data, "little")


uint8 = Uint(8)
uint16 = Uint(16)
uint32 = Uint(32)
uint64 = Uint(64)
uint128 = Uint(128)


@dataclass(frozen=True)
class Boolean(SSZType):
    """A boolean stored as a single byte, 0x00 or 0x01."""

    @property
    def size(self) -> int:
        return 1

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, bool):
            raise InvalidType(f"boolean expects a bool, got {type(value).__name__}")
        return uint8.encode(1 if value else 0)

    def decode(self, data: bytes) -> bool:
        byte = uint8.decode(data)
        if byte == 0x01:
            return True
        if byte == 0x00:
            return False
        raise InvalidType(f"invalid boolean byte {byte:#04x}")


boolean = Boolean()