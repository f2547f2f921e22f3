"""Variable-sized SSZ types: lists and bitlists."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from shasper.codec import IncorrectSize, InvalidType, ListTooLarge, SSZType
from shasper.lists import decode_list, encode_list


def _check_limit(count: int, max_length: Optional[int]) -> None:
    if max_length is not None and count > max_length:
        raise ListTooLarge(f"{count} elements exceed the maximum of {max_length}")


@dataclass(frozen=True)
class List(SSZType):
    """A list of element_type values, optionally bounded by max_length."""

    element_type: SSZType
    max_length: Optional[int] = None

    @property
    def size(self) -> None:
        return None

    def encode(self, value: Sequence[Any]) -> bytes:
        return encode_list(self.element_type, value)

    def decode(self, data: bytes) -> list[Any]:
        values = decode_list(self.element_type, data)
        _check_limit(len(values), self.max_length)
        return values


@dataclass(frozen=True)
class Bitlist(SSZType):
    """A packed list of booleans terminated by a sentinel bit."""

    max_length: Optional[int] = None

    @property
    def size(self) -> None:
        return None

    def encode(self, value: Sequence[bool]) -> bytes:
        bits = list(value)
        out = bytearray((len(bits) + 1 + 7) // 8)
        for i, bit in enumerate(bits):
            if bit:
                out[i // 8] |= 1 << (i % 8)
        out[len(bits) // 8] |= 1 << (len(bits) % 8)
        return bytes(out)

    def decode(self, data: bytes) -> list[bool]:
        data = bytes(data)
        if not data:
            raise IncorrectSize("a bitlist needs at least one byte")
        last = data[-1]
        if last == 0:
            raise InvalidType("bitlist has no sentinel bit")
        length = (len(data) - 1) * 8 + last.bit_length() - 1
        bits = [bool(data[i // 8] & (1 << (i % 8))) for i in range(length)]
        _check_limit(len(bits), self.max_length)
        return bits