"""Sequences of encoded items laid out with offsets for variable-sized parts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from shasper.codec import LENGTH_OFFSET_SIZE, IncorrectSize, InvalidLength


class ItemKind(Enum):
    """Whether an item in a series is fixed-sized or variable-sized."""

    FIXED = "fixed"
    VARIABLE = "variable"


@dataclass(frozen=True)
class SeriesItem:
    """One encoded item of a series."""

    kind: ItemKind
    data: bytes

    @classmethod
    def fixed(cls, data: bytes) -> SeriesItem:
        return cls(ItemKind.FIXED, bytes(data))

    @classmethod
    def variable(cls, data: bytes) -> SeriesItem:
        return cls(ItemKind.VARIABLE, bytes(data))


def _slice(value: bytes, start: int, end: int) -> bytes:
    if start > end or end > len(value):
        raise IncorrectSize(
            f"range {start}..{end} is outside input of {len(value)} bytes"
        )
    return value[start:end]


def _encode_offset(offset: int) -> bytes:
    if offset >= 1 << (8 * LENGTH_OFFSET_SIZE):
        raise IncorrectSize(f"offset {offset} does not fit in a length offset")
    return offset.to_bytes(LENGTH_OFFSET_SIZE, "little")


def _decode_offset(data: bytes) -> int:
    if len(data) != LENGTH_OFFSET_SIZE:
        raise IncorrectSize("truncated length offset")
    return int.from_bytes(data, "little")


@dataclass
class Series:
    """An ordered series of items, fixed parts first and variable parts after."""

    items: list[SeriesItem] = field(default_factory=list)

    def encode(self) -> bytes:
        """Encode the series: fixed parts and offsets, then variable parts."""
        fixed_parts_size = sum(
            len(item.data) if item.kind is ItemKind.FIXED else LENGTH_OFFSET_SIZE
            for item in self.items
        )
        head = bytearray()
        tail = bytearray()
        for item in self.items:
            if item.kind is ItemKind.FIXED:
                head += item.data
            else:
                head += _encode_offset(fixed_parts_size + len(tail))
                tail += item.data
        return bytes(head + tail)

    @classmethod
    def decode_vector(
        cls, value: bytes, types: Sequence[Optional[int]]
    ) -> Series:
        """Split bytes into one item per entry of types (a size, or None for variable)."""
        value = bytes(value)
        parts: list[Optional[bytes]] = []
        offsets: list[int] = []
        pos = 0
        for item_size in types:
            if item_size is not None:
                parts.append(_slice(value, pos, pos + item_size))
                pos += item_size
            else:
                offsets.append(
                    _decode_offset(_slice(value, pos, pos + LENGTH_OFFSET_SIZE))
                )
                parts.append(None)
                pos += LENGTH_OFFSET_SIZE

        spans = iter(zip(offsets, offsets[1:] + [len(value)]))
        items = [
            SeriesItem.fixed(part)
            if part is not None
            else SeriesItem.variable(_slice(value, *next(spans)))
            for part in parts
        ]
        return cls(items)

    @classmethod
    def decode_list(cls, value: bytes, item_size: Optional[int]) -> Series:
        """Split bytes into items all of item_size bytes, or all variable if None."""
        value = bytes(value)
        if item_size is not None:
            if item_size <= 0:
                raise InvalidLength("list items must have a positive size")
            count = len(value) // item_size
            return cls(
                [
                    SeriesItem.fixed(value[i * item_size:(i + 1) * item_size])
                    for i in range(count)
                ]
            )

        offsets: list[int] = []
        pos = 0
        while pos + LENGTH_OFFSET_SIZE <= len(value) and (
            not offsets or pos + LENGTH_OFFSET_SIZE <= offsets[0]
        ):
            offsets.append(_decode_offset(value[pos:pos + LENGTH_OFFSET_SIZE]))
            pos += LENGTH_OFFSET_SIZE

        bounds = offsets[1:] + [len(value)]
        return cls(
            [
                SeriesItem.variable(_slice(value, start, end))
                for start, end in zip(offsets, bounds)
            ]
        )