"""Encoding and decoding of homogeneous sequences of SSZ values."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from shasper.codec import InvalidType, SSZType
from shasper.series import ItemKind, Series, SeriesItem


def encode_list(element_type: SSZType, values: Iterable[Any]) -> bytes:
    """Encode values of element_type as a series."""
    kind = ItemKind.FIXED if element_type.is_fixed() else ItemKind.VARIABLE
    return Series(
        [SeriesItem(kind, element_type.encode(value)) for value in values]
    ).encode()


def decode_list(element_type: SSZType, data: bytes) -> list[Any]:
    """Decode a series of element_type values from bytes."""
    series = Series.decode_list(data, element_type.size)
    expected = ItemKind.FIXED if element_type.is_fixed() else ItemKind.VARIABLE
    result = []
    for item in series.items:
        if item.kind is not expected:
            raise InvalidType("series item kind does not match element type")
        result.append(element_type.decode(item.data))
    return result