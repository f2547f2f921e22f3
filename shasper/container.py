"""Heterogeneous SSZ containers made of named, typed fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from shasper.codec import InvalidType, SSZType
from shasper.series import ItemKind, Series, SeriesItem
from shasper.size import size_sum


@dataclass(frozen=True)
class Field:
    """A named member of a container and its type."""

    name: str
    type: SSZType


def _kind_of(typ: SSZType) -> ItemKind:
    return ItemKind.FIXED if typ.is_fixed() else ItemKind.VARIABLE


@dataclass(frozen=True)
class Container(SSZType):
    """An ordered set of fields; values are mappings or objects with those attributes.

    Decoding yields a dict, or ``factory(**fields)`` when a factory is given.
    """

    fields: Sequence[Field]
    factory: Optional[Callable[..., Any]] = field(default=None, compare=False)

    @property
    def size(self) -> Optional[int]:
        if not self.fields:
            return 0
        return size_sum(*(f.type.size for f in self.fields))

    @staticmethod
    def _get(value: Any, name: str) -> Any:
        if isinstance(value, Mapping):
            try:
                return value[name]
            except KeyError:
                raise InvalidType(f"missing field {name!r}") from None
        try:
            return getattr(value, name)
        except AttributeError:
            raise InvalidType(f"missing field {name!r}") from None

    def encode(self, value: Any) -> bytes:
        return Series(
            [
                SeriesItem(_kind_of(f.type), f.type.encode(self._get(value, f.name)))
                for f in self.fields
            ]
        ).encode()

    def decode(self, data: bytes) -> Any:
        series = Series.decode_vector(data, [f.type.size for f in self.fields])
        values = {}
        for f, item in zip(self.fields, series.items):
            if item.kind is not _kind_of(f.type):
                raise InvalidType(f"field {f.name!r} has the wrong item kind")
            values[f.name] = f.type.decode(item.data)
        if self.factory is not None:
            return self.factory(**values)
        return values