"""Core abstractions and errors for SimpleSerialize (SSZ) encoding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

LENGTH_OFFSET_SIZE = 4
"""Width in bytes of the offsets that stand in for variable-sized items."""


class SSZError(ValueError):
    """Base error for encoding and decoding failures."""


class IncorrectSize(SSZError):
    """The input has the wrong number of bytes."""


class InvalidType(SSZError):
    """The input does not describe a value of the expected type."""


class InvalidLength(SSZError):
    """A fixed-length vector has the wrong number of elements."""


class ListTooLarge(SSZError):
    """A list holds more elements than its maximum allows."""


class SSZType(ABC):
    """A serialisable type: knows its size and how to encode and decode values."""

    @property
    @abstractmethod
    def size(self) -> int | None:
        """Encoded size in bytes, or None when the type is variable-sized."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode a value of this type into bytes."""

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Decode bytes into a value of this type."""

    def is_fixed(self) -> bool:
        """Whether values of this type always encode to the same length."""
        return self.size is not None

    def is_variable(self) -> bool:
        """Whether values of this type encode to varying lengths."""
        return self.size is None