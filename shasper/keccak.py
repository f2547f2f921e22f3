"""Keccak-256 hashing."""

from __future__ import annotations

from Crypto.Hash import keccak

LENGTH = 32

KECCAK_EMPTY = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)
"""Keccak-256 of the empty input."""

KECCAK_NULL_RLP = bytes.fromhex(
    "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
)
"""Keccak-256 of the RLP encoding of an empty string."""


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of data."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"keccak256 expects bytes, got {type(data).__name__}")
    return keccak.new(digest_bits=256, data=bytes(data)).digest()