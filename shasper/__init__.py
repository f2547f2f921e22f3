"""SSZ codec, Keccak-256 hashing, test-vector descriptions and an in-memory Casper FFG model."""

__version__ = "0.1.0"