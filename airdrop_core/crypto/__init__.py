"""
Core cryptographic utilities.

Keccak-256 hashing, the sorted-pair rule, and hex helpers.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    keccak256_text,
    sort_pair,
    hash_pair,
    to_hex,
    from_hex,
    digest_from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "keccak256_text",
    "sort_pair",
    "hash_pair",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
