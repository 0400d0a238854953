"""
Hashing Utilities
Keccak-256 hashing and hex helpers for the airdrop Merkle commitment.

This module provides:
- Keccak-256 hashing for raw bytes and text
- The sorted-pair rule shared by tree construction and proof verification
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Keccak-256 is the pre-standard Keccak (Ethereum flavour), NOT hashlib.sha3_256
- Text is hashed as its UTF-8 bytes, exactly as given (no trimming, no case folding)
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


DIGEST_SIZE = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def keccak256_text(text: str) -> bytes:
    """Keccak-256 of the UTF-8 encoding of ``text``."""
    return keccak256(text.encode("utf-8"))


def sort_pair(left: bytes, right: bytes) -> bytes:
    """
    Order two digests ascending as raw byte strings and concatenate them.

    This is the single comparator used both when building the tree and when
    folding a proof, so the two sides can never disagree on child order.

    Args:
        left: First digest
        right: Second digest

    Returns:
        min(left, right) + max(left, right)
    """
    if left <= right:
        return left + right
    return right + left


def hash_pair(left: bytes, right: bytes) -> bytes:
    """
    Hash two child digests with the sorted-pair rule.

    parent = keccak256(sort_pair(left, right)), so hash_pair(a, b) == hash_pair(b, a).
    """
    return keccak256(sort_pair(left, right))


def to_hex(data: bytes, prefix: bool = True) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    Args:
        data: Raw bytes
        prefix: Prepend "0x" (default True)

    Returns:
        Hex string, e.g. "0x1234abcd"

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
        >>> to_hex(bytes.fromhex("deadbeef"), prefix=False)
        'deadbeef'
    """
    encoded = data.hex()
    return "0x" + encoded if prefix else encoded


def from_hex(hex_string: str, require_prefix: bool = False) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    The "0x" prefix is optional unless ``require_prefix`` is set; proofs
    produced for on-chain claims are commonly distributed without it.

    Args:
        hex_string: Hex string, with or without 0x prefix
        require_prefix: Reject strings that do not start with "0x"

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the string is missing a required prefix, has odd length,
                    or contains invalid hex characters
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex value must be a string, got {type(hex_string).__name__}")

    has_prefix = hex_string[:2] in ("0x", "0X")
    if require_prefix and not has_prefix:
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:] if has_prefix else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """
    Decode a hex string that must hold exactly one 32-byte digest.

    Raises:
        ValueError: On malformed hex or a decoded length other than 32 bytes
    """
    digest = from_hex(hex_string)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return digest


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
