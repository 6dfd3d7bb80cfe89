"""
Module 02 - Hashing Utilities
Digest function and hex encoding for content addressing.

This module provides:
- SHA-256 hashing for raw bytes and text
- Canonical hashing for structured objects (via dumps_canonical)
- Lowercase hex encoding/decoding of digests

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Text is hashed as its UTF-8 bytes; hex-looking or numeric-looking
  strings are never decoded first
- Hex output is lowercase, two characters per byte, no prefix
"""
from __future__ import annotations

import hashlib
from typing import Any

from autotrace.schemas.canonical import dumps_canonical


# Size of every digest produced by this module
DIGEST_SIZE: int = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash (may be empty)

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"abc").hex()
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    return hashlib.sha256(data).digest()


def digest(data: bytes) -> bytes:
    """Alias for sha256(): the engine's single digest function."""
    return sha256(data)


def hash_bytes(data: bytes) -> bytes:
    """Alias for sha256()."""
    return sha256(data)


def hash_text(text: str) -> bytes:
    """
    Hash the UTF-8 bytes of a text payload.

    Raises:
        UnicodeEncodeError: If the text holds lone surrogates
    """
    return sha256(text.encode("utf-8"))


def hash_canonical(obj: Any) -> bytes:
    """
    Hash an object using canonical JSON serialization.

    Rule: leaf = sha256(dumps_canonical(obj).encode("utf-8"))

    Dicts hash identically regardless of key insertion order.

    Raises:
        CanonicalizationException: If the object cannot be serialized
    """
    canonical_json = dumps_canonical(obj)
    return sha256(canonical_json.encode("utf-8"))


def to_hex(data: bytes) -> str:
    """
    Render bytes as lowercase hexadecimal, most significant byte first.

    A 32-byte digest always renders as exactly 64 characters.

    Example:
        >>> to_hex(bytes.fromhex("DEADBEEF"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Decode a hex string produced by to_hex().

    Upper-case input is accepted. A leading "0x" is NOT accepted.

    Raises:
        ValueError: If the string has odd length or non-hex characters
    """
    if len(hex_string) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_string)}"
        )
    try:
        return bytes.fromhex(hex_string)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: sha256(left || right).

    Order is significant.
    """
    return sha256(left + right)


__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "digest",
    "hash_bytes",
    "hash_text",
    "hash_canonical",
    "to_hex",
    "from_hex",
    "hash_concat",
]
