"""
Core cryptographic utilities.

Module 02 provides the digest function and its hex encoding.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    digest,
    hash_bytes,
    hash_text,
    hash_canonical,
    to_hex,
    from_hex,
    hash_concat,
)

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
