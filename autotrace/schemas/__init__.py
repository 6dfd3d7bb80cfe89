"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    AutotraceError,
    AutotraceException,
    CanonicalizationException,
    ErrorCodes,
    MalformedRequestException,
    MerkleVerificationException,
    ResourceLimitException,
)

# Request shapes
from .requests import (
    DIGEST_REQUEST_ADAPTER,
    DigestRequest,
    HashRequest,
    MerkleRootRequest,
)

# Proof wire form
from .proof import MerkleProofDocument, ProofStep

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "AutotraceError",
    "AutotraceException",
    "CanonicalizationException",
    "ErrorCodes",
    "MalformedRequestException",
    "MerkleVerificationException",
    "ResourceLimitException",
    # Requests
    "DIGEST_REQUEST_ADAPTER",
    "DigestRequest",
    "HashRequest",
    "MerkleRootRequest",
    # Proofs
    "MerkleProofDocument",
    "ProofStep",
]
