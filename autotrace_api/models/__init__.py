"""API request and response models."""

from autotrace_api.models.requests import MerkleProofRequest, VerifyProofRequest
from autotrace_api.models.responses import (
    HealthResponse,
    MerkleProofResponse,
    VerifyProofResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "MerkleProofRequest",
    "VerifyProofRequest",
    "HealthResponse",
    "MerkleProofResponse",
    "VerifyProofResponse",
    "ErrorDetail",
    "ErrorResponse",
]
