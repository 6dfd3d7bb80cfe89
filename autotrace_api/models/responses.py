"""
Module 06 - API Response Models

Pydantic models for API response serialization. Digest endpoints answer
with a plain-text line and have no model here.
"""

from typing import Any

from pydantic import BaseModel, Field

from autotrace.schemas.proof import ProofStep


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "autotrace-api"
    version: str = "v1"


class MerkleProofResponse(BaseModel):
    """Response for POST /merkle-proof."""

    ok: bool = True
    leaf: str = Field(..., description="Leaf digest (hex)")
    index: int = Field(..., description="0-based leaf index")
    root: str = Field(..., description="Merkle root (hex)")
    path: list[ProofStep] = Field(default_factory=list)
    depth: int = Field(..., description="Number of tree levels, leaves to root inclusive")


class VerifyProofResponse(BaseModel):
    """Response for POST /merkle-proof/verify."""

    ok: bool = Field(..., description="Whether the path recomputes the claimed root")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
