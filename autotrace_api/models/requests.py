"""
Module 06 - API Request Models

Pydantic models for the proof endpoints. The digest endpoints accept the
engine's own request documents (see autotrace.schemas.requests).
"""

from pydantic import BaseModel, ConfigDict, Field

from autotrace.schemas.proof import ProofStep


class MerkleProofRequest(BaseModel):
    """Request body for POST /merkle-proof."""

    model_config = ConfigDict(extra="forbid", strict=True)

    leaves: list[str] = Field(
        ...,
        min_length=1,
        description="Ordered leaf payloads (text, hashed as UTF-8)",
    )
    index: int = Field(..., ge=0, description="0-based index of the leaf to prove")


class VerifyProofRequest(BaseModel):
    """Request body for POST /merkle-proof/verify."""

    model_config = ConfigDict(extra="forbid")

    leaf: str = Field(..., description="Leaf digest (hex)", min_length=64, max_length=64)
    path: list[ProofStep] = Field(default_factory=list)
    root: str = Field(..., description="Claimed Merkle root (hex)", min_length=64, max_length=64)
