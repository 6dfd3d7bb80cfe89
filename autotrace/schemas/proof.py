"""
Module 01 - Schemas & Canonicalization
File: proof.py

Purpose: Wire form of a Merkle inclusion proof. Digests travel as
lowercase hex; each path step names the side its sibling sits on.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProofStep(BaseModel):
    """One step of a proof path, bottom-up."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pos: Literal["L", "R"] = Field(
        ...,
        description="Side of the sibling: L means sibling || current, R means current || sibling",
    )
    hash: str = Field(..., description="Sibling digest as hex", min_length=64, max_length=64)


class MerkleProofDocument(BaseModel):
    """Serializable inclusion proof for one leaf."""

    model_config = ConfigDict(extra="forbid")

    leaf: str = Field(..., description="Leaf digest as hex", min_length=64, max_length=64)
    index: int = Field(..., ge=0, description="0-based position of the leaf")
    root: str = Field(..., description="Merkle root as hex", min_length=64, max_length=64)
    path: list[ProofStep] = Field(default_factory=list)
