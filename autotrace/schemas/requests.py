"""
Module 01 - Schemas & Canonicalization
File: requests.py

Purpose: The two request shapes accepted by the operation dispatcher,
modelled as a tagged union discriminated on the ``op`` field:

    { "op": "hash", "payload": "<text>" }
    { "op": "merkle-root", "leaves": ["<text>", ...] }
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class HashRequest(BaseModel):
    """Digest a single text payload."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    op: Literal["hash"] = "hash"
    payload: str = Field(..., description="Text hashed as its UTF-8 bytes")


class MerkleRootRequest(BaseModel):
    """Compute the Merkle root of an ordered list of text payloads."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    op: Literal["merkle-root"] = "merkle-root"
    leaves: list[str] = Field(
        ...,
        description="Ordered leaf payloads; order determines the root",
    )


DigestRequest = Annotated[
    Union[HashRequest, MerkleRootRequest],
    Field(discriminator="op"),
]

DIGEST_REQUEST_ADAPTER: TypeAdapter[DigestRequest] = TypeAdapter(DigestRequest)
