"""
Module 06 - Merkle Proof Routes

Generate and verify inclusion proofs in their hex wire form.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from autotrace.dispatcher import OperationDispatcher
from autotrace.merkle.merkle_proofs import MerkleProver, proof_to_document, verify_proof_path
from autotrace.merkle.merkle_tree import compute_tree_depth
from autotrace_api.deps import get_dispatcher
from autotrace_api.errors import InvalidRequestError
from autotrace_api.models.requests import MerkleProofRequest, VerifyProofRequest
from autotrace_api.models.responses import MerkleProofResponse, VerifyProofResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/merkle-proof", tags=["proofs"])


@router.post("", response_model=MerkleProofResponse)
async def create_proof(
    body: MerkleProofRequest,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> MerkleProofResponse:
    """Inclusion proof for the leaf at ``index``."""
    if body.index >= len(body.leaves):
        raise InvalidRequestError(
            f"Leaf index {body.index} out of range for {len(body.leaves)} leaves",
            details={"index": body.index, "leaf_count": len(body.leaves)},
        )

    payloads = dispatcher.leaf_payloads(body.leaves)
    document = proof_to_document(MerkleProver.prove_payload(payloads, body.index))
    logger.info("Built proof for leaf %d of %d", body.index, len(payloads))

    return MerkleProofResponse(
        leaf=document.leaf,
        index=document.index,
        root=document.root,
        path=document.path,
        depth=compute_tree_depth(len(payloads)),
    )


@router.post("/verify", response_model=VerifyProofResponse)
async def verify_proof(body: VerifyProofRequest) -> VerifyProofResponse:
    """Check that ``path`` leads from ``leaf`` to ``root``."""
    return VerifyProofResponse(ok=verify_proof_path(body.leaf, body.path, body.root))
