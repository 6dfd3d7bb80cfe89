"""
Module 06 - Digest Routes

Expose the dispatcher over HTTP. Responses are a single text line holding
the 64-character lowercase hex digest.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from autotrace.dispatcher import OperationDispatcher
from autotrace.schemas.requests import HashRequest, MerkleRootRequest
from autotrace_api.deps import get_dispatcher


logger = logging.getLogger(__name__)

router = APIRouter(tags=["digest"])


def digest_line(value: str) -> PlainTextResponse:
    return PlainTextResponse(value + "\n")


@router.post("/digest", response_class=PlainTextResponse)
async def digest_document(
    request: Request,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> PlainTextResponse:
    """
    Execute one request document.

    Body is either ``{"op": "hash", "payload": ...}`` or
    ``{"op": "merkle-root", "leaves": [...]}``.
    """
    body = await request.body()
    decoded = dispatcher.decode(body)
    logger.info("POST /digest op=%s", decoded.op)
    return digest_line(dispatcher.dispatch(decoded))


@router.post("/hash", response_class=PlainTextResponse)
async def hash_payload(
    request: Request,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> PlainTextResponse:
    """Digest of ``{"payload": "<text>"}``."""
    decoded = dispatcher.decode_as(await request.body(), HashRequest)
    return digest_line(dispatcher.dispatch(decoded))


@router.post("/merkle-root", response_class=PlainTextResponse)
async def merkle_root_of_leaves(
    request: Request,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> PlainTextResponse:
    """Merkle root of ``{"leaves": ["<text>", ...]}``."""
    decoded = dispatcher.decode_as(await request.body(), MerkleRootRequest)
    logger.info("POST /merkle-root leaves=%d", len(decoded.leaves))
    return digest_line(dispatcher.dispatch(decoded))
