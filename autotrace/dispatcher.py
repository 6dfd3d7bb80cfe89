"""
Module 04 - Operation Dispatcher

Decodes a single request document into one of the two request variants and
runs the matching engine operation, returning the digest as lowercase hex.

    { "op": "hash", "payload": "<text>" }          -> to_hex(sha256(payload))
    { "op": "merkle-root", "leaves": [...] }       -> to_hex(merkle_root(leaves))

Text is fed to the digest function as its UTF-8 bytes. A document that does
not match either shape raises MalformedRequestException before any hashing
takes place; nothing is computed for it.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from autotrace.config.runtime import LimitsConfig, RuntimeConfig, get_default_config
from autotrace.crypto.hashing import sha256, to_hex
from autotrace.merkle.merkle_tree import merkle_root
from autotrace.schemas.errors import MalformedRequestException, ResourceLimitException
from autotrace.schemas.requests import (
    DIGEST_REQUEST_ADAPTER,
    DigestRequest,
    HashRequest,
    MerkleRootRequest,
)


logger = logging.getLogger(__name__)

RequestDocument = Union[str, bytes, bytearray, dict]
RequestT = TypeVar("RequestT", HashRequest, MerkleRootRequest)


def _summarize_validation_error(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors(include_url=False)
    ]


def _encode_text(text: str, field_path: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedRequestException(
            f"Text at {field_path} is not encodable as UTF-8",
            field_path=field_path,
        ) from e


class OperationDispatcher:
    """
    Boundary between structured request documents and the engine.

    Stateless apart from its configuration, so one instance may serve any
    number of threads.
    """

    def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
        self.config = config or get_default_config()

    @property
    def limits(self) -> LimitsConfig:
        return self.config.limits

    def decode(self, document: RequestDocument) -> DigestRequest:
        """
        Decode a request document (JSON text, JSON bytes, or a parsed dict).

        Raises:
            MalformedRequestException: Invalid JSON, unknown op, missing or
                extra fields, or wrong value types
            ResourceLimitException: Raw document larger than max_request_bytes
        """
        if isinstance(document, (HashRequest, MerkleRootRequest)):
            return document
        return self._validate(document, DIGEST_REQUEST_ADAPTER)

    def decode_as(self, document: RequestDocument, request_type: type[RequestT]) -> RequestT:
        """
        Decode a document that must be one specific variant.

        The ``op`` field may be omitted; when present it must name the variant.
        """
        return self._validate(document, TypeAdapter(request_type))

    def _validate(self, document: RequestDocument, adapter: TypeAdapter) -> Any:
        if isinstance(document, (str, bytes, bytearray)):
            self._check_document_size(document)
            validate = adapter.validate_json
        elif isinstance(document, dict):
            validate = adapter.validate_python
        else:
            raise MalformedRequestException(
                f"Request document must be a JSON object, got {type(document).__name__}",
            )

        try:
            return validate(document)
        except ValidationError as e:
            raise MalformedRequestException(
                "Malformed request document",
                details={"errors": _summarize_validation_error(e)},
            ) from e

    def _check_document_size(self, document: Union[str, bytes, bytearray]) -> None:
        max_request = self.limits.max_request_bytes
        if max_request is None:
            return
        if isinstance(document, str):
            size = len(document.encode("utf-8", "surrogatepass"))
        else:
            size = len(document)
        if size > max_request:
            raise ResourceLimitException(
                f"Request document is {size} bytes, limit is {max_request}",
                limit_name="max_request_bytes",
                limit=max_request,
                actual=size,
            )

    def _check_payload_size(self, payload: bytes, field_path: str) -> None:
        max_payload = self.limits.max_payload_bytes
        if max_payload is not None and len(payload) > max_payload:
            raise ResourceLimitException(
                f"Payload at {field_path} is {len(payload)} bytes, limit is {max_payload}",
                limit_name="max_payload_bytes",
                limit=max_payload,
                actual=len(payload),
            )

    def leaf_payloads(self, leaves: list[str]) -> list[bytes]:
        """
        UTF-8 encode text leaves, enforcing the leaf count and payload limits.

        All leaves are checked before any of them is hashed.
        """
        max_leaves = self.limits.max_leaves
        if max_leaves is not None and len(leaves) > max_leaves:
            raise ResourceLimitException(
                f"Request has {len(leaves)} leaves, limit is {max_leaves}",
                limit_name="max_leaves",
                limit=max_leaves,
                actual=len(leaves),
            )
        payloads: list[bytes] = []
        for i, leaf in enumerate(leaves):
            payload = _encode_text(leaf, f"leaves[{i}]")
            self._check_payload_size(payload, f"leaves[{i}]")
            payloads.append(payload)
        return payloads

    def dispatch(self, request: DigestRequest) -> str:
        """
        Run the operation named by a decoded request.

        Returns:
            64-character lowercase hex digest
        """
        if isinstance(request, HashRequest):
            payload = _encode_text(request.payload, "payload")
            self._check_payload_size(payload, "payload")
            logger.debug("Hashing payload of %d bytes", len(payload))
            return to_hex(sha256(payload))

        if isinstance(request, MerkleRootRequest):
            payloads = self.leaf_payloads(request.leaves)
            logger.debug("Computing merkle root over %d leaves", len(payloads))
            return to_hex(merkle_root(payloads))

        raise MalformedRequestException(
            f"Unsupported request type: {type(request).__name__}",
        )

    def handle(self, document: RequestDocument) -> str:
        """Decode then dispatch a request document."""
        return self.dispatch(self.decode(document))


def decode_request(document: RequestDocument) -> DigestRequest:
    """Decode a request document using the default configuration."""
    return OperationDispatcher().decode(document)


def dispatch(request: DigestRequest) -> str:
    """Run a decoded request using the default configuration."""
    return OperationDispatcher().dispatch(request)


def handle(document: RequestDocument) -> str:
    """Decode and run a request document using the default configuration."""
    return OperationDispatcher().handle(document)


__all__ = [
    "OperationDispatcher",
    "RequestDocument",
    "decode_request",
    "dispatch",
    "handle",
]
