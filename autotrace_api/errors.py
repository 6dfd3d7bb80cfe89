"""
Module 06 - API Error Handling

Maps engine exceptions and request validation failures onto the
standard error envelope: {"ok": false, "error": {code, message, details}}.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from autotrace.schemas.errors import (
    AutotraceException,
    ErrorCodes,
    MalformedRequestException,
    MerkleVerificationException,
    ResourceLimitException,
)
from autotrace_api.models.responses import ErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.MALFORMED_REQUEST,
            message=message,
            status_code=400,
            details=details,
        )


def status_for_exception(exc: AutotraceException) -> int:
    """HTTP status for an engine exception."""
    if isinstance(exc, (MalformedRequestException, MerkleVerificationException)):
        return 400
    if isinstance(exc, ResourceLimitException):
        return 413
    return 500


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def engine_error_handler(request: Request, exc: AutotraceException) -> JSONResponse:
    """Handle exceptions raised by the engine."""
    status_code = status_for_exception(exc)
    if status_code >= 500:
        logger.error("Engine error on %s: %r", request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body validation failures as malformed requests."""
    errors = [
        {
            "loc": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=ErrorCodes.MALFORMED_REQUEST,
                message="Malformed request body",
                details={"errors": errors},
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
