"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the Autotrace engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Request decoding
    MALFORMED_REQUEST = "MALFORMED_REQUEST"

    # Resource exhaustion
    RESOURCE_LIMIT_EXCEEDED = "RESOURCE_LIMIT_EXCEEDED"

    # Serialization
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Merkle proofs
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AutotraceError(BaseModel):
    """
    Base error model for structured error communication.

    Used at the CLI and HTTP boundaries to serialize a failure without
    re-raising it.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_REQUEST],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AutotraceException":
        """Convert this error model to a raised exception."""
        return AutotraceException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AutotraceException(Exception):
    """
    Base exception for all Autotrace errors.

    Carries structured error information and can be converted to/from
    AutotraceError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "AUTOTRACE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AutotraceError:
        """Convert this exception to an AutotraceError model."""
        return AutotraceError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedRequestException(AutotraceException):
    """Raised when a request document matches neither request shape."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_REQUEST,
            details=full_details,
            retryable=False,
        )


class ResourceLimitException(AutotraceException):
    """Raised when a request exceeds a configured size limit."""

    def __init__(
        self,
        message: str,
        limit_name: str | None = None,
        limit: int | None = None,
        actual: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if limit_name:
            details["limit_name"] = limit_name
        if limit is not None:
            details["limit"] = limit
        if actual is not None:
            details["actual"] = actual
        super().__init__(
            message=message,
            code=ErrorCodes.RESOURCE_LIMIT_EXCEEDED,
            details=details,
            retryable=False,
        )


class CanonicalizationException(AutotraceException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class MerkleVerificationException(AutotraceException):
    """Exception raised when a Merkle proof document cannot be checked."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=details,
            retryable=False,
        )
