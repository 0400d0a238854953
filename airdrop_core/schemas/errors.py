"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the airdrop commitment.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input & Validation Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_ENTITLEMENT = "INVALID_ENTITLEMENT"
    INVALID_HEX = "INVALID_HEX"

    # Merkle & Commitment Errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Snapshot Errors
    SNAPSHOT_PARSE_ERROR = "SNAPSHOT_PARSE_ERROR"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used when errors are reported rather than raised, e.g. the per-claim
    failures collected while checking a claims manifest.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
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

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raised exception."""
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop commitment errors.

    Carries structured error information and can be converted
    to/from AirdropError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(AirdropException):
    """Raised when a commitment is built from zero entitlement records."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle commitment from zero records",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class NotFoundError(AirdropException):
    """Raised when a proof is requested for a record that is not in the tree."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        amount: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address is not None:
            full_details["address"] = address
        if amount is not None:
            full_details["amount"] = amount
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class InvalidEntitlementException(AirdropException):
    """Raised when an entitlement record fails validation."""

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
            code=ErrorCodes.INVALID_ENTITLEMENT,
            details=full_details,
            retryable=False,
        )


class SnapshotParseError(AirdropException):
    """Raised when a delegation payload cannot be parsed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.SNAPSHOT_PARSE_ERROR,
            details=full_details,
            retryable=False,
        )


class ConfigException(AirdropException):
    """Raised when runtime configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )
