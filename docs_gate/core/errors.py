"""Exception hierarchy for the documentation gate.

Denials raised by the gate carry the HTTP status they map to, so any
framework adapter can render them without a lookup table.
"""

from __future__ import annotations

from typing import Any

from docs_gate.constants import (
    REASON_ADDRESS_NOT_ALLOWED,
    REASON_DISABLED,
    REASON_TOKEN_REJECTED,
)


class DocsGateError(Exception):
    """Base exception for all docs gate errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses.

        Returns:
            Dictionary representation of the error
        """
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(DocsGateError):
    """Raised when strict validation rejects part of a policy."""

    pass


class AccessDeniedError(DocsGateError):
    """Raised when a request may not reach the documentation handler.

    Subclasses pin the reason string and status code. ``details`` are kept
    for logging and never rendered into the response body.
    """

    status_code: int = 401
    reason: str = "access denied"

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(self.reason, details)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class GateDisabledError(AccessDeniedError):
    """The gate is switched off; every request is refused."""

    status_code = 403
    reason = REASON_DISABLED


class AddressNotAllowedError(AccessDeniedError):
    """Caller address is malformed or outside the allow-list."""

    status_code = 401
    reason = REASON_ADDRESS_NOT_ALLOWED


class TokenRejectedError(AccessDeniedError):
    """Token header is missing or does not match."""

    status_code = 401
    reason = REASON_TOKEN_REJECTED
