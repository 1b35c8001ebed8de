"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    http_status: int
    body: str
    url: str
    error_type: str
    submission_id: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class NotFoundAppError(AppError):
    """Raised when a requested resource does not exist."""


class LimiterClosedError(AppError):
    """Raised when submitting to a rate limiter that has been closed."""


class DispatchAppError(AppError):
    """Base class for failures of a single dispatch attempt."""


class EncodingAppError(DispatchAppError):
    """Raised when a request payload cannot be serialized."""


class TransportAppError(DispatchAppError):
    """Raised when the send could not complete (connection, timeout, protocol)."""


class NonSuccessStatusAppError(DispatchAppError):
    """Raised when the remote API answers with a non-success status."""

    @property
    def status_code(self) -> int | None:
        return (self.details or {}).get("http_status")

    @property
    def body(self) -> str | None:
        return (self.details or {}).get("body")
