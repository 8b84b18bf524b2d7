"""Client-level exception types.

This module defines the errors raised by the limiter, the transport and the
document client, so callers can tell a rate-limit rejection apart from a
transport or server failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and callers.

    Fields are optional; each error fills in what it knows.
    """

    code: str
    message: str
    hint: str
    field: str
    actual_value: Any
    limit: int
    http_status: int
    retry_after: float
    url: str
    submission_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for client failures.

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
    """Raised when caller input validation fails."""


class InvalidConfigurationError(ValidationAppError):
    """Raised when limiter or client settings are out of range."""


class RateLimitExceededError(AppError):
    """Raised when the limiter denies admission for a submission."""


class TransportAppError(AppError):
    """Base for failures of the outbound HTTP call."""


class NetworkAppError(TransportAppError):
    """Raised when the request could not be sent or no response arrived."""


class ServerAppError(TransportAppError):
    """Raised when the endpoint answered with a non-2xx status."""
