"""Custom exception hierarchy for courier.

All courier-specific exceptions inherit from CourierError, enabling
callers to catch all courier exceptions with a single except clause.
"""

from __future__ import annotations

from courier.constants import NetworkError


class CourierError(Exception):
    """Base exception for all courier errors."""


class TransportError(CourierError):
    """Raised by a transport when a request does not complete.

    Only ``message`` and ``name`` take part in failure classification;
    ``status`` is informational.
    """

    def __init__(
        self,
        message: str = "",
        *,
        name: str | None = None,
        status: int | None = None,
    ) -> None:
        self.message = message
        self.name = name
        self.status = status
        super().__init__(message)


class FailedToFetchError(TransportError):
    """Normalized retryable network failure."""

    def __init__(self) -> None:
        super().__init__(NetworkError.FAILED_TO_FETCH.value)


class ConfigurationError(CourierError):
    """Raised for invalid configuration or missing required settings."""
