"""Centralized constants and enums for courier.

Network error strings are the exact messages surfaced by browser and mobile
network stacks; matching against them is case and punctuation sensitive.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

# =============================================================================
# Transport Error Vocabulary
# =============================================================================


class NetworkError(StrEnum):
    """Known transport error messages and markers."""

    FAILED_TO_FETCH = "Failed to fetch"
    IOS_NETWORK_CONNECTION_LOST = "The network connection was lost."
    NETWORK_REQUEST_FAILED = "Network request failed"
    FIREFOX_DOCUMENT_LOAD_ABORTED = "NetworkError when attempting to fetch resource."
    SAFARI_DOCUMENT_LOAD_ABORTED = "cancelled"
    IOS_LOAD_FAILED = "Load failed"
    REQUEST_CANCELLED = "AbortError"


ENSURE_BUGBOT: Final = "ENSURE_BUGBOT"
ABORTED_MESSAGE: Final = "The operation was aborted."


# =============================================================================
# Commands
# =============================================================================

LOG_COMMAND: Final = "Log"


# =============================================================================
# Timeouts (in seconds)
# =============================================================================

MAX_PENDING_TIME: Final = 10.0
DEFAULT_REQUEST_TIMEOUT: Final = 30.0


# =============================================================================
# Request Defaults
# =============================================================================

DEFAULT_REQUEST_TYPE: Final = "post"
DEFAULT_REFERER: Final = "courier"
DEFAULT_PLATFORM: Final = "web"
