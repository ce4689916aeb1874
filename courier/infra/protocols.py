"""Protocol definitions for the request pipeline collaborators.

The dispatcher depends only on these structural contracts, so any
object with matching methods can be injected (including test fakes).
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, runtime_checkable

from courier.types import Request, RequestData

# =============================================================================
# Transport Protocol
# =============================================================================


@runtime_checkable
class Transport(Protocol):
    """Sends a command over the network.

    Usage:
        response = await transport.send("OpenReport", params, "post", False)
    """

    async def send(
        self,
        command: str,
        parameters: RequestData,
        type: str,
        use_secure: bool,
    ) -> Any:
        """Send the request and return the decoded response.

        Raises:
            TransportError: If the request does not complete.
        """
        ...


# =============================================================================
# Parameter Preparation Protocol
# =============================================================================


@runtime_checkable
class ParameterPreparer(Protocol):
    """Derives final request parameters. May return an awaitable."""

    def __call__(
        self, command: str, data: RequestData,
    ) -> RequestData | Awaitable[RequestData]: ...


# =============================================================================
# Persisted Queue Protocol
# =============================================================================


@runtime_checkable
class PersistedQueue(Protocol):
    def remove(self, request: Request) -> None:
        """Remove ``request``. Removing an absent request is a no-op."""
        ...


# =============================================================================
# Watchdog Protocol
# =============================================================================


@runtime_checkable
class Watchdog[H](Protocol):
    """Timer signalling that a request has been pending unusually long."""

    def start(self) -> H: ...
    def cancel(self, handle: H) -> None: ...


# =============================================================================
# Logging Protocol
# =============================================================================


@runtime_checkable
class NetworkLog(Protocol):
    def info(
        self,
        message: str,
        send_now: bool = False,
        context: Mapping[str, Any] | None = None,
    ) -> None: ...

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None: ...

    def alert(self, message: str, context: Mapping[str, Any] | None = None) -> None: ...


# =============================================================================
# Notification Protocol
# =============================================================================


@runtime_checkable
class ResponseNotifier(Protocol):
    def notify_response(self, request: Request, response: Any) -> None: ...
