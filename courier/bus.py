"""Minimal event bus for courier events."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger

from courier.events import CourierEvent, RecheckNeeded, ResponseReceived
from courier.types import Request

Handler = Callable[..., Any]


class EventBus:
    """Minimal event bus for courier events.

    Also serves as the pipeline's response notifier.
    """

    def __init__(self) -> None:
        self._handlers: list[tuple[tuple[type, ...], Handler]] = []
        self._log = logger.bind(component="bus")

    def on[F: Handler](self, *event_types: type) -> Callable[[F], F]:
        """Register handler. Empty event_types = wildcard."""

        def decorator(fn: F) -> F:
            self._handlers.append((event_types, fn))
            return fn

        return decorator

    def emit(self, event: CourierEvent) -> None:
        for types, handler in self._handlers:
            if not types or isinstance(event, types):
                handler(event)

    def notify_response(self, request: Request, response: Any) -> None:
        self.emit(ResponseReceived(request=request, response=response))

    def notify_recheck(self, pending_for: float) -> None:
        self._log.debug("Request pending for {seconds}s", seconds=pending_for)
        self.emit(RecheckNeeded(pending_for=pending_for))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
