"""Pending-request watchdog.

Fires a callback when a request stays in flight longer than a threshold.
It never aborts the request itself; consumers typically use it to trigger
a connectivity recheck.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from loguru import logger

from courier.constants import MAX_PENDING_TIME


class RecheckWatchdog:
    def __init__(
        self,
        on_expire: Callable[[float], None],
        timeout: float = MAX_PENDING_TIME,
    ) -> None:
        self._on_expire = on_expire
        self._timeout = timeout
        self._log = logger.bind(component="watchdog")

    @property
    def timeout(self) -> float:
        return self._timeout

    def start(self) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(self._timeout, self._expire)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()

    def _expire(self) -> None:
        self._log.debug("Request pending past {timeout}s", timeout=self._timeout)
        self._on_expire(self._timeout)
