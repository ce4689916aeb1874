from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from courier.processor import RequestProcessor
from courier.types import Request, RequestData


class Timeline:
    """Shared record of collaborator calls, in order."""

    def __init__(self) -> None:
        self.calls: list[str] = []


class FakeTransport:
    def __init__(self, timeline: Timeline) -> None:
        self._timeline = timeline
        self.response: Any = None
        self.error: BaseException | None = None
        self.sent: list[tuple[str, RequestData, str, bool]] = []

    async def send(
        self, command: str, parameters: RequestData, type: str, use_secure: bool,
    ) -> Any:
        self._timeline.calls.append("send")
        self.sent.append((command, parameters, type, use_secure))
        if self.error is not None:
            raise self.error
        return self.response


class FakeQueue:
    def __init__(self, timeline: Timeline) -> None:
        self._timeline = timeline
        self.removed: list[Request] = []

    def remove(self, request: Request) -> None:
        self._timeline.calls.append("remove")
        self.removed.append(request)


class FakeWatchdog:
    def __init__(self, timeline: Timeline) -> None:
        self._timeline = timeline
        self.started = 0
        self.cancelled: list[object] = []

    def start(self) -> object:
        self._timeline.calls.append("start")
        self.started += 1
        return f"handle-{self.started}"

    def cancel(self, handle: object) -> None:
        self._timeline.calls.append("cancel")
        self.cancelled.append(handle)


class FakeLog:
    def __init__(self) -> None:
        self.entries: list[tuple[str, str, Mapping[str, Any] | None]] = []

    def info(
        self, message: str, send_now: bool = False, context: Mapping[str, Any] | None = None,
    ) -> None:
        self.entries.append(("info", message, context))

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self.entries.append(("warn", message, context))

    def alert(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self.entries.append(("alert", message, context))

    def at(self, level: str) -> list[tuple[str, Mapping[str, Any] | None]]:
        return [(m, c) for lvl, m, c in self.entries if lvl == level]


class FakeNotifier:
    def __init__(self, timeline: Timeline) -> None:
        self._timeline = timeline
        self.notified: list[tuple[Request, Any]] = []

    def notify_response(self, request: Request, response: Any) -> None:
        self._timeline.calls.append("notify")
        self.notified.append((request, response))


def prepare(command: str, data: RequestData) -> RequestData:
    return {**data, "returnValueList": "reportStuff"}


@pytest.fixture
def timeline() -> Timeline:
    return Timeline()


@pytest.fixture
def transport(timeline: Timeline) -> FakeTransport:
    return FakeTransport(timeline)


@pytest.fixture
def queue(timeline: Timeline) -> FakeQueue:
    return FakeQueue(timeline)


@pytest.fixture
def watchdog(timeline: Timeline) -> FakeWatchdog:
    return FakeWatchdog(timeline)


@pytest.fixture
def log() -> FakeLog:
    return FakeLog()


@pytest.fixture
def notifier(timeline: Timeline) -> FakeNotifier:
    return FakeNotifier(timeline)


@pytest.fixture
def processor(
    transport: FakeTransport,
    queue: FakeQueue,
    watchdog: FakeWatchdog,
    log: FakeLog,
    notifier: FakeNotifier,
) -> RequestProcessor:
    return RequestProcessor(
        transport,
        prepare=prepare,
        queue=queue,
        watchdog=watchdog,
        log=log,
        notifier=notifier,
    )


@pytest.fixture
def persisted_request() -> Request:
    return Request(command="OpenReport", data={"persist": True}, type="post")
