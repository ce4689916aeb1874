from __future__ import annotations

import pytest

from courier.bus import EventBus
from courier.events import RecheckNeeded, ResponseReceived
from courier.types import Request

pytestmark = [pytest.mark.unit]


def test_notify_response_emits_event():
    bus = EventBus()
    received: list[ResponseReceived] = []

    @bus.on(ResponseReceived)
    def handler(event: ResponseReceived) -> None:
        received.append(event)

    request = Request("OpenReport")
    bus.notify_response(request, {"reportID": 7})

    assert received == [ResponseReceived(request=request, response={"reportID": 7})]


def test_handlers_filter_by_type():
    bus = EventBus()
    responses: list = []
    bus.on(ResponseReceived)(responses.append)

    bus.notify_recheck(10.0)

    assert responses == []


def test_wildcard_handler_receives_everything():
    bus = EventBus()
    seen: list = []
    bus.on()(seen.append)

    bus.notify_recheck(10.0)
    bus.notify_response(Request("OpenReport"), None)

    assert [type(e) for e in seen] == [RecheckNeeded, ResponseReceived]


def test_clear():
    bus = EventBus()
    seen: list = []
    bus.on()(seen.append)
    bus.clear()

    bus.notify_recheck(1.0)

    assert seen == []
