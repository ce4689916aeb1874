"""Events emitted by the request pipeline.

Use pattern matching to handle events in consumers:

    match event:
        case ResponseReceived(request=req, response=resp):
            print(f"{req.command} -> {resp}")
        case RecheckNeeded(pending_for=seconds):
            print(f"request pending for {seconds}s, rechecking connection")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from courier.types import Request


@dataclass(frozen=True, slots=True)
class ResponseReceived:
    """Transport returned a response for ``request``."""

    request: Request
    response: Any


@dataclass(frozen=True, slots=True)
class RecheckNeeded:
    """A request has been pending long enough to re-verify connectivity."""

    pending_for: float


type CourierEvent = ResponseReceived | RecheckNeeded
