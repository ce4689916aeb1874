"""Request description passed through the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from courier.constants import DEFAULT_REQUEST_TYPE

type RequestData = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Request:
    """An API request, already authenticated and serialized.

    Attributes:
        command: Identifier of the API operation.
        data: Request parameters. ``persist`` marks the request as tracked
            by the persisted-request queue.
        type: Transport method, e.g. ``"post"`` or ``"get"``.
        should_use_secure: Whether the secure endpoint must be used.

    Requests compare structurally and are unhashable, since ``data`` is a
    mutable mapping.
    """

    command: str
    data: RequestData = field(default_factory=dict)
    type: str = DEFAULT_REQUEST_TYPE
    should_use_secure: bool = False

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("Request command must be a non-empty string")

    @property
    def persist(self) -> bool:
        return bool(self.data.get("persist", False))

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "data": dict(self.data),
            "type": self.type,
            "shouldUseSecure": self.should_use_secure,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Request:
        return cls(
            command=raw["command"],
            data=dict(raw.get("data") or {}),
            type=raw.get("type", DEFAULT_REQUEST_TYPE),
            should_use_secure=bool(raw.get("shouldUseSecure", False)),
        )
