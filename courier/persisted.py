"""Durable queue of requests awaiting retry.

Entries are compared structurally: removing a request drops every stored
entry equal to it. With a path, the queue is loaded on construction and
rewritten after each mutation. A mutation only takes effect in memory once
it has been written, and the file is replaced atomically.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from courier.types import Request

CORRUPT_SUFFIX = ".corrupt"


class PersistedRequests:
    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._log = logger.bind(component="persisted")
        self._requests: list[Request] = self._load()

    def _load(self) -> list[Request]:
        if self._path is None or not self._path.is_file():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            requests = [Request.from_dict(item) for item in raw]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            aside = self._path.with_name(self._path.name + CORRUPT_SUFFIX)
            os.replace(self._path, aside)
            self._log.error(
                "Unreadable persisted requests moved to {aside}: {error}",
                aside=str(aside), error=e,
            )
            return []
        self._log.debug("Loaded {n} persisted requests", n=len(requests))
        return requests

    def _commit(self, requests: list[Request]) -> None:
        if self._path is not None:
            payload = json.dumps([request.to_dict() for request in requests])
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_name(self._path.name + ".tmp")
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        self._requests = requests

    def save(self, requests: Iterable[Request]) -> None:
        self._commit([*self._requests, *requests])

    def remove(self, request: Request) -> None:
        remaining = [r for r in self._requests if r != request]
        if len(remaining) == len(self._requests):
            return
        self._commit(remaining)

    def get_all(self) -> list[Request]:
        return list(self._requests)

    def clear(self) -> None:
        self._commit([])

    def __len__(self) -> int:
        return len(self._requests)

    def __contains__(self, request: object) -> bool:
        return request in self._requests
