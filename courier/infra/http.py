from __future__ import annotations

import asyncio
import json
from typing import Any

import aiohttp
from loguru import logger

from courier.constants import ABORTED_MESSAGE, DEFAULT_REQUEST_TIMEOUT, NetworkError
from courier.core.exceptions import TransportError
from courier.types import RequestData

# ─── Encoding ────────────────────────────────────────────────────────


def encode_parameters(parameters: RequestData) -> dict[str, str]:
    """Flatten parameters into form/query fields. None values are dropped."""
    fields: dict[str, str] = {}
    for key, value in parameters.items():
        match value:
            case None:
                continue
            case bool():
                fields[key] = "true" if value else "false"
            case dict() | list() | tuple():
                fields[key] = json.dumps(value)
            case _:
                fields[key] = str(value)
    return fields


# ─── Transport ───────────────────────────────────────────────────────


class HttpTransport:
    """aiohttp-backed transport.

    Every request goes to ``{base_url}/api?command=<command>``. Connection,
    DNS, SSL and timeout failures all surface as ``"Failed to fetch"``, the
    same message a browser fetch reports for them.
    """

    def __init__(
        self,
        base_url: str,
        secure_base_url: str | None = None,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._secure_base_url = (secure_base_url or base_url).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._default_headers = default_headers or {}
        self._session: aiohttp.ClientSession | None = None
        self._pending: set[asyncio.Task[Any]] = set()
        self._log = logger.bind(component="http")

    def _url(self, use_secure: bool) -> str:
        base = self._secure_base_url if use_secure else self._base_url
        return f"{base}/api"

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, headers=self._default_headers,
            )
        return self._session

    async def send(
        self,
        command: str,
        parameters: RequestData,
        type: str,
        use_secure: bool,
    ) -> Any:
        task = asyncio.create_task(self._request(command, parameters, type, use_secure))
        self._pending.add(task)
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            aborted = task.cancelled() and (current is None or current.cancelling() == 0)
            if aborted:
                raise TransportError(
                    ABORTED_MESSAGE, name=NetworkError.REQUEST_CANCELLED,
                ) from None
            raise
        finally:
            self._pending.discard(task)

    async def _request(
        self,
        command: str,
        parameters: RequestData,
        type: str,
        use_secure: bool,
    ) -> Any:
        session = await self._ensure_session()
        method = type.upper()
        fields = encode_parameters(parameters)
        query = {"command": command}
        if method == "GET":
            query.update(fields)
            body = None
        else:
            body = fields
        self._log.debug("{method} {command}", method=method, command=command)

        try:
            async with session.request(
                method, self._url(use_secure), params=query, data=body,
            ) as resp:
                return await self._parse(resp)
        except aiohttp.ClientResponseError as e:
            raise TransportError(e.message, status=e.status) from e
        except (aiohttp.ClientConnectionError, TimeoutError) as e:
            self._log.debug("{command} failed: {error!r}", command=command, error=e)
            raise TransportError(NetworkError.FAILED_TO_FETCH.value) from e

    async def _parse(self, resp: aiohttp.ClientResponse) -> Any:
        if resp.status >= 400:
            body = await resp.text()
            self._log.warning(
                "HTTP {status} from {url}: {body}",
                status=resp.status, url=str(resp.url), body=body[:500],
            )
            raise TransportError(resp.reason or f"HTTP {resp.status}", status=resp.status)
        body = await resp.read()
        return json.loads(body) if body else None

    def cancel_pending_requests(self) -> None:
        """Abort every in-flight request; each fails with ``AbortError``."""
        for task in list(self._pending):
            task.cancel()

    # ─── Lifecycle ───────────────────────────────────────────────────

    async def close(self) -> None:
        if self._session and not self._session.closed:
            self._log.debug("Closing HTTP session")
            await self._session.close()

    async def __aenter__(self) -> HttpTransport:
        await self._ensure_session()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()
