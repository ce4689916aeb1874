"""Ready-to-use request pipeline wired from configuration.

Example:
    from courier import Network, NetworkConfig, RecheckNeeded, Request

    async with Network(NetworkConfig(base_url="https://api.example.com")) as net:
        @net.bus.on(RecheckNeeded)
        def recheck(event): ...

        response = await net.process(Request("OpenReport", {"reportID": 7}))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from courier.bus import EventBus
from courier.config import NetworkConfig, resolve_config
from courier.infra.http import HttpTransport
from courier.logging import LogConfig, NetworkLogger, setup_logging, teardown_logging
from courier.parameters import ParameterEnhancer
from courier.persisted import PersistedRequests
from courier.processor import RequestProcessor
from courier.retry import process_with_retry
from courier.types import Request
from courier.watchdog import RecheckWatchdog


class Network:
    """Owns the default collaborators and the transport session."""

    def __init__(
        self,
        config: NetworkConfig,
        *,
        logging: LogConfig | bool = False,
        transport: HttpTransport | None = None,
    ) -> None:
        self.config = config
        self.bus = EventBus()
        self.persisted = PersistedRequests(config.persisted_path)
        self.transport = transport or HttpTransport(
            config.base_url, config.secure_base_url, timeout=config.timeout,
        )
        self.processor = RequestProcessor(
            self.transport,
            prepare=ParameterEnhancer(config.referer, config.platform, config.email),
            queue=self.persisted,
            watchdog=RecheckWatchdog(self.bus.notify_recheck, config.recheck_timeout),
            log=NetworkLogger(),
            notifier=self.bus,
        )
        match logging:
            case LogConfig():
                self._log_config: LogConfig | None = logging
            case True:
                self._log_config = LogConfig()
            case _:
                self._log_config = None
        self._handler_ids: list[int] = []

    @classmethod
    def from_files(
        cls,
        *,
        project_dir: Path | None = None,
        global_path: Path | None = None,
    ) -> Network:
        network_config, log_config = resolve_config(
            project_dir=project_dir, global_path=global_path,
        )
        return cls(network_config, logging=log_config)

    async def process(self, request: Request) -> Any:
        return await self.processor.process(request)

    async def process_with_retry(self, request: Request, **kwargs: Any) -> Any:
        return await process_with_retry(self.processor, request, **kwargs)

    def cancel_pending_requests(self) -> None:
        self.transport.cancel_pending_requests()

    async def __aenter__(self) -> Network:
        if self._log_config is not None:
            self._handler_ids = setup_logging(self._log_config)
        await self.transport.__aenter__()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.transport.close()
        if self._handler_ids:
            teardown_logging(self._handler_ids)
            self._handler_ids = []
