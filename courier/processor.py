"""Request dispatch with failure classification and queue reconciliation.

Example:
    processor = RequestProcessor(
        transport,
        prepare=ParameterEnhancer(),
        queue=PersistedRequests(),
        watchdog=RecheckWatchdog(bus.notify_recheck),
        log=NetworkLogger(),
        notifier=bus,
    )
    response = await processor.process(Request("OpenReport", {"reportID": 7}))
"""

from __future__ import annotations

import inspect
from typing import Any

from courier.classify import Outcome, triage
from courier.constants import ENSURE_BUGBOT, LOG_COMMAND
from courier.infra.protocols import (
    NetworkLog,
    ParameterPreparer,
    PersistedQueue,
    ResponseNotifier,
    Transport,
    Watchdog,
)
from courier.types import Request, RequestData


class RequestProcessor:
    """Sends one request and settles its persisted-queue entry.

    ``process`` returns the transport response on success and None when a
    failure is absorbed (cancellation or an unrecognized error). Only
    retryable network failures are raised, so an outer retry mechanism can
    act while the persisted entry stays queued.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        prepare: ParameterPreparer,
        queue: PersistedQueue,
        watchdog: Watchdog[Any],
        log: NetworkLog,
        notifier: ResponseNotifier,
    ) -> None:
        self._transport = transport
        self._prepare = prepare
        self._queue = queue
        self._watchdog = watchdog
        self._log = log
        self._notifier = notifier

    async def process(self, request: Request) -> Any:
        persisted = request.persist
        parameters = self._prepare(request.command, request.data)
        if inspect.isawaitable(parameters):
            parameters = await parameters

        handle = self._watchdog.start()
        try:
            self._log_request(request, parameters)
            try:
                response = await self._transport.send(
                    request.command, parameters, request.type, request.should_use_secure,
                )
            except Exception as error:
                return self._on_failure(request, error, persisted)
            return self._on_success(request, response, persisted)
        finally:
            self._watchdog.cancel(handle)

    def _log_request(self, request: Request, parameters: RequestData) -> None:
        # Logging a Log request would recurse through this pipeline.
        if request.command == LOG_COMMAND:
            return
        self._log.info("Making API request", False, {
            "command": request.command,
            "type": request.type,
            "shouldUseSecure": request.should_use_secure,
            "rvl": parameters.get("returnValueList"),
        })

    def _on_success(self, request: Request, response: Any, persisted: bool) -> Any:
        if persisted:
            self._queue.remove(request)
        self._notifier.notify_response(request, response)
        return response

    def _on_failure(self, request: Request, error: Exception, persisted: bool) -> None:
        verdict = triage(error)

        match verdict.outcome:
            case Outcome.RETRYABLE_NETWORK_FAILURE:
                rule = verdict.rule
                if rule is not None and rule.warning is not None:
                    context = {"error": verdict.message} if rule.normalize else None
                    self._log.warn(rule.warning, context)
                # Retryable failures keep the persisted entry for replay.
                # "Load failed" lands here too and skips the removal below,
                # unlike the absorbed outcomes; revisit if it should drain.
                if verdict.error is None or verdict.error is error:
                    raise error
                raise verdict.error from error
            case Outcome.USER_CANCELLED:
                self._log.info("[Network] Request canceled", False, request.to_dict())
            case Outcome.UNKNOWN_FATAL:
                self._log.alert(
                    f"{ENSURE_BUGBOT} unknown error caught while processing request",
                    {"command": request.command, "error": verdict.message},
                )

        # Absorbed outcomes are final, so the entry must not be retried.
        if persisted:
            self._queue.remove(request)
