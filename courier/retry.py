"""Caller-side retry for retryable network failures.

Example:
    from courier.retry import process_with_retry

    response = await process_with_retry(processor, request, max_attempts=3)
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from courier.constants import NetworkError
from courier.core.exceptions import TransportError
from courier.processor import RequestProcessor
from courier.types import Request


def is_retryable(error: BaseException) -> bool:
    """True for the failures ``RequestProcessor`` raises to signal a retry."""
    return isinstance(error, TransportError) and error.message == NetworkError.FAILED_TO_FETCH


def _log_retry(state: RetryCallState) -> None:
    outcome = state.outcome
    error = outcome.exception() if outcome is not None else None
    delay = state.next_action.sleep if state.next_action is not None else 0.0
    logger.bind(component="retry").warning(
        "Retry {attempt} after {error}. Waiting {delay:.1f}s...",
        attempt=state.attempt_number, error=error, delay=delay,
    )


async def process_with_retry(
    processor: RequestProcessor,
    request: Request,
    *,
    max_attempts: int = 5,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
) -> Any:
    """Process ``request``, retrying with exponential backoff on network failures.

    Absorbed failures resolve to None on the first attempt and are never
    retried. The last retryable error is re-raised once attempts run out.
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, max=max_delay),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    ):
        with attempt:
            return await processor.process(request)
    return None
