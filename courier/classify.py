"""Transport failure classification.

Maps a transport error onto one of three outcomes. Only the error's
``message`` and ``name`` are consulted.

Example:
    from courier.classify import Outcome, classify

    classify("Network request failed", None)
    # Outcome.RETRYABLE_NETWORK_FAILURE

    classify("", "AbortError")
    # Outcome.USER_CANCELLED
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from courier.constants import NetworkError
from courier.core.exceptions import FailedToFetchError


class Outcome(StrEnum):
    RETRYABLE_NETWORK_FAILURE = "retryable_network_failure"
    USER_CANCELLED = "user_cancelled"
    UNKNOWN_FATAL = "unknown_fatal"


# =============================================================================
# Rules
# =============================================================================


@dataclass(frozen=True, slots=True)
class Rule:
    """A group of messages classified as a retryable network failure.

    Attributes:
        messages: Exact error messages this rule matches.
        normalize: Raise ``FailedToFetchError`` instead of the original error.
        warning: Warning logged when the rule matches, if any.
    """

    messages: frozenset[str]
    normalize: bool
    warning: str | None = None


RULES: tuple[Rule, ...] = (
    # Offline, bad CORS headers, DNS lookup failure and the like.
    Rule(
        messages=frozenset({NetworkError.FAILED_TO_FETCH}),
        normalize=False,
        warning=f"[Network] Error: {NetworkError.FAILED_TO_FETCH}",
    ),
    # Native stacks with interrupted connections; may also indicate SSL trouble.
    Rule(
        messages=frozenset({
            NetworkError.IOS_NETWORK_CONNECTION_LOST,
            NetworkError.NETWORK_REQUEST_FAILED,
        }),
        normalize=True,
        warning="[Network] Connection interruption likely",
    ),
    # Page closed or navigated away while the request was in flight.
    Rule(
        messages=frozenset({
            NetworkError.FIREFOX_DOCUMENT_LOAD_ABORTED,
            NetworkError.SAFARI_DOCUMENT_LOAD_ABORTED,
        }),
        normalize=True,
        warning="[Network] User likely navigated away from or closed browser",
    ),
    # iOS only, tends to coincide with spotty connections.
    Rule(
        messages=frozenset({NetworkError.IOS_LOAD_FAILED}),
        normalize=True,
    ),
)


def match_rule(message: str | None) -> Rule | None:
    """Return the first retryable rule matching ``message``."""
    for rule in RULES:
        if message in rule.messages:
            return rule
    return None


def classify(message: str | None, name: str | None) -> Outcome:
    """Classify a transport failure by its message and cancellation marker."""
    if match_rule(message) is not None:
        return Outcome.RETRYABLE_NETWORK_FAILURE
    if name == NetworkError.REQUEST_CANCELLED:
        return Outcome.USER_CANCELLED
    return Outcome.UNKNOWN_FATAL


# =============================================================================
# Triage
# =============================================================================


@dataclass(frozen=True, slots=True)
class Classification:
    """Tagged classification result.

    ``error`` is the exception the caller must see, or None when the
    failure is absorbed.
    """

    outcome: Outcome
    message: str
    rule: Rule | None = None
    error: BaseException | None = None

    @property
    def propagates(self) -> bool:
        return self.error is not None


def error_message(error: BaseException) -> str:
    message = getattr(error, "message", None)
    return message if isinstance(message, str) else str(error)


def error_name(error: BaseException) -> str | None:
    name = getattr(error, "name", None)
    return name if isinstance(name, str) else None


def triage(error: BaseException) -> Classification:
    """Classify ``error`` and pick the exception to propagate, if any."""
    message = error_message(error)
    rule = match_rule(message)
    if rule is not None:
        raised = FailedToFetchError() if rule.normalize else error
        return Classification(Outcome.RETRYABLE_NETWORK_FAILURE, message, rule, raised)
    return Classification(classify(message, error_name(error)), message)
