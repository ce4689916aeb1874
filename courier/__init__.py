"""courier - dispatch API requests and settle their retry queue.

Example:

    from courier import Network, NetworkConfig, Request

    async with Network(NetworkConfig(base_url="https://api.example.com")) as net:
        response = await net.process(
            Request("OpenReport", {"reportID": 7, "persist": True}),
        )
"""

# Classification
from courier.classify import Classification, Outcome, classify, triage

# Configuration
from courier.config import NetworkConfig, load_config, resolve_config

# Constants
from courier.constants import NetworkError

# Exceptions
from courier.core.exceptions import (
    ConfigurationError,
    CourierError,
    FailedToFetchError,
    TransportError,
)

# Events
from courier.bus import EventBus
from courier.events import CourierEvent, RecheckNeeded, ResponseReceived

# Collaborators
from courier.infra.http import HttpTransport
from courier.logging import LogConfig, NetworkLogger
from courier.parameters import ParameterEnhancer
from courier.persisted import PersistedRequests
from courier.watchdog import RecheckWatchdog

# Pipeline
from courier.network import Network
from courier.processor import RequestProcessor
from courier.retry import is_retryable, process_with_retry
from courier.types import Request

__all__ = [
    "Classification",
    "ConfigurationError",
    "CourierError",
    "CourierEvent",
    "EventBus",
    "FailedToFetchError",
    "HttpTransport",
    "LogConfig",
    "Network",
    "NetworkConfig",
    "NetworkError",
    "NetworkLogger",
    "Outcome",
    "ParameterEnhancer",
    "PersistedRequests",
    "RecheckNeeded",
    "RecheckWatchdog",
    "Request",
    "RequestProcessor",
    "ResponseReceived",
    "TransportError",
    "classify",
    "is_retryable",
    "load_config",
    "process_with_retry",
    "resolve_config",
    "triage",
]
