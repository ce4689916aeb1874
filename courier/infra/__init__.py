"""Transport and collaborator contracts."""

from .http import HttpTransport, encode_parameters
from .protocols import (
    NetworkLog,
    ParameterPreparer,
    PersistedQueue,
    ResponseNotifier,
    Transport,
    Watchdog,
)
