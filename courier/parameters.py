"""Outgoing parameter enhancement."""

from __future__ import annotations

from courier.constants import DEFAULT_PLATFORM, DEFAULT_REFERER
from courier.types import RequestData


class ParameterEnhancer:
    """Adds the fields every API call carries to a request's data.

    Args:
        referer: Value sent as ``referer``.
        platform: Client platform, e.g. ``"web"`` or ``"ios"``.
        email: Fallback ``email`` when the request data has none.
    """

    def __init__(
        self,
        referer: str = DEFAULT_REFERER,
        platform: str = DEFAULT_PLATFORM,
        email: str | None = None,
    ) -> None:
        self._referer = referer
        self._platform = platform
        self._email = email

    def __call__(self, command: str, data: RequestData) -> RequestData:
        parameters = dict(data)
        parameters["referer"] = self._referer
        parameters["platform"] = self._platform
        # Session cookies are never requested by API calls.
        parameters["api_setCookie"] = False

        email = data.get("email", self._email)
        if email is not None:
            parameters["email"] = email
        return parameters
