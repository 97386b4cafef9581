"""Beeswax API errors and error classification."""

import re
from typing import Any


class BeeswaxAPIError(Exception):
    """Exception raised for Beeswax API errors.

    Only the decoded response body is kept; the transport response object is
    never attached.
    """

    def __init__(self, message: str, status_code: int | None = None, response_body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class BeeswaxAuthenticationError(BeeswaxAPIError):
    """Exception raised when Beeswax rejects the login credentials."""


def _error_messages(body: Any) -> list[str]:
    """Collect the server-authored messages of an error envelope.

    Beeswax reports write failures as ``payload[0].message`` (a string or a
    list of strings); ``error.message`` is read as well.
    """
    if not isinstance(body, dict):
        return []

    candidates: list[Any] = []
    payload = body.get("payload")
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        candidates.append(payload[0].get("message"))
    error = body.get("error")
    if isinstance(error, dict):
        candidates.append(error.get("message"))

    messages: list[str] = []
    for candidate in candidates:
        if isinstance(candidate, str):
            messages.append(candidate)
        elif isinstance(candidate, list):
            messages.extend(m for m in candidate if isinstance(m, str))
    return messages


def is_not_found_error(error: BeeswaxAPIError, action: str) -> bool:
    """Return True if Beeswax failed a write because the object does not exist.

    Matches the server text "Could not load object ... to <action>", where
    action is "update" or "delete".
    """
    pattern = re.compile(rf"Could not load object.*to {re.escape(action)}")
    return any(pattern.search(message) for message in _error_messages(error.response_body))
