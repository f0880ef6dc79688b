#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error classification - decide whether a failed call is worth trying elsewhere.
"""

from typing import Any, List, Mapping

RETRIABLE_STATUS_CODES = (429, 503)

RETRIABLE_KEYWORDS = (
    "quota",
    "rate limit",
    "overload",
    "unavailable",
    "network",
    "fetch failed",
    "503",
    "429",
)


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _status_values(error: Any) -> List[int]:
    response = _field(error, "response")
    candidates = [
        _field(response, "status_code"),
        _field(response, "status"),
        _field(error, "status_code"),
        _field(error, "status"),
        _field(error, "code"),
    ]
    return [v for v in candidates if isinstance(v, int) and not isinstance(v, bool)]


def _message_of(error: Any) -> str:
    message = _field(error, "message")
    if message is None and not isinstance(error, Mapping):
        message = error
    return str(message or "")


def is_retriable(error: Any) -> bool:
    """
    Classify an error as retriable (rate limit, overload, transient network).

    Accepts exceptions or plain mappings such as ``{"status": 429}``.
    Anything not matched (bad request, auth failure, invalid model) is fatal
    so it surfaces immediately instead of being repeated on other providers.
    """
    if any(status in RETRIABLE_STATUS_CODES for status in _status_values(error)):
        return True
    msg = _message_of(error).lower()
    return any(keyword in msg for keyword in RETRIABLE_KEYWORDS)
