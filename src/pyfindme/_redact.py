"""Helpers for safe debug logging.

pyfindme handles Apple ID passwords, session tokens and cookies. This module
masks such fields before request bodies and response headers reach DEBUG
logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "accountname",
        "dswebauthtoken",
        "x-apple-session-token",
        "x-apple-id-session-id",
        "scnt",
        "cookie",
        "set-cookie",
        "authorization",
    }
)

_MAX_DEPTH = 20


def _mask(value: Any) -> str:
    if isinstance(value, str):
        return f"<redacted:{len(value)}c>"
    return "<redacted>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* with credentials masked and long strings cut.

    Mapping keys are matched case-insensitively, so both JSON bodies
    (``dsWebAuthToken``) and lower-cased response headers are covered.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if isinstance(value, Mapping):
        return {
            str(k): _mask(v)
            if str(k).lower() in _SENSITIVE_KEYS
            else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }

    if isinstance(value, (list, tuple)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"

    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    return repr(value)
