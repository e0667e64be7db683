"""Redaction for DEBUG logs of owner API traffic.

Request and response bodies carry account passwords, OAuth secrets and
bearer tokens. ``redact_for_log`` masks those before anything is logged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"
_MAX_DEPTH = 20

#: Keys (compared case-insensitively) whose values never reach a log line.
_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "client_secret",
        "access_token",
        "refresh_token",
        "id_token",
        "token",
        "authorization",
        "cookie",
    }
)


def _redact_text(text: str, max_string: int) -> str:
    if text[:7].lower() == "bearer ":
        return f"Bearer {REDACTED}"
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def _redact_mapping(value: Mapping[Any, Any], max_string: int, depth: int) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for raw_key, item in value.items():
        key = str(raw_key)
        if key.lower() in _SECRET_KEYS:
            out[key] = REDACTED
        else:
            out[key] = redact_for_log(item, max_string=max_string, _depth=depth + 1)
    return out


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* that is safe to pass to ``_logger.debug``.

    Secret keys are masked at any nesting level, ``Bearer`` strings lose
    their token, long strings are truncated to *max_string* characters and
    bytes are summarised by length.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_text(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return _redact_mapping(value, max_string, _depth)
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
