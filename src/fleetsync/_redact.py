"""Helpers for safe debug logging.

fleetsync sends API keys to the remote store and moves records that hold
bank accounts and identity documents, both in request bodies and in
PostgREST filters (``?document_id=eq.1234567``). The helpers here mask
those values before they reach a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

# Compared after lowercasing and dropping "_"/"-", so ``document_id``,
# ``documentId`` and ``Document-Id`` all match ``documentid``.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "apikey",
        "authorization",
        "password",
        "token",
        "accesstoken",
        "refreshtoken",
        "cookie",
        "bankaccount",
        "documentid",
        "ci",
    }
)

_MAX_DEPTH = 20


def is_sensitive_key(key: object) -> bool:
    return str(key).lower().replace("_", "").replace("-", "") in _SENSITIVE_KEYS


def redact_filters(params: Mapping[str, str] | None) -> dict[str, str]:
    """Mask PostgREST filter values on sensitive columns, keeping the operator.

    ``{"document_id": "eq.1234567"}`` becomes ``{"document_id": "eq.<redacted>"}``.
    """
    masked: dict[str, str] = {}
    for column, value in (params or {}).items():
        if not is_sensitive_key(column):
            masked[column] = value
            continue
        operator, dot, _ = value.partition(".")
        masked[column] = f"{operator}.{REDACTED}" if dot else REDACTED
    return masked


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* (a row, a list of rows, a JSON body) for debug logs."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if isinstance(value, Mapping):
        return {
            str(key): REDACTED
            if is_sensitive_key(key)
            else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }

    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]

    if value is None or isinstance(value, (int, float, bool)):
        return value

    return repr(value)
