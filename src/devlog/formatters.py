"""Value formatting helpers for debug lines: indented JSON dumps and secret masking."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from pydantic import BaseModel

logger = logging.getLogger("devlog.formatters")

MASK = "*"

_DUMP_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS | orjson.OPT_SORT_KEYS


def safe_str(obj: Any) -> str:
    """``str(obj)``, or a marker naming the type when its __str__ raises."""
    try:
        return str(obj)
    except Exception as e:  # noqa: BLE001 - a broken __str__ must not abort a debug line
        return f"<{type(obj).__name__}: str() failed: {e}>"


def safe_repr(obj: Any) -> str:
    try:
        return repr(obj)
    except Exception:  # noqa: BLE001
        return safe_str(obj)


def _default(obj: Any) -> Any:
    """Serialize types orjson does not handle natively."""
    match obj:
        case BaseModel(): return obj.model_dump(mode="json")
        case set() | frozenset(): return list(obj)
        case _: raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dump_value(value: Any) -> str:
    """Serialize ``value`` as 2-space indented JSON with sorted keys, wrapped in newlines.

    On failure the error text is returned instead, without the newlines.
    """
    try:
        text = orjson.dumps(value, default=_default, option=_DUMP_OPTIONS).decode()
    except orjson.JSONEncodeError as e:
        logger.debug("dump of %s failed: %s", type(value).__name__, e)
        return str(e)
    return f"\n{text}\n"


def redact(secret: str) -> str:
    """Mask the second half of ``secret`` for display.

    The first ``len // 2`` characters stay readable; the rest become ``*``.
    This is a display helper only and gives no cryptographic protection:
    half of the secret is still printed.

    >>> redact("hunter22")
    'hunt****'
    """
    kept = len(secret) // 2
    return secret[:kept] + MASK * (len(secret) - kept)
