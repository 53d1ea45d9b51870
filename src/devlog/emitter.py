"""Colorized, caller-annotated debug lines.

Each entry point writes exactly one line to the configured stream:

    [DEVLOG] 2024-01-03T10:30:45.123 app/models.py:42 User.save saving 3 rows

Quick Start:
    >>> from devlog import DevLogger, DevlogConfig
    >>> log = DevLogger(DevlogConfig(output=sys.stdout, colors=False))
    >>> log.log("saving", 3, "rows")
    >>> log.warnf("retry %d of %d", 1, 5)

Writes are best-effort: a broken, closed or missing stream never raises into
the host program.
"""

from __future__ import annotations

import io
import logging
import os
import re
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .caller import CallerInfo, FrameLocator, LocationProvider, default_source_roots
from .config import MILLIS, RFC3339, DevlogConfig, get_settings
from .formatters import dump_value, safe_repr, safe_str
from .tabular import render_table

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path
    from typing import TextIO

logger = logging.getLogger("devlog.emitter")

TAG = "[DEVLOG]"


class Level(StrEnum):
    """Color category of a debug line. Names match case-insensitively."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def _missing_(cls, value: object) -> Level | None:
        return cls._value2member_map_.get(value.lower()) if isinstance(value, str) else None


# ─────────────────────────────────────────────────────────────────────────────
# Formatting
# ─────────────────────────────────────────────────────────────────────────────


_RESET = "\033[0m"
_LEVEL_COLORS = {Level.INFO: "\033[94m", Level.WARN: "\033[93m", Level.ERROR: "\033[91m"}
_TRAILING_MICROS = re.compile(r"(?<!%)(?:%%)*%f\Z")  # %f not escaped as %%f


def format_timestamp(moment: datetime, pattern: str) -> str:
    """Render ``moment`` with a strftime pattern. A trailing %f is cut to milliseconds."""
    if pattern == RFC3339:
        return moment.astimezone().isoformat(timespec="seconds")
    text = moment.strftime(pattern)
    return text[:-3] if _TRAILING_MICROS.search(pattern) else text


def format_payload(fmt: str | None, args: Sequence[Any]) -> str:
    """Space-joined ``str()`` of args, or printf-style ``fmt % args``.

    Never raises: a failing ``__str__`` becomes a marker, and a bad format
    becomes ``fmt %!(BADFORMAT <error>: <args>)``.
    """
    if fmt is None:
        return " ".join(safe_str(a) for a in args)
    try:
        return fmt % tuple(args)
    except Exception as e:  # noqa: BLE001 - also covers errors raised by an argument's __str__
        extra = ", ".join(safe_repr(a) for a in args)
        return f"{fmt} %!(BADFORMAT {type(e).__name__}: {extra})"


def format_line(level: Level, timestamp: str, caller: CallerInfo, payload: str, *, colors: bool) -> str:
    """Compose one newline-terminated line; color brackets the whole line."""
    parts = [TAG, timestamp, caller.location, caller.function]
    if payload:
        parts.append(payload)
    line = " ".join(parts)
    return f"{_LEVEL_COLORS[level]}{line}{_RESET}\n" if colors else f"{line}\n"


def supports_color(stream: TextIO | None) -> bool:
    """Auto-detect ANSI support: a TTY, no NO_COLOR, and TERM not 'dumb'."""
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, OSError, ValueError):
        return False


def _is_binary(stream: Any) -> bool:
    return isinstance(stream, (io.RawIOBase, io.BufferedIOBase))


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


class DevLogger:
    """Debug logger bound to one DevlogConfig.

    The config is held by reference: mutating it (``enabled``, ``output``,
    ``time_format``...) takes effect on the next call. No locking is done;
    concurrent lines may interleave if the stream does not serialize writes.

    Example:
        >>> log = DevLogger()
        >>> log.log("request", path)
        >>> log.errorf("failed after %.2fs", elapsed)
        >>> log.log("user", log.dump(user))
    """

    __slots__ = ("config", "locator")

    def __init__(self, config: DevlogConfig | None = None, locator: LocationProvider | None = None) -> None:
        self.config = config if config is not None else DevlogConfig.from_settings(get_settings())
        self.locator = locator if locator is not None else FrameLocator(roots=self._source_roots)

    def __repr__(self) -> str:
        return f"DevLogger(enabled={self.config.enabled}, output={self.config.stream!r})"

    def _source_roots(self) -> tuple[Path, ...]:
        roots = self.config.source_roots
        return roots if roots is not None else default_source_roots()

    def _timestamp(self) -> str:
        pattern = self.config.time_format
        now = datetime.now()
        try:
            return format_timestamp(now, pattern)
        except (ValueError, OverflowError, OSError) as e:
            logger.debug("devlog time format %r failed: %s", pattern, e)
            return format_timestamp(now, MILLIS)

    def _emit(self, level: Level, fmt: str | None, args: Sequence[Any], skip: int = 2) -> None:
        # skip=2 lands on the caller of the public wrapper that called _emit
        cfg = self.config
        if not cfg.enabled:
            return
        stream = cfg.stream
        if stream is None:  # pythonw, or sys.stderr set to None by the host
            return
        caller = self.locator.locate(skip)
        colors = cfg.colors if cfg.colors is not None else supports_color(stream)
        line = format_line(level, self._timestamp(), caller, format_payload(fmt, args), colors=colors)
        try:
            stream.write(line.encode("utf-8", "replace") if _is_binary(stream) else line)
            stream.flush()
        except Exception as e:  # noqa: BLE001 - output is best-effort
            logger.debug("devlog write to %r failed: %s", stream, e)

    def emit(self, level: Level | str, fmt: str | None = None, args: Sequence[Any] = ()) -> None:
        """Write one line at ``level``; ``fmt`` selects printf-style formatting."""
        self._emit(Level(level), fmt, args)

    def log(self, *args: Any) -> None: self._emit(Level.INFO, None, args)
    def logf(self, fmt: str, *args: Any) -> None: self._emit(Level.INFO, fmt, args)
    def warn(self, *args: Any) -> None: self._emit(Level.WARN, None, args)
    def warnf(self, fmt: str, *args: Any) -> None: self._emit(Level.WARN, fmt, args)
    def error(self, *args: Any) -> None: self._emit(Level.ERROR, None, args)
    def errorf(self, fmt: str, *args: Any) -> None: self._emit(Level.ERROR, fmt, args)

    def dump(self, value: Any) -> str:
        """Indented JSON block for embedding in a line; ``""`` when disabled.

        The value is still built by the caller before this runs, so disabling
        saves only the serialization cost.
        """
        return dump_value(value) if self.config.enabled else ""

    def table(self, value: Any) -> str:
        """Column-aligned table of a nested value; ``""`` when disabled."""
        return render_table(value, self.config.table_separator) if self.config.enabled else ""
