"""devlog - colorized, caller-annotated debug lines for development.

Prints one timestamped line per call to stderr (or any text stream), tagged
with the calling file, line and function, plus helpers to embed structured
values in a line.

Quick Start:
    >>> import devlog
    >>> devlog.log("loaded", len(rows), "rows")
    [DEVLOG] 2024-01-03T10:30:45.123 app/loader.py:12 load loaded 42 rows
    >>> devlog.warnf("slow query: %.1fms", elapsed)
    >>> devlog.log("config", devlog.dump(config))
    >>> devlog.log("matrix", devlog.table(matrix))
    >>> devlog.log("token", devlog.redact(token))

Configuration (startup or test setup only; not synchronized):
    >>> devlog.configure(enabled=False)                 # silence everything
    >>> devlog.configure(output=sys.stdout, colors=False)
    >>> devlog.configure(time_format=devlog.RFC3339)

    # Or with environment variables:
    # DEVLOG_ENABLED=false
    # DEVLOG_TABLE_SEPARATOR=" ; "

Independent instances:
    >>> log = devlog.DevLogger(devlog.DevlogConfig(output=buf, colors=False))
    >>> log.error("boom")
"""

from __future__ import annotations

__version__ = "0.1.0"

from typing import TYPE_CHECKING, Any

from .caller import CallerInfo, FixedLocator, FrameLocator, LocationProvider, shorten_path
from .config import MILLIS, RFC3339, DevlogConfig, DevlogSettings, clear_settings_cache, get_settings
from .emitter import DevLogger, Level, format_timestamp
from .formatters import dump_value, redact
from .tabular import render_table

if TYPE_CHECKING:
    from collections.abc import Sequence


# ─────────────────────────────────────────────────────────────────────────────
# Default Instance
# ─────────────────────────────────────────────────────────────────────────────


_default: DevLogger | None = None


def get_logger() -> DevLogger:
    """Get the process-wide logger, creating it from settings on first use."""
    global _default
    if _default is None:
        _default = DevLogger()
    return _default


def get_config() -> DevlogConfig:
    """Config of the process-wide logger (mutations apply immediately)."""
    return get_logger().config


def configure(**changes: Any) -> DevlogConfig:
    """Update the process-wide logger's config. Unknown options raise ValueError."""
    return get_logger().config.update(**changes)


def reset() -> None:
    """Drop the process-wide logger and cached settings (useful for testing)."""
    global _default
    _default = None
    clear_settings_cache()


# ─────────────────────────────────────────────────────────────────────────────
# Entry Points
# ─────────────────────────────────────────────────────────────────────────────
# Each wrapper calls _emit directly so the caller frame is always two above it.


def emit(level: Level | str, fmt: str | None = None, args: Sequence[Any] = ()) -> None:
    """Write one line at ``level``; ``fmt`` selects printf-style formatting."""
    get_logger()._emit(Level(level), fmt, args)


def log(*args: Any) -> None: get_logger()._emit(Level.INFO, None, args)
def logf(fmt: str, *args: Any) -> None: get_logger()._emit(Level.INFO, fmt, args)
def warn(*args: Any) -> None: get_logger()._emit(Level.WARN, None, args)
def warnf(fmt: str, *args: Any) -> None: get_logger()._emit(Level.WARN, fmt, args)
def error(*args: Any) -> None: get_logger()._emit(Level.ERROR, None, args)
def errorf(fmt: str, *args: Any) -> None: get_logger()._emit(Level.ERROR, fmt, args)


def dump(value: Any) -> str:
    """Indented JSON block for a line; ``""`` when logging is disabled."""
    return get_logger().dump(value)


def table(value: Any) -> str:
    """Aligned table of a nested value; ``""`` when logging is disabled."""
    return get_logger().table(value)


__all__ = [
    "__version__",
    # Entry points
    "emit", "log", "logf", "warn", "warnf", "error", "errorf",
    # Formatters
    "dump", "table", "redact", "dump_value", "render_table", "format_timestamp",
    # Default instance
    "get_logger", "get_config", "configure", "reset",
    # Types
    "DevLogger", "Level", "DevlogConfig", "DevlogSettings", "get_settings", "clear_settings_cache",
    "CallerInfo", "LocationProvider", "FrameLocator", "FixedLocator", "shorten_path",
    # Presets
    "MILLIS", "RFC3339",
]
