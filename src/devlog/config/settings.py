"""Environment-based configuration using pydantic-settings.

Provides the env-driven defaults for the process-wide logger and the runtime
configuration object each DevLogger reads on every call.

Example:
    >>> from devlog.config import get_settings
    >>> settings = get_settings()
    >>> settings.table_separator
    ' | '

    # Or with environment variables:
    # DEVLOG_ENABLED=false
    # DEVLOG_TIME_FORMAT=rfc3339
    # DEVLOG_SOURCE_ROOTS='["/srv/app", "/opt/lib"]'
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from typing import TextIO

# Timestamp presets. A trailing %f is cut to milliseconds when formatting.
MILLIS = "%Y-%m-%dT%H:%M:%S.%f"
RFC3339 = "rfc3339"

DEFAULT_SEPARATOR = " | "


class DevlogSettings(BaseSettings):
    """Debug logging configuration.

    Loads configuration from environment variables with DEVLOG_ prefix.

    Example environment variables:
        DEVLOG_ENABLED=false
        DEVLOG_TABLE_SEPARATOR=" ; "
        DEVLOG_COLORS=true
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    enabled: bool = Field(default=True, description="Emit debug lines at all")
    time_format: Annotated[str, Field(min_length=1)] = Field(
        default=MILLIS,
        description="strftime pattern, or 'rfc3339' for date-time with offset",
    )
    table_separator: str = Field(default=DEFAULT_SEPARATOR, description="Separator between table columns")
    source_roots: list[Path] | None = Field(
        default=None,
        description="Directories stripped from displayed file paths (None = import path)",
    )
    colors: bool | None = Field(default=None, description="Force ANSI colors on/off (None = auto-detect)")

    @field_validator("time_format", mode="before")
    @classmethod
    def _normalize_preset(cls, v: str) -> str:
        """Accept preset names case-insensitively."""
        return RFC3339 if isinstance(v, str) and v.lower() == RFC3339 else v


@dataclass(slots=True)
class DevlogConfig:
    """Runtime configuration read by a DevLogger on every call.

    Mutable on purpose: hosts flip ``enabled`` or swap ``output`` during
    startup or test setup. Not safe for reconfiguration under concurrent
    logging; readers may observe either the old or the new value.
    """

    enabled: bool = True
    output: TextIO | None = None
    time_format: str = MILLIS
    table_separator: str = DEFAULT_SEPARATOR
    source_roots: tuple[Path, ...] | None = None
    colors: bool | None = None

    @classmethod
    def from_settings(cls, settings: DevlogSettings) -> DevlogConfig:
        """Build a runtime config from env-backed settings."""
        roots = tuple(settings.source_roots) if settings.source_roots is not None else None
        return cls(
            enabled=settings.enabled,
            time_format=settings.time_format,
            table_separator=settings.table_separator,
            source_roots=roots,
            colors=settings.colors,
        )

    @property
    def stream(self) -> TextIO | None:
        """Destination stream; falls back to the current sys.stderr, which may be None."""
        return self.output if self.output is not None else sys.stderr

    def update(self, **changes: object) -> DevlogConfig:
        """Apply changes in place. Unknown option names raise ValueError."""
        if unknown := set(changes) - _OPTION_NAMES:
            raise ValueError(f"Unknown devlog option(s): {', '.join(sorted(unknown))}. "
                             f"Use one of: {', '.join(sorted(_OPTION_NAMES))}")
        if "source_roots" in changes and changes["source_roots"] is not None:
            changes["source_roots"] = tuple(Path(p) for p in changes["source_roots"])  # type: ignore[union-attr]
        for name, value in changes.items():
            setattr(self, name, value)
        return self

    def copy(self, **changes: object) -> DevlogConfig:
        """Return an independent copy with changes applied."""
        return replace(self).update(**changes)


_OPTION_NAMES = frozenset(f.name for f in fields(DevlogConfig))


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> DevlogSettings:
    """Get the global settings instance (cached).

    Returns:
        Cached DevlogSettings instance
    """
    return DevlogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
