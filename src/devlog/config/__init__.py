"""Configuration management using pydantic-settings.

Provides environment-based defaults and the mutable runtime config object.
"""

from .settings import (
    DEFAULT_SEPARATOR,
    MILLIS,
    RFC3339,
    DevlogConfig,
    DevlogSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DEFAULT_SEPARATOR",
    "MILLIS",
    "RFC3339",
    "DevlogConfig",
    "DevlogSettings",
    "clear_settings_cache",
    "get_settings",
]
