"""Configuration management using pydantic-settings."""

from .settings import (
    ErrorOrSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ErrorOrSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
