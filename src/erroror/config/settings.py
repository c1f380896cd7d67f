"""Environment-based configuration using pydantic-settings.

Configuration only drives the ambient logging of the library; containers
and combinators behave identically regardless of settings.

Example:
    >>> from erroror.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # ERROROR_LOG_LEVEL=DEBUG
    # ERROROR_LOG_FORMAT=json
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERROROR_LOG_",
        extra="ignore",
    )

    level: LogLevel = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    show_timestamp: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ErrorOrSettings(BaseSettings):
    """Root settings for the erroror package.

    Loads configuration from environment variables with ERROROR_ prefix.

    Example environment variables:
        ERROROR_DEBUG=true
        ERROROR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="ERROROR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log misuse diagnostics at DEBUG level")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def effective_log_level(self) -> LogLevel:
        """Debug mode forces DEBUG regardless of the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> ErrorOrSettings:
    """Get the global settings instance (cached)."""
    return ErrorOrSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
