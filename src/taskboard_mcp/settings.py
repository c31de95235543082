"""
TaskBoard Settings.

Configuration is read from environment variables with the ``TASKBOARD_``
prefix, or from a local ``.env`` file.

Environment Variables:
    TASKBOARD_SUPABASE_URL      Base URL of the Supabase project
    TASKBOARD_SUPABASE_KEY      API key (anon or service role)
    TASKBOARD_TIMEOUT           HTTP timeout in seconds (default 30)
    TASKBOARD_DEBOUNCE_SECONDS  Delay before a text edit is saved (default 1.5)
    TASKBOARD_LOG_LEVEL         Logging level (default INFO)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard_mcp.constants import DEFAULT_DEBOUNCE_SECONDS


class TaskBoardSettings(BaseSettings):
    """Runtime configuration for the TaskBoard server."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    supabase_url: str | None = Field(
        default=None,
        description="Supabase project URL, e.g. https://xyz.supabase.co",
    )
    supabase_key: SecretStr | None = Field(
        default=None,
        description="Supabase API key",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )
    debounce_seconds: float = Field(
        default=DEFAULT_DEBOUNCE_SECONDS,
        ge=0,
        description="Quiet period before a debounced field edit is written",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


@lru_cache
def get_settings() -> TaskBoardSettings:
    """Return the process-wide settings instance."""
    return TaskBoardSettings()
