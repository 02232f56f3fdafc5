"""Configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchedulerSettings(BaseSettings):
    """Scheduler settings loaded from SIMPLE_CRON_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SIMPLE_CRON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Polling loop period, in seconds
    tick_interval: float = Field(1.0, gt=0)

    # Defaults applied to jobs scheduled without explicit options
    default_max_retries: int = Field(3, ge=0)
    default_retry_delay: int = Field(5000, ge=0, description="Retry delay in milliseconds")

    # Reject uninterpretable fields at schedule time instead of never matching
    strict_fields: bool = False


_settings: Optional[SchedulerSettings] = None


def get_settings() -> SchedulerSettings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = SchedulerSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
