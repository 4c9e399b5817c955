"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifier.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key for signing JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC offset) used for timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    email_send_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound for a single provider call before it is logged as a timeout",
        gt=0,
    )
    email_max_workers: int = Field(
        default=8,
        description="Maximum number of concurrent outbound email sends per dispatch",
        ge=1,
    )
    notification_cache_ttl_seconds: int = Field(
        default=300,
        description="Lifetime of cached active providers and triggers",
        ge=0,
    )
    dispatch_batch_size: int = Field(
        default=50,
        description="Number of email recipients processed per chunk for batch deliveries",
        ge=1,
    )
    scheduler_enabled: bool = Field(
        default=True,
        description="Run the delayed dispatch poller inside the API process",
    )
    scheduler_poll_seconds: float = Field(
        default=30.0,
        description="Interval between two polls of the delayed dispatch queue",
        gt=0,
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:4200"],
        description="Origins allowed to call the API from a browser",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
