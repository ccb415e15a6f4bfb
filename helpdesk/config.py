"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="Europe/Lisbon",
        description="IANA timezone (or UTC offset) used for persisted timestamps",
    )
    handshake_timeout_seconds: float = Field(
        default=10.0,
        description="Seconds a websocket may wait before presenting its credential",
        gt=0,
    )
    connection_outbox_size: int = Field(
        default=100,
        description="Pending pushes buffered per websocket before new ones are dropped",
        gt=0,
    )
    notification_list_limit: int = Field(
        default=20,
        description="Default number of notifications returned by the listing endpoint",
        gt=0,
        le=100,
    )
    ws_ping_interval: float = Field(
        default=20.0,
        description="Seconds between transport-level websocket pings",
        gt=0,
    )
    ws_ping_timeout: float = Field(
        default=20.0,
        description="Seconds to wait for a pong before the connection is considered dead",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
