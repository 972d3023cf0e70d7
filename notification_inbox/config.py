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
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./notification_inbox.db",
        description="Database connection URL used by SQLAlchemy for the key-value table",
        min_length=1,
    )
    notifications_storage_key: str = Field(
        default="fcm_notifications",
        description="Key under which the serialized notification list is persisted",
        min_length=1,
    )
    max_notifications: int = Field(
        default=50,
        description="Maximum number of notifications kept in the inbox",
        gt=0,
    )
    app_timezone: str | None = Field(
        default="UTC",
        description="IANA timezone name or UTC offset used for received timestamps",
    )
    inbox_locale: str = Field(
        default="id_ID",
        description="Locale used to build the date group labels (en_US or id_ID)",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=list,
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
