"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
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
    app_timezone: str = Field(
        default="Asia/Kolkata",
        description="IANA timezone (or UTC+HH:MM offset) used for timestamps and log file names",
    )
    admin_channel_id: str = Field(
        default="admin",
        description="Realtime channel that mirrors every push notification sent to a recipient",
        min_length=1,
    )
    fanout_failure_policy: Literal["isolate", "abort"] = Field(
        default="isolate",
        description=(
            "'isolate' keeps delivering after a recipient fails; 'abort' stops the send "
            "at the first failure"
        ),
    )
    error_log_dir: str = Field(
        default="logs",
        description="Directory that receives the daily operational error log files",
    )
    fcm_project_id: str | None = Field(
        default=None,
        description="Firebase project id used to build the FCM HTTP v1 endpoint",
    )
    fcm_access_token: str | None = Field(
        default=None,
        description="OAuth2 bearer token authorised for the FCM HTTP v1 API",
    )
    fcm_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to each FCM request",
        gt=0,
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string of the storage account that keeps notification images",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Blob container that keeps notification images",
    )
    admin_api_key: str | None = Field(
        default=None,
        description="When set, admin routes require this value in the X-API-Key header",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser (JSON list)",
    )

    @model_validator(mode="after")
    def _validate_fcm_pair(self) -> "Settings":
        if bool(self.fcm_project_id) ^ bool(self.fcm_access_token):
            raise ValueError(
                "FCM_PROJECT_ID and FCM_ACCESS_TOKEN must both be provided to enable push delivery"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
