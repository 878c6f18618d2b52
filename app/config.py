"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

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
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name used for stored timestamps; UTC when unset",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    sms_api_url: str | None = Field(
        default=None,
        description="Endpoint of the SMS provider that accepts JSON message submissions",
    )
    sms_api_key: str | None = Field(
        default=None,
        description="Bearer token presented to the SMS provider",
    )
    sms_sender: str | None = Field(
        default=None,
        description="Sender id or number shown to SMS recipients",
    )
    transaction_service_url: str = Field(
        default="http://transactions:8080",
        description="Base URL of the transaction service",
    )
    account_service_url: str = Field(
        default="http://accountmanagement:8080",
        description="Base URL of the account management service",
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout applied to every call made to upstream services and gateways",
        gt=0,
    )
    default_retention_days: int = Field(
        default=30,
        description="Retention window used when purging expired notifications",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
