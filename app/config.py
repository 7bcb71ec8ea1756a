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
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )

    smtp_host: str = Field(default="smtp.gmail.com", description="SMTP server host")
    smtp_port: int = Field(default=587, description="SMTP server port", gt=0)
    smtp_username: str | None = Field(default=None, description="SMTP login user")
    smtp_password: str | None = Field(default=None, description="SMTP login password")
    smtp_from_email: str | None = Field(
        default=None,
        description="Sender address for SMTP mail; defaults to the SMTP username",
    )
    smtp_from_name: str = Field(
        default="RetoSquadmakers", description="Display name used as SMTP sender"
    )
    smtp_use_tls: bool = Field(default=True, description="Issue STARTTLS before login")

    sms_enabled: bool = Field(default=False, description="Enable the SMS gateway")
    sms_api_key: str | None = Field(default=None, description="SMS gateway API key")
    sms_api_secret: str | None = Field(
        default=None, description="SMS gateway API secret"
    )
    sms_failure_rate: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Probability of a simulated SMS gateway failure",
    )

    push_enabled: bool = Field(
        default=False, description="Enable the push notification provider"
    )
    push_failure_rate: float = Field(
        default=0.03,
        ge=0.0,
        le=1.0,
        description="Probability of a simulated push service failure",
    )

    notification_simulated_latency: bool = Field(
        default=True,
        description="Sleep like a real network call when providers simulate delivery",
    )
    notification_processor_enabled: bool = Field(
        default=True,
        description="Start the background notification processor with the app",
    )
    notification_processor_interval_seconds: float = Field(default=30.0, gt=0)
    notification_processor_batch_size: int = Field(default=50, gt=0)
    notification_processor_max_attempts: int = Field(default=3, gt=0)
    notification_processor_error_backoff_seconds: float = Field(default=60.0, gt=0)

    seed_notification_templates: bool = Field(
        default=True,
        description="Insert the default notification templates when none exist",
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

    @property
    def sendgrid_configured(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_sender)

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_username and self.smtp_password)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
