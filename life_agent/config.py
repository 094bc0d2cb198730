"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"
DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./life_agent.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Secret key for signing JWT tokens",
        min_length=1,
    )
    debug: bool = False
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC±HH:MM offset) used to compute day boundaries",
    )
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    vapid_public_key: str | None = Field(
        default=None, description="Base64url VAPID public key handed to browsers"
    )
    vapid_private_key: str | None = Field(
        default=None, description="VAPID private key used to sign push requests"
    )
    vapid_subject: str | None = Field(
        default=None,
        description="Contact URI (mailto: or https:) sent in the VAPID claims",
    )
    push_ttl_seconds: int = Field(default=86_400, ge=0)
    push_timeout_seconds: float = Field(default=10.0, gt=0)
    push_icon: str = "/icon-192x192.png"
    push_click_url: str = "/dashboard"

    cron_secret: str | None = Field(
        default=None,
        description="Bearer secret required by the cron endpoints when configured",
    )
    reminder_suppression_minutes: int = Field(
        default=0,
        ge=0,
        description="Skip derived reminders already sent within this window (0 disables)",
    )

    @model_validator(mode="after")
    def _validate_vapid_keys(self) -> "Settings":
        if bool(self.vapid_public_key) ^ bool(self.vapid_private_key):
            raise ValueError(
                "VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY must both be provided to enable push"
            )
        if self.vapid_private_key and not self.vapid_subject:
            raise ValueError("VAPID_SUBJECT is required when VAPID keys are configured")
        if self.vapid_subject and not self.vapid_subject.startswith(("mailto:", "https:")):
            raise ValueError("VAPID_SUBJECT must be a mailto: or https: URI")
        return self

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key and self.vapid_subject)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


__all__ = ["DEFAULT_SECRET_KEY", "Settings", "get_settings"]
