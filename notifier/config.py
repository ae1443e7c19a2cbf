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
        default="sqlite:///./notifier.db",
        description="Database connection URL used by SQLAlchemy to reach the user table",
        min_length=1,
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    push_enabled: bool = Field(
        default=False,
        description="Deliver notifications through Firebase Cloud Messaging",
    )
    google_application_credentials: str | None = Field(
        default=None,
        description="Path to the Firebase service account JSON file",
    )
    firebase_app_name: str = Field(
        default="notifier",
        description="Name of the Firebase app instance owned by the transport",
        min_length=1,
    )

    broadcast_role_field: str = Field(
        default="role",
        description="User attribute matched when broadcasting new listings",
        min_length=1,
    )
    broadcast_role: str = Field(
        default="customer",
        description="Value of the broadcast attribute that selects listing recipients",
        min_length=1,
    )
    body_max_length: int = Field(
        default=100,
        description="Maximum number of characters kept in a notification body",
        gt=0,
    )
    currency: str = Field(default="JOD", description="Currency shown in listing prices")

    max_concurrent_batches: int = Field(
        default=4,
        description="Number of transport batches sent at the same time",
        gt=0,
    )
    batch_retry_attempts: int = Field(
        default=0,
        description="Extra attempts for a batch whose transport call failed outright",
        ge=0,
    )
    batch_retry_backoff_seconds: float = Field(
        default=0.5,
        description="Delay multiplier between batch retry attempts",
        ge=0,
    )
    prune_invalid_tokens: bool = Field(
        default=False,
        description="Clear tokens that the transport reports as unregistered",
    )

    @model_validator(mode="after")
    def _validate_push_credentials(self) -> "Settings":
        if self.push_enabled and not self.google_application_credentials:
            raise ValueError(
                "GOOGLE_APPLICATION_CREDENTIALS must be provided when PUSH_ENABLED is set"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
