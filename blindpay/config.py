"""Webhook settings loaded from environment variables and .env files."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .webhooks import DEFAULT_TOLERANCE_SECONDS, SECRET_PREFIX

__all__ = ["WebhookSettings", "get_settings"]


class WebhookSettings(BaseSettings):
    """Runtime configuration for inbound webhook verification."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    webhook_secret: Optional[SecretStr] = Field(default=None, alias="BLINDPAY_WEBHOOK_SECRET")
    webhook_tolerance_seconds: Optional[int] = Field(
        default=DEFAULT_TOLERANCE_SECONDS,
        alias="BLINDPAY_WEBHOOK_TOLERANCE_SECONDS",
        ge=0,
        description="Replay window in seconds; 0 or empty disables the timestamp check.",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("webhook_secret", mode="before")
    @classmethod
    def _validate_secret(cls, value: object) -> object:
        if value in {None, ""}:
            return None
        raw = value.get_secret_value() if isinstance(value, SecretStr) else str(value)
        if not raw.startswith(SECRET_PREFIX):
            raise ValueError("BLINDPAY_WEBHOOK_SECRET must start with 'whsec_'.")
        return raw

    @field_validator("webhook_tolerance_seconds", mode="before")
    @classmethod
    def _validate_tolerance(cls, value: object) -> object:
        if value in {None, ""}:
            return None
        return value

    @property
    def replay_window(self) -> Optional[int]:
        """Effective tolerance, ``None`` when the check is disabled."""

        if not self.webhook_tolerance_seconds:
            return None
        return self.webhook_tolerance_seconds


@lru_cache
def get_settings() -> WebhookSettings:
    return WebhookSettings()
