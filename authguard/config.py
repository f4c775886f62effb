"""Application configuration via pydantic-settings.

Loads all settings from environment variables (or .env file).  The shared
secret is read once per process and never mutated afterwards.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Central configuration for the callback verifier."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # --- OAuth app ---
    api_secret_key: SecretStr = SecretStr("")

    # --- Application ---
    log_level: str = "INFO"

    @property
    def secret_key(self) -> str:
        """Return the raw shared secret (empty string when unset)."""
        value = self.api_secret_key.get_secret_value()
        if not value:
            logger.warning(
                "API_SECRET_KEY is not set; HMAC verification will fail",
            )
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton."""
    return Settings()
