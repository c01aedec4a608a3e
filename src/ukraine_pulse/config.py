# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads the Gemini credential and app options from environment variables and .env file.

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ukraine_pulse.constants import TOPICS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # AI / Gemini
    gemini_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    gemini_model: str = "gemini-2.5-flash"
    imagen_model: str = "imagen-3.0-generate-002"
    generate_images: bool = True
    ai_max_attempts: int = Field(default=1, ge=1)  # 1 = no retries

    # Content
    topics: list[str] = Field(default_factory=lambda: list(TOPICS))
    timestamp_format: str = "%m/%d/%Y, %I:%M:%S %p"

    # Web
    focus_session_capacity: int = Field(default=256, ge=1)
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    @property
    def is_configured(self) -> bool:
        """True when a non-empty Gemini API key is available."""
        return bool(self.gemini_api_key and self.gemini_api_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables and .env file.
    The API key is optional here; its absence is reported as a "not configured" state.
    """
    return Settings()
