"""Process settings loaded from the environment and an optional ``.env`` file."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from interviewkit.models.breaker import BreakerConfig
from interviewkit.providers.gemini.config import GeminiConfig


class Settings(BaseSettings):
    """Runtime configuration for the HTTP service.

    ``GEMINI_API_KEY`` is required; constructing ``Settings`` without it
    raises ``pydantic.ValidationError``.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    gemini_api_key: SecretStr
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 0.7

    port: int = 5000
    cors_allowed_origins: str | None = Field(
        default=None, description="Comma-separated list; unset allows any origin"
    )
    log_level: str = "INFO"

    breaker_timeout: float = 500.0
    breaker_error_threshold_percentage: float = 50.0
    breaker_reset_timeout: float = 30.0
    breaker_rolling_window_size: int = 20
    breaker_volume_threshold: int = 5

    def cors_origins(self) -> list[str]:
        if not self.cors_allowed_origins:
            return ["*"]
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def gemini_config(self) -> GeminiConfig:
        return GeminiConfig(
            api_key=self.gemini_api_key,
            model=self.gemini_model,
            base_url=self.gemini_base_url,
            temperature=self.gemini_temperature,
            timeout=self.breaker_timeout,
        )

    def breaker_config(self) -> BreakerConfig:
        return BreakerConfig(
            timeout=self.breaker_timeout,
            error_threshold_percentage=self.breaker_error_threshold_percentage,
            reset_timeout=self.breaker_reset_timeout,
            rolling_window_size=self.breaker_rolling_window_size,
            volume_threshold=self.breaker_volume_threshold,
        )
