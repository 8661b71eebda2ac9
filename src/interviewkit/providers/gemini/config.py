"""Google Gemini provider configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr


class GeminiConfig(BaseModel):
    """Google Gemini ``generateContent`` endpoint configuration."""

    api_key: SecretStr
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout: float = Field(default=500.0, gt=0.0)

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"
