"""Google Gemini provider."""

from interviewkit.providers.gemini.client import GeminiClient
from interviewkit.providers.gemini.config import GeminiConfig

__all__ = ["GeminiClient", "GeminiConfig"]
