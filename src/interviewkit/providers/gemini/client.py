"""Google Gemini client: POSTs payloads to the ``generateContent`` endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from interviewkit.core.errors import ProviderError
from interviewkit.providers.base import GenerativeProvider
from interviewkit.providers.gemini.config import GeminiConfig

logger = logging.getLogger(__name__)

_RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class GeminiClient(GenerativeProvider):
    """Generative provider backed by the Gemini REST API over ``httpx``."""

    def __init__(self, config: GeminiConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient = httpx.AsyncClient(timeout=config.timeout)

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def config(self) -> GeminiConfig:
        return self._config

    async def generate_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._client.post(
                self._config.endpoint_url,
                json=payload,
                headers=self._build_headers(),
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as exc:
            raise ProviderError(
                "request timed out", retryable=True, provider=self.name
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Gemini returned HTTP %d: %s", status, exc.response.text[:500])
            raise ProviderError(
                f"http_{status}",
                retryable=status in _RETRYABLE_STATUSES,
                provider=self.name,
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(str(exc), retryable=True, provider=self.name) from exc
        except ValueError as exc:
            raise ProviderError(
                "response body is not JSON",
                provider=self.name,
                status_code=resp.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise ProviderError("response body is not a JSON object", provider=self.name)
        return data

    def _build_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self._config.api_key.get_secret_value(),
        }

    async def close(self) -> None:
        await self._client.aclose()
