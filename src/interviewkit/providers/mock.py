"""Mock generative provider for testing."""

from __future__ import annotations

from typing import Any

from interviewkit.providers.base import GenerativeProvider


def candidate_envelope(text: str) -> dict[str, Any]:
    """Wrap *text* the way ``generateContent`` returns it."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class MockGenerativeProvider(GenerativeProvider):
    """Round-robin reply provider for tests.

    Each entry of *replies* is either a reply text (wrapped in a candidate
    envelope), a raw envelope ``dict``, or an exception instance to raise.
    """

    def __init__(self, replies: list[str | dict[str, Any] | Exception] | None = None) -> None:
        self.replies = replies or ["{}"]
        self.calls: list[dict[str, Any]] = []
        self._index = 0

    async def generate_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(payload)
        reply = self.replies[self._index % len(self.replies)]
        self._index += 1
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return reply
        return candidate_envelope(reply)
