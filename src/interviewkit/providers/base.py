"""Abstract base for generative text providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class GenerativeProvider(ABC):
    """A provider endpoint that turns a request payload into a reply envelope."""

    @property
    def name(self) -> str:
        """Provider name (e.g. 'gemini')."""
        return self.__class__.__name__

    @abstractmethod
    async def generate_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST *payload* and return the decoded JSON envelope.

        Raises:
            ProviderError: The request failed, timed out, or the provider
                answered with a non-success status or a non-JSON body.
        """
        ...

    async def close(self) -> None:  # noqa: B027
        """Release any held resources."""
