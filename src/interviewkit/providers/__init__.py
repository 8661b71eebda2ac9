"""Generative provider integrations."""

from interviewkit.providers.base import GenerativeProvider
from interviewkit.providers.mock import MockGenerativeProvider, candidate_envelope

__all__ = ["GenerativeProvider", "MockGenerativeProvider", "candidate_envelope"]
