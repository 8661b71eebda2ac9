"""HTTP transport for interviewkit."""

from interviewkit.server.app import build_pipeline, create_app
from interviewkit.server.settings import Settings

__all__ = ["Settings", "build_pipeline", "create_app"]
