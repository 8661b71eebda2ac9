"""FastAPI application factory for the interview relay.

The HTTP layer is a thin wrapper around :class:`InvocationPipeline`: it
decodes the request body, runs one task, and maps the outcome to a status
code.  Error responses are generic; provider text never reaches the client.

Usage:
    >>> app = create_app(Settings())
    >>> # uvicorn interviewkit.server.app:create_app --factory
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from interviewkit.core.circuit_breaker import CircuitBreaker
from interviewkit.core.errors import InvalidInputError, PipelineError
from interviewkit.core.pipeline import InvocationPipeline, parse_task_input
from interviewkit.models.enums import TaskKind
from interviewkit.providers.base import GenerativeProvider
from interviewkit.providers.gemini.client import GeminiClient
from interviewkit.server.settings import Settings

logger = logging.getLogger("interviewkit.server")


@dataclasses.dataclass(frozen=True)
class _Route:
    path: str
    task: TaskKind
    invalid_message: str
    failure_message: str


_ROUTES = (
    _Route(
        "/api/gemini/generate-questions",
        TaskKind.GENERATE_QUESTIONS,
        "Missing resumeText in request body",
        "Failed to generate questions",
    ),
    _Route(
        "/api/gemini/score-answer",
        TaskKind.SCORE_ANSWER,
        "Missing fields in request body",
        "Failed to score answer",
    ),
    _Route(
        "/api/gemini/generate-summary",
        TaskKind.SUMMARIZE,
        "Missing answers array in request body",
        "Failed to generate summary",
    ),
)


@dataclasses.dataclass
class _AppState:
    """Objects created in the lifespan and read by request handlers.

    The lifespan runs to ``yield`` before the first request, so handlers
    always see a pipeline unless one was never configured.
    """

    settings: Settings | None = None
    pipeline: InvocationPipeline | None = None
    provider: GenerativeProvider | None = None


def build_pipeline(settings: Settings) -> tuple[InvocationPipeline, GenerativeProvider]:
    """Create the process-wide provider client, breaker and pipeline."""
    config = settings.gemini_config()
    provider = GeminiClient(config)
    breaker = CircuitBreaker(settings.breaker_config(), name="gemini")
    pipeline = InvocationPipeline(
        provider, breaker, temperature=config.temperature, timeout=settings.breaker_timeout
    )
    return pipeline, provider


async def _read_json(request: Request) -> Any:
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def create_app(
    settings: Settings | None = None,
    *,
    pipeline: InvocationPipeline | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Process settings.  Loaded from the environment when omitted
            and no *pipeline* is given.
        pipeline: A ready pipeline to serve.  When given, the lifespan does
            not build a provider client or breaker of its own.

    Returns:
        Configured FastAPI application.
    """
    if settings is None and pipeline is None:
        settings = Settings()  # type: ignore[call-arg]  # fields populated from env vars at runtime
    state = _AppState(settings=settings, pipeline=pipeline)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
        owns_pipeline = state.pipeline is None
        if owns_pipeline:
            assert state.settings is not None
            state.pipeline, state.provider = build_pipeline(state.settings)
            logger.info("Gemini pipeline ready (model=%s)", state.settings.gemini_model)

        yield

        if owns_pipeline and state.provider is not None:
            await state.provider.close()
            state.provider = None
            state.pipeline = None
            logger.info("Gemini client closed")

    app = FastAPI(title="interviewkit", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins() if settings is not None else ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    def _register(route: _Route) -> None:
        async def handler(request: Request) -> JSONResponse:
            body = await _read_json(request)
            if state.pipeline is None:
                logger.error("Request to %s before the pipeline was ready", route.path)
                return JSONResponse(status_code=500, content={"error": route.failure_message})
            try:
                task_input = parse_task_input(route.task, body)
                result = await state.pipeline.invoke(route.task, task_input)
            except InvalidInputError as exc:
                logger.info("Rejected %s: %s", route.path, exc)
                return JSONResponse(status_code=400, content={"error": route.invalid_message})
            except PipelineError as exc:
                logger.error("%s: %s: %s", route.failure_message, type(exc).__name__, exc)
                return JSONResponse(status_code=500, content={"error": route.failure_message})
            except Exception:
                logger.exception("%s: unexpected error", route.failure_message)
                return JSONResponse(status_code=500, content={"error": route.failure_message})
            return JSONResponse(content=jsonable_encoder(result, by_alias=True))

        handler.__name__ = route.task.value
        app.add_api_route(route.path, handler, methods=["POST"])

    for route in _ROUTES:
        _register(route)

    return app


__all__ = ["build_pipeline", "create_app"]
