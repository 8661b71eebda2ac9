"""Shared test fixtures and helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import pytest

from interviewkit.core.circuit_breaker import CircuitBreaker
from interviewkit.core.pipeline import InvocationPipeline
from interviewkit.models.breaker import BreakerConfig
from interviewkit.providers.mock import MockGenerativeProvider


class FakeClock:
    """Manually advanced monotonic clock for breaker timing."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def advance() -> Callable[[int], Coroutine[Any, Any, None]]:
    """Yield control to let pending tasks run without real delay."""

    async def _advance(n: int = 5) -> None:
        for _ in range(n):
            await asyncio.sleep(0)

    return _advance


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def breaker_config() -> BreakerConfig:
    return BreakerConfig(
        timeout=5.0,
        error_threshold_percentage=50.0,
        reset_timeout=30.0,
        rolling_window_size=10,
        volume_threshold=3,
    )


@pytest.fixture
def breaker(breaker_config: BreakerConfig, clock: FakeClock) -> CircuitBreaker:
    return CircuitBreaker(breaker_config, name="test", clock=clock)


def make_pipeline(
    replies: list[str | dict[str, Any] | Exception],
    breaker: CircuitBreaker | None = None,
) -> tuple[InvocationPipeline, MockGenerativeProvider]:
    provider = MockGenerativeProvider(replies)
    pipeline = InvocationPipeline(provider, breaker or CircuitBreaker(name="test"))
    return pipeline, provider


QUESTIONS_JSON = """[
  {"question": "What is JSX?", "difficulty": "Easy", "timeLimit": 20},
  {"question": "What does npm do?", "difficulty": "Easy", "timeLimit": 20},
  {"question": "Explain React hooks.", "difficulty": "Medium", "timeLimit": 60},
  {"question": "How does Express middleware work?", "difficulty": "Medium", "timeLimit": 60},
  {"question": "Design a rate limiter.", "difficulty": "Hard", "timeLimit": 120},
  {"question": "Scale a Node.js service.", "difficulty": "Hard", "timeLimit": 120}
]"""
