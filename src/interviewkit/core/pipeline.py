"""Invocation pipeline: validate, call the provider through the breaker, normalize."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

from pydantic import ValidationError

from interviewkit.core.circuit_breaker import CircuitBreaker
from interviewkit.core.errors import (
    BreakerError,
    EmptyUpstreamResponseError,
    InvalidInputError,
    MalformedUpstreamResponseError,
    NormalizeError,
    UpstreamUnavailableError,
)
from interviewkit.core.normalizer import normalize
from interviewkit.core.prompts import DEFAULT_TEMPERATURE, build_payload
from interviewkit.models.enums import TaskKind
from interviewkit.models.results import NormalizedResult, QuestionSet, ScoreResult, SummaryResult
from interviewkit.models.task import (
    AnswerRecord,
    GenerateQuestionsInput,
    QuestionRef,
    ScoreAnswerInput,
    SummarizeInput,
    TaskInput,
)
from interviewkit.providers.base import GenerativeProvider

logger = logging.getLogger("interviewkit.pipeline")

__all__ = ["InvocationPipeline", "extract_candidate_text", "parse_task_input"]

_INPUT_MODELS: dict[TaskKind, type[TaskInput]] = {
    TaskKind.GENERATE_QUESTIONS: GenerateQuestionsInput,
    TaskKind.SCORE_ANSWER: ScoreAnswerInput,
    TaskKind.SUMMARIZE: SummarizeInput,
}


def parse_task_input(task: TaskKind, body: Any) -> TaskInput:
    """Build the input model for *task* from a decoded JSON request body.

    Raises:
        InvalidInputError: *body* is not an object or a field has the wrong type.
    """
    if not isinstance(body, dict):
        raise InvalidInputError("request body must be a JSON object")
    try:
        return _INPUT_MODELS[task].model_validate(body)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise InvalidInputError(f"invalid fields: {fields}") from None


def extract_candidate_text(envelope: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or None if absent."""
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


def validate_task_input(task: TaskKind, task_input: TaskInput) -> None:
    """Check the fields *task* requires; raises :class:`InvalidInputError`."""
    expected = _INPUT_MODELS[task]
    if not isinstance(task_input, expected):
        raise InvalidInputError(f"{task} expects {expected.__name__}")

    if isinstance(task_input, GenerateQuestionsInput):
        if not task_input.resume_text:
            raise InvalidInputError("missing resumeText")
    elif isinstance(task_input, ScoreAnswerInput):
        if task_input.question is None or not task_input.answer or task_input.time_spent is None:
            raise InvalidInputError("missing question, answer or timeSpent")
    elif task_input.answers is None:
        raise InvalidInputError("missing answers array")


class InvocationPipeline:
    """Runs one task end to end against a generative provider.

    The pipeline holds no per-request state; the *breaker* is the only
    shared mutable piece and is owned by whoever constructed the pipeline.
    """

    def __init__(
        self,
        provider: GenerativeProvider,
        breaker: CircuitBreaker,
        *,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float | None = None,
    ) -> None:
        self._provider = provider
        self._breaker = breaker
        self._temperature = temperature
        self._timeout = timeout

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def temperature(self) -> float:
        return self._temperature

    async def invoke(self, task: TaskKind, task_input: TaskInput) -> NormalizedResult:
        """Run *task* and return its normalized result.

        Raises:
            InvalidInputError: Required fields are missing; nothing was sent.
            UpstreamUnavailableError: The breaker is open or the call failed
                or timed out.
            EmptyUpstreamResponseError: The reply carried no candidate text.
            MalformedUpstreamResponseError: The reply text could not be
                parsed or had the wrong shape.
        """
        validate_task_input(task, task_input)
        payload = build_payload(task, task_input, temperature=self._temperature)

        try:
            envelope = await self._breaker.execute(
                lambda: self._provider.generate_content(payload),
                timeout=self._timeout,
            )
        except BreakerError as exc:
            logger.warning(
                "Provider %s unavailable for %s: %s (cause: %r)",
                self._provider.name,
                task,
                exc,
                exc.__cause__,
            )
            raise UpstreamUnavailableError(str(exc)) from exc

        raw = extract_candidate_text(envelope)
        if raw is None:
            logger.error("No content returned from %s for %s", self._provider.name, task)
            raise EmptyUpstreamResponseError("provider returned no candidate text")

        try:
            return normalize(task, raw)
        except NormalizeError as exc:
            logger.error("Failed to normalize %s reply (%s). Raw output: %s", task, exc, raw)
            raise MalformedUpstreamResponseError(str(exc)) from exc

    # -- Task shortcuts --

    async def generate_questions(self, resume_text: str | None) -> QuestionSet:
        result = await self.invoke(
            TaskKind.GENERATE_QUESTIONS, GenerateQuestionsInput(resume_text=resume_text)
        )
        return cast(QuestionSet, result)

    async def score_answer(
        self,
        question: QuestionRef | None,
        answer: str | None,
        time_spent: float | None,
    ) -> ScoreResult:
        result = await self.invoke(
            TaskKind.SCORE_ANSWER,
            ScoreAnswerInput(question=question, answer=answer, time_spent=time_spent),
        )
        return cast(ScoreResult, result)

    async def summarize(self, answers: Sequence[AnswerRecord] | None) -> SummaryResult:
        result = await self.invoke(
            TaskKind.SUMMARIZE,
            SummarizeInput(answers=list(answers) if answers is not None else None),
        )
        return cast(SummaryResult, result)
