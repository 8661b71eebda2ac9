"""Caller-supplied task inputs.

Fields are optional at the model level so that a missing field surfaces as
:class:`~interviewkit.core.errors.InvalidInputError` from the pipeline rather
than as a transport-specific validation error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateQuestionsInput(_CamelModel):
    resume_text: str | None = Field(default=None, alias="resumeText")


class QuestionRef(_CamelModel):
    """The question an answer is being scored against."""

    question: str | None = None
    difficulty: str | None = None
    time_limit: int | float | None = Field(default=None, alias="timeLimit")


class ScoreAnswerInput(_CamelModel):
    question: QuestionRef | None = None
    answer: str | None = None
    time_spent: int | float | None = Field(default=None, alias="timeSpent")


class AnswerRecord(_CamelModel):
    """One answered question of an interview session.

    Clients send whatever they recorded (the question may be a plain string
    or the full question object), so fields are untyped and unknown keys are
    kept for the summary prompt.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    question: Any = None
    answer: Any = None
    time_spent: Any = Field(default=None, alias="timeSpent")
    score: Any = None
    feedback: Any = None

    def to_prompt_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SummarizeInput(_CamelModel):
    answers: list[AnswerRecord] | None = None


TaskInput = GenerateQuestionsInput | ScoreAnswerInput | SummarizeInput
