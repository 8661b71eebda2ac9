"""Normalized results returned to callers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from interviewkit.models.enums import Difficulty


class Question(BaseModel):
    """A generated interview question with a locally assigned id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str
    difficulty: Difficulty
    time_limit: int | float | None = Field(default=None, alias="timeLimit")
    expected_answer: str | None = Field(default=None, alias="expectedAnswer")


QuestionSet = list[Question]


class ScoreResult(BaseModel):
    score: int | None = Field(default=None, ge=0, le=100)
    feedback: str


class SummaryResult(BaseModel):
    score: int | None = Field(default=None, ge=0, le=100)
    summary: str


NormalizedResult = QuestionSet | ScoreResult | SummaryResult
