"""Data models for interviewkit."""

from interviewkit.models.breaker import BreakerConfig
from interviewkit.models.enums import CircuitState, Difficulty, TaskKind
from interviewkit.models.results import (
    NormalizedResult,
    Question,
    QuestionSet,
    ScoreResult,
    SummaryResult,
)
from interviewkit.models.task import (
    AnswerRecord,
    GenerateQuestionsInput,
    QuestionRef,
    ScoreAnswerInput,
    SummarizeInput,
    TaskInput,
)

__all__ = [
    "AnswerRecord",
    "BreakerConfig",
    "CircuitState",
    "Difficulty",
    "GenerateQuestionsInput",
    "NormalizedResult",
    "Question",
    "QuestionRef",
    "QuestionSet",
    "ScoreAnswerInput",
    "ScoreResult",
    "SummarizeInput",
    "SummaryResult",
    "TaskInput",
    "TaskKind",
]
