"""All string enums for interviewkit."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class CircuitState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@unique
class TaskKind(StrEnum):
    GENERATE_QUESTIONS = "generate_questions"
    SCORE_ANSWER = "score_answer"
    SUMMARIZE = "summarize"


@unique
class Difficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, value: str) -> Difficulty:
        """Match *value* case-insensitively; raises ``ValueError`` if unknown."""
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"unknown difficulty: {value!r}")
