"""Turn raw provider text into validated results.

Provider text is untrusted.  Every entry point either returns a fully
validated model or raises a :class:`~interviewkit.core.errors.NormalizeError`
subclass; nothing partially built escapes.  Error messages describe what was
wrong, never the text itself, so callers can surface them safely and log the
raw reply separately.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from typing import Any

from pydantic import ValidationError

from interviewkit.core.errors import NotParsableError, WrongShapeError
from interviewkit.core.scoring import is_json_number, normalize_score
from interviewkit.models.enums import Difficulty, TaskKind
from interviewkit.models.results import (
    NormalizedResult,
    Question,
    QuestionSet,
    ScoreResult,
    SummaryResult,
)

logger = logging.getLogger("interviewkit.normalizer")

__all__ = [
    "normalize",
    "normalize_questions",
    "normalize_score_result",
    "normalize_summary_result",
    "parse_json",
    "strip_fence",
]

_FENCE_MARKER = "```"
_FENCE_OPEN = re.compile(r"^```[^\n]*\n")
_FENCE_CLOSE = re.compile(r"\n?```$")

_EXPECTED_DIFFICULTIES = [
    Difficulty.EASY,
    Difficulty.EASY,
    Difficulty.MEDIUM,
    Difficulty.MEDIUM,
    Difficulty.HARD,
    Difficulty.HARD,
]


def strip_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around *text*.

    ``"```json\\n[...]\\n```"`` becomes ``"[...]"``.  Unfenced text is only
    trimmed.  Fences are unwrapped until the text no longer starts with one
    or stops changing, so applying this twice gives the same result as
    applying it once.
    """
    cleaned = text.strip()
    while cleaned.startswith(_FENCE_MARKER):
        unwrapped = _FENCE_OPEN.sub("", cleaned, count=1)
        unwrapped = _FENCE_CLOSE.sub("", unwrapped, count=1).strip()
        if unwrapped == cleaned:
            break
        cleaned = unwrapped
    return cleaned


def parse_json(text: str) -> Any:
    """Strip any fence and decode *text* as JSON."""
    try:
        return json.loads(strip_fence(text))
    except json.JSONDecodeError as exc:
        raise NotParsableError(f"provider reply is not valid JSON: {exc.msg}") from None
    except ValueError:
        # int literals beyond sys.get_int_max_str_digits()
        raise NotParsableError("provider reply holds a number that cannot be decoded") from None
    except RecursionError:
        raise NotParsableError("provider reply is nested too deeply") from None


def normalize_questions(value: Any) -> QuestionSet:
    if not isinstance(value, list):
        raise WrongShapeError(f"expected a JSON array of questions, got {_kind(value)}")

    questions: QuestionSet = []
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            raise WrongShapeError(f"question {index} is {_kind(item)}, expected an object")
        text = item.get("question")
        if not isinstance(text, str) or not text.strip():
            raise WrongShapeError(f"question {index} has no question text")
        raw_difficulty = item.get("difficulty")
        if not isinstance(raw_difficulty, str):
            raise WrongShapeError(f"question {index} has no difficulty")
        try:
            difficulty = Difficulty.parse(raw_difficulty)
        except ValueError:
            raise WrongShapeError(
                f"question {index} has an unknown difficulty"
            ) from None

        time_limit = item.get("timeLimit")
        if time_limit is not None and not is_json_number(time_limit):
            logger.warning("Dropping unusable timeLimit on question %d", index)
            time_limit = None
        expected_answer = item.get("expectedAnswer") or None
        try:
            questions.append(
                Question(
                    id=str(uuid.uuid4()),
                    question=text,
                    difficulty=difficulty,
                    time_limit=time_limit,
                    expected_answer=expected_answer,
                )
            )
        except ValidationError:
            raise WrongShapeError(f"question {index} has invalid field types") from None

    difficulties = [q.difficulty for q in questions]
    if difficulties != _EXPECTED_DIFFICULTIES:
        logger.warning(
            "Provider returned %d questions not in the requested Easy/Medium/Hard layout",
            len(questions),
        )
    return questions


def normalize_score_result(value: Any) -> ScoreResult:
    fields = _scored_object(value, "feedback")
    return ScoreResult(score=fields["score"], feedback=fields["feedback"])


def normalize_summary_result(value: Any) -> SummaryResult:
    fields = _scored_object(value, "summary")
    return SummaryResult(score=fields["score"], summary=fields["summary"])


def normalize(task: TaskKind, raw_text: str) -> NormalizedResult:
    """Parse *raw_text* and validate it against the shape for *task*."""
    value = parse_json(raw_text)
    if task is TaskKind.GENERATE_QUESTIONS:
        return normalize_questions(value)
    if task is TaskKind.SCORE_ANSWER:
        return normalize_score_result(value)
    if task is TaskKind.SUMMARIZE:
        return normalize_summary_result(value)
    raise ValueError(f"unknown task kind: {task!r}")


def _scored_object(value: Any, text_key: str) -> dict[str, Any]:
    """Validate a ``{score, <text_key>}`` object and normalize its score."""
    if not isinstance(value, dict):
        raise WrongShapeError(f"expected a JSON object, got {_kind(value)}")

    text = value.get(text_key)
    if not isinstance(text, str):
        raise WrongShapeError(f"missing string field {text_key!r}")

    score = value.get("score")
    if score is not None:
        if not is_json_number(score):
            raise WrongShapeError("field 'score' is not a number")
        score = normalize_score(score)
    return {"score": score, text_key: text}


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, int | float):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    if isinstance(value, dict):
        return "an object"
    return type(value).__name__
