"""Tests for response normalization."""

from __future__ import annotations

import json
import uuid

import pytest

from interviewkit.core.errors import NormalizeError, NotParsableError, WrongShapeError
from interviewkit.core.normalizer import normalize, parse_json, strip_fence
from interviewkit.models.enums import Difficulty, TaskKind
from interviewkit.models.results import Question, ScoreResult, SummaryResult
from tests.conftest import QUESTIONS_JSON


def _fenced(body: str, lang: str = "json") -> str:
    return f"```{lang}\n{body}\n```"


class TestStripFence:
    def test_strips_json_fence(self) -> None:
        assert strip_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_bare_fence(self) -> None:
        assert strip_fence("```\n[1, 2]\n```") == "[1, 2]"

    def test_tolerates_surrounding_whitespace(self) -> None:
        assert strip_fence('  \n```json\n{"a": 1}\n```\n  ') == '{"a": 1}'

    def test_missing_closing_fence(self) -> None:
        assert strip_fence('```json\n{"a": 1}') == '{"a": 1}'

    def test_unfenced_text_is_only_trimmed(self) -> None:
        assert strip_fence('  {"a": 1}\n') == '{"a": 1}'

    @pytest.mark.parametrize(
        "text",
        [
            '{"a": 1}',
            "  [1, 2]  ",
            "not json",
            "",
            _fenced('{"a": 1}'),
            "```\n```",
            "``````",
            "```json\n```\n```",
            "``` ```",
            _fenced(_fenced("[1]")),
        ],
    )
    def test_idempotent(self, text: str) -> None:
        once = strip_fence(text)
        assert strip_fence(once) == once

    def test_inner_backticks_preserved(self) -> None:
        body = '{"code": "use ```x``` here"}'
        assert strip_fence(_fenced(body)) == body


class TestParseJson:
    def test_parses_fenced_json(self) -> None:
        assert parse_json(_fenced('{"score": 1}')) == {"score": 1}

    @pytest.mark.parametrize("text", ["not json", "", "```json\n{oops\n```", "{'a': 1}"])
    def test_not_parsable(self, text: str) -> None:
        with pytest.raises(NotParsableError):
            parse_json(text)

    def test_error_does_not_echo_raw_text(self) -> None:
        secret = "candidate-secret-text-123"
        with pytest.raises(NotParsableError) as exc_info:
            parse_json(f"Sure! {secret}")
        assert secret not in str(exc_info.value)

    def test_deeply_nested_input_is_classified(self) -> None:
        with pytest.raises(NotParsableError):
            parse_json("[" * 100_000 + "]" * 100_000)

    def test_number_beyond_int_digit_limit_is_classified(self) -> None:
        with pytest.raises(NotParsableError):
            parse_json('{"score": 1' + "0" * 5000 + ', "feedback": "x"}')


class TestGenerateQuestions:
    def test_fenced_array_of_six(self) -> None:
        result = normalize(TaskKind.GENERATE_QUESTIONS, _fenced(QUESTIONS_JSON))

        assert isinstance(result, list)
        assert len(result) == 6
        assert all(isinstance(q, Question) for q in result)
        expected = [q["question"] for q in json.loads(QUESTIONS_JSON)]
        assert [q.question for q in result] == expected
        assert [q.difficulty for q in result] == [
            Difficulty.EASY,
            Difficulty.EASY,
            Difficulty.MEDIUM,
            Difficulty.MEDIUM,
            Difficulty.HARD,
            Difficulty.HARD,
        ]

    def test_ids_are_fresh_and_unique(self) -> None:
        first = normalize(TaskKind.GENERATE_QUESTIONS, QUESTIONS_JSON)
        second = normalize(TaskKind.GENERATE_QUESTIONS, QUESTIONS_JSON)
        ids = [q.id for q in first] + [q.id for q in second]
        assert len(set(ids)) == 12
        for value in ids:
            uuid.UUID(value)

    def test_provider_ids_are_ignored(self) -> None:
        raw = '[{"id": "p1", "question": "Q?", "difficulty": "Easy", "timeLimit": 20}]'
        (question,) = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        assert question.id != "p1"

    def test_optional_fields_default_to_none(self) -> None:
        raw = '[{"question": "Q?", "difficulty": "Hard", "expectedAnswer": ""}]'
        (question,) = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        assert question.time_limit is None
        assert question.expected_answer is None

    def test_expected_answer_kept(self) -> None:
        raw = '[{"question": "Q?", "difficulty": "Easy", "expectedAnswer": "A"}]'
        (question,) = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        assert question.expected_answer == "A"

    def test_difficulty_is_case_insensitive(self) -> None:
        raw = '[{"question": "Q?", "difficulty": "medium", "timeLimit": 60}]'
        (question,) = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        assert question.difficulty is Difficulty.MEDIUM

    def test_serializes_with_camel_case_keys(self) -> None:
        raw = '[{"question": "Q?", "difficulty": "Easy", "timeLimit": 20}]'
        (question,) = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        dumped = question.model_dump(by_alias=True)
        assert set(dumped) == {"id", "question", "difficulty", "timeLimit", "expectedAnswer"}
        assert dumped["timeLimit"] == 20

    def test_unexpected_layout_is_accepted(self, caplog: pytest.LogCaptureFixture) -> None:
        raw = '[{"question": "Q?", "difficulty": "Hard"}]'
        with caplog.at_level("WARNING", logger="interviewkit.normalizer"):
            result = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        assert len(result) == 1
        assert "Easy/Medium/Hard layout" in caplog.text

    @pytest.mark.parametrize("raw", ['{"question": "Q?"}', '"text"', "42", "null"])
    def test_non_array_is_wrong_shape(self, raw: str) -> None:
        with pytest.raises(WrongShapeError):
            normalize(TaskKind.GENERATE_QUESTIONS, raw)

    @pytest.mark.parametrize(
        "item",
        [
            '"just a string"',
            '{"difficulty": "Easy"}',
            '{"question": "", "difficulty": "Easy"}',
            '{"question": "Q?"}',
            '{"question": "Q?", "difficulty": "Impossible"}',
        ],
    )
    def test_invalid_items_are_wrong_shape(self, item: str) -> None:
        with pytest.raises(WrongShapeError):
            normalize(TaskKind.GENERATE_QUESTIONS, f"[{item}]")

    @pytest.mark.parametrize("time_limit", ['"60 seconds"', "true", "[60]", "{}"])
    def test_unusable_time_limit_is_dropped(
        self, time_limit: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        raw = f'[{{"question": "Q?", "difficulty": "Easy", "timeLimit": {time_limit}}}]'
        with caplog.at_level("WARNING", logger="interviewkit.normalizer"):
            result = normalize(TaskKind.GENERATE_QUESTIONS, raw)
        assert result[0].question == "Q?"
        assert result[0].time_limit is None
        assert "timeLimit" in caplog.text


class TestScoreAnswer:
    def test_fractional_score_is_scaled(self) -> None:
        result = normalize(TaskKind.SCORE_ANSWER, '{"score":0.72,"feedback":"ok"}')
        assert result == ScoreResult(score=72, feedback="ok")

    def test_percentage_score_is_rounded(self) -> None:
        result = normalize(TaskKind.SCORE_ANSWER, _fenced('{"score": 84.6, "feedback": "good"}'))
        assert isinstance(result, ScoreResult)
        assert result.score == 85

    def test_missing_score_passes_through(self) -> None:
        result = normalize(TaskKind.SCORE_ANSWER, '{"feedback": "no score"}')
        assert isinstance(result, ScoreResult)
        assert result.score is None

    @pytest.mark.parametrize(
        ("digits", "expected"), [("1" + "0" * 400, 100), ("-1" + "0" * 400, 0)]
    )
    def test_huge_integer_score_is_clamped(self, digits: str, expected: int) -> None:
        result = normalize(TaskKind.SCORE_ANSWER, f'{{"score": {digits}, "feedback": "x"}}')
        assert result == ScoreResult(score=expected, feedback="x")

    def test_extra_keys_are_dropped(self) -> None:
        result = normalize(TaskKind.SCORE_ANSWER, '{"score": 90, "feedback": "f", "x": 1}')
        assert result.model_dump() == {"score": 90, "feedback": "f"}

    @pytest.mark.parametrize(
        "raw",
        [
            "[]",
            '"85"',
            '{"score": 80}',
            '{"score": 80, "feedback": 3}',
            '{"score": "80", "feedback": "f"}',
            '{"score": true, "feedback": "f"}',
        ],
    )
    def test_wrong_shape(self, raw: str) -> None:
        with pytest.raises(WrongShapeError):
            normalize(TaskKind.SCORE_ANSWER, raw)


class TestSummarize:
    def test_summary_result(self) -> None:
        result = normalize(TaskKind.SUMMARIZE, '{"score": 0.9, "summary": "Strong."}')
        assert result == SummaryResult(score=90, summary="Strong.")

    def test_feedback_key_is_not_a_summary(self) -> None:
        with pytest.raises(WrongShapeError):
            normalize(TaskKind.SUMMARIZE, '{"score": 90, "feedback": "f"}')


class TestMalformedText:
    @pytest.mark.parametrize("task", list(TaskKind))
    def test_not_json_is_classified_for_every_task(self, task: TaskKind) -> None:
        with pytest.raises(NotParsableError):
            normalize(task, "not json")

    @pytest.mark.parametrize("task", list(TaskKind))
    def test_failures_share_a_base_class(self, task: TaskKind) -> None:
        with pytest.raises(NormalizeError):
            normalize(task, "true")
