"""Prompt text and provider payloads for each task kind."""

from __future__ import annotations

import json
from typing import Any

from interviewkit.core.errors import InvalidInputError
from interviewkit.models.enums import TaskKind
from interviewkit.models.task import (
    GenerateQuestionsInput,
    QuestionRef,
    ScoreAnswerInput,
    SummarizeInput,
    TaskInput,
)

DEFAULT_TEMPERATURE = 0.7

SYSTEM_PROMPTS: dict[TaskKind, str] = {
    TaskKind.GENERATE_QUESTIONS: (
        "You are an AI assistant that generates interview questions for a Full Stack "
        "Developer role focusing on React and Node.js. You will create exactly 6 "
        "questions: first 2 Easy, then 2 Medium, then 2 Hard. Return only a JSON array "
        "of objects with keys: question (string), difficulty (Easy, Medium, Hard), "
        "timeLimit (number of seconds). Do not include any extra text."
    ),
    TaskKind.SCORE_ANSWER: (
        "You are an AI assistant that scores interview answers. Provide only a JSON "
        "object with keys: score (integer between 0 and 100), feedback (string). "
        "Do not include extra text."
    ),
    TaskKind.SUMMARIZE: (
        "You are an AI assistant that summarizes interview answers and computes a final "
        "score. Provide only a JSON object with keys: score (integer between 0 and 100), "
        "summary (string). Do not include extra text."
    ),
}


def build_user_prompt(task: TaskKind, task_input: TaskInput) -> str:
    """Render the user half of the prompt.

    Raises:
        InvalidInputError: *task_input* is not the input model for *task*.
    """
    if task is TaskKind.GENERATE_QUESTIONS and isinstance(task_input, GenerateQuestionsInput):
        return (
            "Generate 6 interview questions for a Full Stack (React/Node.js) developer "
            "based on the following resume. The questions should be ordered: first 2 "
            f"Easy, next 2 Medium, last 2 Hard.\nResume:\n{task_input.resume_text}"
        )
    if task is TaskKind.SCORE_ANSWER and isinstance(task_input, ScoreAnswerInput):
        question = task_input.question or QuestionRef()
        return (
            f"Question: {question.question}\n"
            f"Difficulty: {question.difficulty}\n"
            f"Time limit: {question.time_limit}\n"
            f"Candidate answer: {task_input.answer}\n"
            f"Time spent: {task_input.time_spent}"
        )
    if task is TaskKind.SUMMARIZE and isinstance(task_input, SummarizeInput):
        answers = [record.to_prompt_dict() for record in task_input.answers or []]
        return f"Here are the candidate's answers:\n{json.dumps(answers, indent=2)}"
    raise InvalidInputError(f"{task} cannot be built from {type(task_input).__name__}")


def build_payload(
    task: TaskKind,
    task_input: TaskInput,
    *,
    temperature: float = DEFAULT_TEMPERATURE,
) -> dict[str, Any]:
    """Build a ``generateContent`` request body for *task*."""
    text = f"{SYSTEM_PROMPTS[task]}\n\n{build_user_prompt(task, task_input)}"
    return {
        "contents": [{"role": "user", "parts": [{"text": text}]}],
        "generationConfig": {"temperature": temperature},
    }
