"""Utilities for exporting questions to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path

from gameshow_app.constants.gameshow_constants import DEFAULT_QUESTION_POINTS
from gameshow_app.core.models import Question, QuestionType


def save_quiz_to_file(file_path: Path, questions: list[Question]) -> None:
    """Persist the provided questions to disk in the text import format."""

    if not questions:
        raise ValueError("Cannot export an empty quiz.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_questions(questions), encoding="utf-8")


def serialize_questions(questions: list[Question]) -> str:
    blocks = [_serialize_question(question) for question in questions]
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    text_lines = question.text.splitlines() or [question.text]
    lines = [f"Q: {text_lines[0]}", *text_lines[1:]]

    if question.type is not QuestionType.TEXT:
        lines.append(f"TYPE: {question.type.value}")
    if question.type is QuestionType.MULTIPLE_CHOICE:
        lines.extend(f"OPTION: {option}" for option in question.options)
    if question.correct_answer is not None:
        lines.append(f"CORRECT: {question.correct_answer}")
    if question.points != DEFAULT_QUESTION_POINTS:
        lines.append(f"POINTS: {question.points}")
    if question.image:
        lines.append(f"IMAGE: {question.image}")

    return "\n".join(lines)
