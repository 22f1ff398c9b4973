"""Utilities for importing gameshow questions from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text. Additional lines until the next marker are treated
       as part of the question.
    TYPE: text | multiple_choice | true_false   (optional, default text)
    OPTION: One offered choice                  (repeat; multiple_choice only)
    CORRECT: The expected answer                (optional)
    POINTS: Positive integer                    (optional, default 100)
    IMAGE: Image reference shown on the big screen (optional)

Example:

    Q: What is 2 + 2?
    CORRECT: 4

    Q: Which planet is largest?
    TYPE: multiple_choice
    OPTION: Mars
    OPTION: Jupiter
    OPTION: Venus
    CORRECT: Jupiter
    POINTS: 200
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gameshow_app.constants.gameshow_constants import DEFAULT_QUESTION_POINTS
from gameshow_app.core.models import Question, QuestionType


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    questions: list[Question]


_SINGLE_VALUE_KEYS = ("TYPE", "CORRECT", "POINTS", "IMAGE")


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_quiz_text(text)
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, questions=questions)


def parse_quiz_text(text: str) -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block) for block in blocks if block]


def _parse_block(block: str) -> Question:
    question_lines: list[str] = []
    options: list[str] = []
    values: dict[str, str] = {}
    in_question = False

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        key, _, rest = line.partition(":")
        key = key.strip().upper()
        if key == "Q":
            question_lines = [rest.strip()]
            in_question = True
            continue
        if key == "OPTION":
            option = rest.strip()
            if not option:
                raise QuizImportError("Option text cannot be empty.")
            options.append(option)
            in_question = False
            continue
        if key in _SINGLE_VALUE_KEYS:
            values[key] = rest.strip()
            in_question = False
            continue

        if in_question:
            question_lines.append(line)
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    try:
        question_type = QuestionType(values.get("TYPE", QuestionType.TEXT.value).lower())
    except ValueError as exc:
        raise QuizImportError(f"Unknown question TYPE: '{values['TYPE']}'.") from exc

    if question_type is QuestionType.MULTIPLE_CHOICE and len(options) < 2:
        raise QuizImportError("Multiple-choice questions need at least two OPTION lines.")
    if question_type is not QuestionType.MULTIPLE_CHOICE and options:
        raise QuizImportError("OPTION lines are only allowed for multiple_choice questions.")

    correct_answer = values.get("CORRECT") or None
    if (
        correct_answer is not None
        and question_type is QuestionType.MULTIPLE_CHOICE
        and correct_answer not in options
    ):
        raise QuizImportError("CORRECT must match one of the OPTION lines.")

    return Question(
        id="",  # assigned by the question registry when the quiz is loaded
        text=question_text,
        type=question_type,
        image=values.get("IMAGE") or None,
        options=options,
        correct_answer=correct_answer,
        points=_parse_points(values.get("POINTS")),
    )


def _parse_points(raw_value: str | None) -> int:
    if raw_value is None:
        return DEFAULT_QUESTION_POINTS
    if not raw_value:
        raise QuizImportError("POINTS must include an integer value.")
    try:
        points = int(raw_value)
    except ValueError as exc:
        raise QuizImportError("POINTS must be an integer.") from exc
    if points <= 0:
        raise QuizImportError("POINTS must be a positive integer.")
    return points
