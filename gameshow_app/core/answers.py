"""Coercion and grading of team answers against the running question."""

from __future__ import annotations

from gameshow_app.core.models import (
    Answer,
    FreeTextAnswer,
    MultipleChoiceAnswer,
    Question,
    QuestionType,
    TrueFalseAnswer,
)

_TRUE_WORDS = frozenset({"true", "t", "yes", "y", "1"})
_FALSE_WORDS = frozenset({"false", "f", "no", "n", "0"})


def parse_answer(question: Question, raw: Answer | str | int | bool) -> Answer:
    """Turn a raw submission into the answer variant matching ``question.type``.

    Raises ``ValueError`` when the value cannot be read for that question type.
    """
    if isinstance(raw, (FreeTextAnswer, MultipleChoiceAnswer, TrueFalseAnswer)):
        if raw.kind != question.type.value:
            raise ValueError(
                f"A {raw.kind} answer cannot be given to a {question.type.value} question."
            )
        return raw

    if question.type is QuestionType.TEXT:
        if isinstance(raw, bool) or not isinstance(raw, (str, int)):
            raise ValueError("Free-text answers must be text.")
        return FreeTextAnswer(text=str(raw))

    if question.type is QuestionType.MULTIPLE_CHOICE:
        return MultipleChoiceAnswer(choice=_resolve_choice(question.options, raw), options=list(question.options))

    value = _parse_bool(raw)
    if value is None:
        raise ValueError(f"Cannot read {raw!r} as true or false.")
    return TrueFalseAnswer(value=value)


def grade_answer(question: Question, answer: Answer) -> bool | None:
    """Return whether ``answer`` is right, or None when it cannot be graded."""
    if question.correct_answer is None or answer.kind != question.type.value:
        return None

    if isinstance(answer, TrueFalseAnswer):
        expected = _parse_bool(question.correct_answer)
        if expected is None:
            return None
        return answer.value is expected

    if isinstance(answer, MultipleChoiceAnswer):
        return _normalize(answer.choice) == _normalize(question.correct_answer)

    return _normalize(answer.text) == _normalize(question.correct_answer)


def _resolve_choice(options: list[str], raw: str | int | bool) -> str:
    if isinstance(raw, bool):
        raise ValueError("Multiple-choice answers must be an option or its index.")
    if isinstance(raw, int):
        if not 0 <= raw < len(options):
            raise ValueError(f"Option index {raw} out of range")
        return options[raw]
    if not isinstance(raw, str):
        raise ValueError("Multiple-choice answers must be an option or its index.")
    if not options:
        return raw
    wanted = _normalize(raw)
    for option in options:
        if _normalize(option) == wanted:
            return option
    raise ValueError(f"{raw!r} is not one of the offered options.")


def _parse_bool(raw: object) -> bool | None:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        word = _normalize(raw)
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def _normalize(text: str) -> str:
    return " ".join(text.split()).casefold()
