import pytest

from gameshow_app.core.answers import grade_answer, parse_answer
from gameshow_app.core.models import (
    FreeTextAnswer,
    MultipleChoiceAnswer,
    Question,
    QuestionType,
    TrueFalseAnswer,
)


def _question(type, **kwargs):
    return Question(id="q", text="?", type=type, **kwargs)


def test_free_text_answers_accept_strings_and_numbers():
    question = _question(QuestionType.TEXT)
    assert parse_answer(question, "Paris") == FreeTextAnswer(text="Paris")
    assert parse_answer(question, 4) == FreeTextAnswer(text="4")
    with pytest.raises(ValueError):
        parse_answer(question, True)


def test_multiple_choice_by_index_or_text():
    question = _question(QuestionType.MULTIPLE_CHOICE, options=["Red", "Green"])
    assert parse_answer(question, 0).choice == "Red"
    assert parse_answer(question, "  green ").choice == "Green"
    with pytest.raises(ValueError):
        parse_answer(question, 2)
    with pytest.raises(ValueError):
        parse_answer(question, "Blue")


def test_true_false_words():
    question = _question(QuestionType.TRUE_FALSE)
    assert parse_answer(question, "Yes") == TrueFalseAnswer(value=True)
    assert parse_answer(question, "false") == TrueFalseAnswer(value=False)
    assert parse_answer(question, False) == TrueFalseAnswer(value=False)
    with pytest.raises(ValueError):
        parse_answer(question, "maybe")


def test_variant_must_match_question_type():
    question = _question(QuestionType.TRUE_FALSE)
    with pytest.raises(ValueError):
        parse_answer(question, FreeTextAnswer(text="true"))


def test_grading():
    text = _question(QuestionType.TEXT, correct_answer="Paris")
    assert grade_answer(text, FreeTextAnswer(text="  paris ")) is True
    assert grade_answer(text, FreeTextAnswer(text="Rome")) is False

    choice = _question(QuestionType.MULTIPLE_CHOICE, options=["A", "B"], correct_answer="B")
    assert grade_answer(choice, MultipleChoiceAnswer(choice="B", options=["A", "B"])) is True
    assert grade_answer(choice, MultipleChoiceAnswer(choice="A", options=["A", "B"])) is False

    truth = _question(QuestionType.TRUE_FALSE, correct_answer="true")
    assert grade_answer(truth, TrueFalseAnswer(value=True)) is True
    assert grade_answer(truth, TrueFalseAnswer(value=False)) is False


def test_ungradable_answers_return_none():
    assert grade_answer(_question(QuestionType.TEXT), FreeTextAnswer(text="x")) is None
    truth = _question(QuestionType.TRUE_FALSE, correct_answer="perhaps")
    assert grade_answer(truth, TrueFalseAnswer(value=True)) is None
    text = _question(QuestionType.TEXT, correct_answer="true")
    assert grade_answer(text, TrueFalseAnswer(value=True)) is None
