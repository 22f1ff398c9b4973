import pytest

from gameshow_app.core.gameshow_manager import GameshowManager
from gameshow_app.core.models import QuestionType


def test_create_question_applies_defaults(manager):
    question = manager.create_question("2+2?", "text")
    assert question.type is QuestionType.TEXT
    assert question.image is None
    assert question.options == []
    assert question.correct_answer is None
    assert question.points == 100
    assert question.id
    assert manager.get_questions() == [question]


def test_question_ids_are_unique(manager):
    ids = {manager.create_question(f"Q{i}", "text").id for i in range(25)}
    assert len(ids) == 25


def test_unknown_question_type_is_rejected(manager):
    with pytest.raises(ValueError):
        manager.create_question("What?", "essay")
    assert manager.get_questions() == []


def test_update_question_replaces_fields_shallowly(manager):
    question = manager.create_question(
        "Pick one", QuestionType.MULTIPLE_CHOICE, options=["A", "B", "C"], correct_answer="B"
    )
    updated = manager.update_question(question.id, options=["X"], points=250)
    assert updated.options == ["X"]
    assert updated.points == 250
    assert updated.text == "Pick one"
    assert updated.correct_answer == "B"
    assert manager.get_questions()[0] == updated


def test_update_missing_question_returns_none(manager):
    assert manager.update_question("missing", text="new") is None


def test_update_rejects_unknown_fields(manager):
    question = manager.create_question("Q", "text")
    with pytest.raises(ValueError):
        manager.update_question(question.id, colour="red")
    with pytest.raises(ValueError):
        manager.update_question(question.id, id="other")


def test_delete_question_is_idempotent(manager):
    first = manager.create_question("Q1", "text")
    second = manager.create_question("Q2", "text")
    manager.delete_question(first.id)
    manager.delete_question(first.id)
    assert [q.id for q in manager.get_questions()] == [second.id]


def test_get_questions_returns_a_copy(manager):
    manager.create_question("Q1", "text")
    questions = manager.get_questions()
    questions.clear()
    assert len(manager.get_questions()) == 1


@pytest.mark.parametrize(
    "patch",
    [
        {"text": None},
        {"text": ""},
        {"points": None},
        {"points": 0},
        {"points": True},
        {"type": None},
        {"options": None},
        {"options": "A,B"},
        {"correct_answer": 4},
    ],
)
def test_update_rejects_invalid_values(manager, kv, patch):
    question = manager.create_question("Q", "text", points=50)
    with pytest.raises(ValueError):
        manager.update_question(question.id, **patch)
    assert manager.get_questions()[0] == question
    assert GameshowManager(kv).get_questions()[0].points == 50


@pytest.mark.parametrize("points", [0, -10, 1.5, None])
def test_create_question_requires_positive_points(manager, points):
    with pytest.raises(ValueError):
        manager.create_question("Q", "text", points=points)
    assert manager.get_questions() == []


def test_create_question_requires_text(manager):
    with pytest.raises(ValueError):
        manager.create_question("  ", "text")


def _start_second_of_three(manager):
    questions = [manager.create_question(f"Q{i}", "text") for i in range(3)]
    team = manager.create_team("Red", "C1")
    manager.start_question(1)
    manager.submit_answer(team.code, "C1", "answer")
    return questions, team


def test_deleting_current_question_ends_round(manager):
    questions, team = _start_second_of_three(manager)
    manager.delete_question(questions[1].id)

    assert not manager.is_game_active()
    assert manager.get_current_question() is None
    assert manager.get_answers() == {}
    assert manager.get_gameshow_display_data().question_number == 0
    assert manager.get_gameshow_display_data().game_active is False


def test_deleting_earlier_question_keeps_current_question(manager):
    questions, team = _start_second_of_three(manager)
    manager.delete_question(questions[0].id)

    assert manager.is_game_active()
    assert manager.get_current_question().id == questions[1].id
    assert manager.has_team_answered(team.code)
    assert manager.get_gameshow_display_data().question_number == 1


def test_deleting_later_question_leaves_round_alone(manager):
    questions, team = _start_second_of_three(manager)
    manager.delete_question(questions[2].id)

    assert manager.is_game_active()
    assert manager.get_current_question().id == questions[1].id
    assert manager.has_team_answered(team.code)


def test_importing_a_quiz_resets_the_round(manager, tmp_path):
    _start_second_of_three(manager)
    source = tmp_path / "quiz.txt"
    source.write_text("Q: Fresh question\nCORRECT: yes\n", encoding="utf-8")
    manager.import_quiz(source)

    assert not manager.is_game_active()
    assert manager.get_current_question() is None
    assert manager.get_answers() == {}
    assert manager.get_question_start_time() is None
