from gameshow_app.core.models import FreeTextAnswer, MultipleChoiceAnswer, TrueFalseAnswer
from gameshow_app.core.results import ErrorKind


def _setup_round(manager):
    manager.create_question("2+2?", "text", correct_answer="4")
    team = manager.create_team("Red", "C1")
    return team


def test_start_question_activates_round_and_clears_answers(manager):
    team = _setup_round(manager)
    manager.create_question("3+3?", "text")
    manager.start_question(0)
    manager.submit_answer(team.code, "C1", "4")
    assert manager.get_answer_count() == 1

    result = manager.start_question(1)
    assert result.ok
    assert result.value.text == "3+3?"
    assert manager.is_game_active()
    assert manager.get_answers() == {}
    assert manager.get_question_start_time() is not None


def test_start_question_out_of_range_leaves_state_unchanged(manager):
    manager.create_question("Q1", "text")
    manager.create_question("Q2", "text")
    result = manager.start_question(5)
    assert not result.ok
    assert result.error is ErrorKind.INVALID_INDEX
    assert manager.get_current_question() is None
    assert not manager.is_game_active()
    assert not manager.start_question(-1).ok


def test_end_question_keeps_current_question(manager):
    _setup_round(manager)
    manager.start_question(0)
    manager.end_question()
    assert not manager.is_game_active()
    assert manager.get_current_question().text == "2+2?"


def test_submit_answer_checks_team_captain_and_round(manager):
    team = _setup_round(manager)
    manager.join_team(team.code, "G2")

    missing = manager.submit_answer("ZZZZZ", "C1", "4")
    assert missing.error is ErrorKind.NOT_FOUND

    idle = manager.submit_answer(team.code, "C1", "4")
    assert idle.error is ErrorKind.NO_ACTIVE_ROUND

    manager.start_question(0)
    not_captain = manager.submit_answer(team.code, "G2", "4")
    assert not_captain.error is ErrorKind.NOT_CAPTAIN
    assert manager.get_answers() == {}

    accepted = manager.submit_answer(team.code, "C1", "4")
    assert accepted.ok
    assert manager.has_team_answered(team.code)
    record = manager.get_answers()[team.code]
    assert record.answer == FreeTextAnswer(text="4")
    assert record.team_name == "Red"


def test_resubmission_overwrites_previous_answer(manager):
    team = _setup_round(manager)
    manager.start_question(0)
    manager.submit_answer(team.code, "C1", "5")
    manager.submit_answer(team.code, "C1", "4")
    assert manager.get_answer_count() == 1
    assert manager.get_answers()[team.code].answer.text == "4"


def test_answers_are_rejected_after_round_ends(manager):
    team = _setup_round(manager)
    manager.start_question(0)
    manager.end_question()
    result = manager.submit_answer(team.code, "C1", "4")
    assert result.error is ErrorKind.NO_ACTIVE_ROUND
    assert manager.get_answer_count() == 0


def test_answers_are_coerced_to_question_type(manager):
    manager.create_question("Largest planet?", "multiple_choice", options=["Mars", "Jupiter"])
    manager.create_question("The sun is a star.", "true_false")
    team = manager.create_team("Red", "C1")

    manager.start_question(0)
    manager.submit_answer(team.code, "C1", 1)
    assert manager.get_answers()[team.code].answer == MultipleChoiceAnswer(
        choice="Jupiter", options=["Mars", "Jupiter"]
    )
    bad = manager.submit_answer(team.code, "C1", "Pluto")
    assert bad.error is ErrorKind.INVALID_ANSWER
    assert manager.get_answers()[team.code].answer.choice == "Jupiter"

    manager.start_question(1)
    manager.submit_answer(team.code, "C1", "yes")
    assert manager.get_answers()[team.code].answer == TrueFalseAnswer(value=True)
    wrong_kind = manager.submit_answer(team.code, "C1", FreeTextAnswer(text="true"))
    assert wrong_kind.error is ErrorKind.INVALID_ANSWER
