"""Service for running question rounds and collecting team answers."""

from __future__ import annotations

from datetime import datetime
import logging

from gameshow_app.core.answers import grade_answer, parse_answer
from gameshow_app.core.models import Answer, AnswerRecord, Question
from gameshow_app.core.results import ErrorKind, OperationResult
from gameshow_app.core.state_store import GameshowStateStore
from gameshow_app.utils.clock import utc_now

logger = logging.getLogger(__name__)


class GameSession:
    """Round controller plus the per-round answer ledger.

    A round is Idle or Active. ``start_question`` moves to Active from either
    state and always empties the ledger; ``end_question`` returns to Idle but
    keeps the question index for reference.
    """

    def __init__(self, store: GameshowStateStore) -> None:
        self._store = store

    # --- Round control ---

    def start_question(self, index: int) -> OperationResult[Question]:
        snapshot = self._store.snapshot
        if not 0 <= index < len(snapshot.questions):
            return OperationResult.failure(ErrorKind.INVALID_INDEX, "Invalid question index")

        snapshot.current_question_index = index
        snapshot.game_active = True
        snapshot.question_start_time = utc_now()
        snapshot.answers = {}
        self._store.save()
        logger.info("Started question %d", index + 1)
        return OperationResult.success(snapshot.questions[index])

    def end_question(self) -> None:
        self._store.snapshot.game_active = False
        self._store.save()
        logger.info("Ended current question")

    def get_current_question(self) -> Question | None:
        snapshot = self._store.snapshot
        index = snapshot.current_question_index
        if index is None or not 0 <= index < len(snapshot.questions):
            return None
        return snapshot.questions[index]

    def get_current_question_number(self) -> int:
        index = self._store.snapshot.current_question_index
        return 0 if index is None else index + 1

    def is_game_active(self) -> bool:
        return self._store.snapshot.game_active

    def get_question_start_time(self) -> datetime | None:
        return self._store.snapshot.question_start_time

    # --- Answers ---

    def submit_answer(
        self,
        team_code: str,
        guest_code: str,
        answer: Answer | str | int | bool,
    ) -> OperationResult[AnswerRecord]:
        """Record the captain's answer for their team, replacing any earlier one."""
        snapshot = self._store.snapshot
        team = snapshot.teams.get(team_code)
        if team is None:
            return OperationResult.failure(ErrorKind.NOT_FOUND, "Team not found")
        if team.captain_code != guest_code:
            return OperationResult.failure(ErrorKind.NOT_CAPTAIN, "Only team captain can answer")
        question = self.get_current_question()
        if not snapshot.game_active or question is None:
            return OperationResult.failure(ErrorKind.NO_ACTIVE_ROUND, "No active question")

        try:
            parsed = parse_answer(question, answer)
        except ValueError as exc:
            return OperationResult.failure(ErrorKind.INVALID_ANSWER, str(exc))

        record = AnswerRecord(answer=parsed, submitted_at=utc_now(), team_name=team.name)
        snapshot.answers[team_code] = record
        self._store.save()
        logger.debug("Team %s answered question %d", team_code, snapshot.current_question_index + 1)
        return OperationResult.success(record)

    def get_answers(self) -> dict[str, AnswerRecord]:
        return dict(self._store.snapshot.answers)

    def get_answer_count(self) -> int:
        return len(self._store.snapshot.answers)

    def has_team_answered(self, team_code: str) -> bool:
        return team_code in self._store.snapshot.answers

    def grade_current_answers(self) -> dict[str, bool | None]:
        """Grade every recorded answer against the current question."""
        question = self.get_current_question()
        if question is None:
            return {}
        return {
            team_code: grade_answer(question, record.answer)
            for team_code, record in self._store.snapshot.answers.items()
        }
