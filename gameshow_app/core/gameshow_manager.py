"""Business logic facade shared by the HTTP adapter and the sync monitor."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import logging
from pathlib import Path
from threading import Lock

from gameshow_app.constants.gameshow_constants import DEFAULT_QUESTION_POINTS
from gameshow_app.core.models import (
    Answer,
    AnswerRecord,
    GameshowDisplayData,
    GameStats,
    LeaderboardEntry,
    Question,
    QuestionType,
    Team,
)
from gameshow_app.core.quiz_exporter import save_quiz_to_file
from gameshow_app.core.quiz_importer import load_quiz_from_file
from gameshow_app.core.results import OperationResult
from gameshow_app.core.services.game_session import GameSession
from gameshow_app.core.services.question_registry import QuestionRegistry
from gameshow_app.core.services.scoreboard import Scoreboard
from gameshow_app.core.services.team_registry import TeamRegistry
from gameshow_app.core.state_store import GameshowStateStore
from gameshow_app.core.storage import KeyValueStore
from gameshow_app.core.team_codes import TeamCodeGenerator

logger = logging.getLogger(__name__)


class GameshowManager:
    """Facade for gameshow services: questions, teams, rounds and scores.

    Each manager owns its own snapshot, so tests (or several screens) can run
    independent instances over separate or shared key-value stores.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        code_generator: TeamCodeGenerator | None = None,
    ) -> None:
        self._lock = Lock()
        self._store = GameshowStateStore(kv)
        self._store.load()

        # Services
        self._questions = QuestionRegistry(self._store)
        self._teams = TeamRegistry(self._store, code_generator)
        self._session = GameSession(self._store)
        self._scoreboard = Scoreboard(self._store)

    @property
    def kv(self) -> KeyValueStore:
        return self._store.kv

    # --- Persistence ---

    def reload(self) -> None:
        with self._lock:
            self._store.load()

    def reset_gameshow(self, confirm: Callable[[], bool]) -> bool:
        """Wipe every question, team and score once ``confirm`` agrees."""
        if not confirm():
            return False
        with self._lock:
            self._store.reset()
        logger.warning("Gameshow state wiped")
        return True

    # --- Question Registry Delegation ---

    def create_question(
        self,
        text: str,
        type: QuestionType | str,
        image: str | None = None,
        options: list[str] | None = None,
        correct_answer: str | None = None,
        points: int = DEFAULT_QUESTION_POINTS,
    ) -> Question:
        with self._lock:
            return self._questions.create_question(
                text,
                type,
                image=image,
                options=options,
                correct_answer=correct_answer,
                points=points,
            )

    def update_question(self, question_id: str, **patch: object) -> Question | None:
        with self._lock:
            return self._questions.update_question(question_id, **patch)

    def delete_question(self, question_id: str) -> None:
        with self._lock:
            self._questions.delete_question(question_id)

    def get_questions(self) -> list[Question]:
        with self._lock:
            return self._questions.get_questions()

    def import_quiz(self, file_path: Path) -> list[Question]:
        imported = load_quiz_from_file(file_path)
        with self._lock:
            self._questions.replace_questions(imported.questions)
            questions = self._questions.get_questions()
        logger.info("Imported %d question(s) from %s", len(questions), file_path)
        return questions

    def export_quiz(self, file_path: Path) -> None:
        with self._lock:
            questions = self._questions.get_questions()
        save_quiz_to_file(file_path, questions)

    # --- Team Registry Delegation ---

    def generate_team_code(self) -> str:
        with self._lock:
            return self._teams.generate_team_code()

    def create_team(self, name: str, captain_code: str) -> Team:
        with self._lock:
            return self._teams.create_team(name, captain_code)

    def join_team(self, team_code: str, member_code: str) -> OperationResult[Team]:
        with self._lock:
            return self._teams.join_team(team_code, member_code)

    def get_team_by_code(self, team_code: str) -> Team | None:
        with self._lock:
            return self._teams.get_team_by_code(team_code)

    def get_team_by_member(self, member_code: str) -> Team | None:
        with self._lock:
            return self._teams.get_team_by_member(member_code)

    def get_all_teams(self) -> list[Team]:
        with self._lock:
            return self._teams.get_all_teams()

    def is_team_captain(self, team_code: str, guest_code: str) -> bool:
        with self._lock:
            return self._teams.is_team_captain(team_code, guest_code)

    def set_captain(self, team_code: str, new_captain_code: str) -> bool:
        with self._lock:
            return self._teams.set_captain(team_code, new_captain_code)

    # --- Round Delegation ---

    def start_question(self, index: int) -> OperationResult[Question]:
        with self._lock:
            return self._session.start_question(index)

    def end_question(self) -> None:
        with self._lock:
            self._session.end_question()

    def get_current_question(self) -> Question | None:
        with self._lock:
            return self._session.get_current_question()

    def is_game_active(self) -> bool:
        with self._lock:
            return self._session.is_game_active()

    def get_question_start_time(self) -> datetime | None:
        with self._lock:
            return self._session.get_question_start_time()

    # --- Answer Delegation ---

    def submit_answer(
        self,
        team_code: str,
        guest_code: str,
        answer: Answer | str | int | bool,
    ) -> OperationResult[AnswerRecord]:
        with self._lock:
            return self._session.submit_answer(team_code, guest_code, answer)

    def get_answers(self) -> dict[str, AnswerRecord]:
        with self._lock:
            return self._session.get_answers()

    def get_answer_count(self) -> int:
        with self._lock:
            return self._session.get_answer_count()

    def has_team_answered(self, team_code: str) -> bool:
        with self._lock:
            return self._session.has_team_answered(team_code)

    def grade_current_answers(self) -> dict[str, bool | None]:
        with self._lock:
            return self._session.grade_current_answers()

    # --- Scoreboard Delegation ---

    def award_points(self, team_code: str, points: int) -> bool:
        with self._lock:
            return self._scoreboard.award_points(team_code, points)

    def mark_answer_correct(self, team_code: str) -> bool:
        with self._lock:
            question = self._session.get_current_question()
            if question is None:
                return False
            return self._scoreboard.award_points(team_code, question.points)

    def award_correct_answers(self) -> list[str]:
        """Award the current question's points to every team graded correct."""
        with self._lock:
            question = self._session.get_current_question()
            if question is None:
                return []
            awarded = [
                team_code
                for team_code, is_correct in self._session.grade_current_answers().items()
                if is_correct
            ]
            for team_code in awarded:
                self._scoreboard.award_points(team_code, question.points)
            return awarded

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        with self._lock:
            return self._scoreboard.get_leaderboard()

    def reset_scores(self) -> None:
        with self._lock:
            self._scoreboard.reset_scores()

    # --- Display & Stats ---

    def get_game_stats(self) -> GameStats:
        with self._lock:
            return GameStats(
                total_questions=self._questions.get_question_count(),
                total_teams=self._teams.get_team_count(),
                current_question=self._session.get_current_question_number(),
                answers_received=self._session.get_answer_count(),
                game_active=self._session.is_game_active(),
            )

    def get_gameshow_display_data(self) -> GameshowDisplayData:
        with self._lock:
            teams = self._teams.get_all_teams()
            return GameshowDisplayData(
                question=self._session.get_current_question(),
                question_number=self._session.get_current_question_number(),
                total_questions=self._questions.get_question_count(),
                answers=self._session.get_answers(),
                leaderboard=self._scoreboard.get_leaderboard(),
                teams=teams,
                game_active=self._session.is_game_active(),
                answers_received=self._session.get_answer_count(),
                total_teams=len(teams),
            )
