"""Service for managing the ordered list of gameshow questions."""

from __future__ import annotations

from dataclasses import fields, replace
from datetime import datetime
import logging
from uuid import uuid4

from gameshow_app.constants.gameshow_constants import DEFAULT_QUESTION_POINTS
from gameshow_app.core.models import Question, QuestionType
from gameshow_app.core.state_store import GameshowStateStore
from gameshow_app.utils.clock import epoch_millis

logger = logging.getLogger(__name__)

_PATCHABLE_FIELDS = frozenset(f.name for f in fields(Question)) - {"id"}


class QuestionRegistry:
    """Creates, patches and removes questions inside the shared snapshot."""

    def __init__(self, store: GameshowStateStore) -> None:
        self._store = store

    def create_question(
        self,
        text: str,
        type: QuestionType | str,
        image: str | None = None,
        options: list[str] | None = None,
        correct_answer: str | None = None,
        points: int = DEFAULT_QUESTION_POINTS,
    ) -> Question:
        question = Question(
            id=self._next_question_id(),
            text=self._validate_text(text),
            type=QuestionType(type),
            image=image,
            options=self._validate_options(options or []),
            correct_answer=correct_answer,
            points=self._validate_points(points),
        )
        self._store.snapshot.questions.append(question)
        self._store.save()
        logger.info("Created question %s (%s)", question.id, question.type.value)
        return question

    def update_question(self, question_id: str, **patch: object) -> Question | None:
        """Replace the given top-level fields; nested values are never merged."""
        unknown = set(patch) - _PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown question fields: {', '.join(sorted(unknown))}")
        if "text" in patch:
            patch["text"] = self._validate_text(patch["text"])
        if "type" in patch:
            patch["type"] = QuestionType(patch["type"])
        if "options" in patch:
            patch["options"] = self._validate_options(patch["options"])
        if "points" in patch:
            patch["points"] = self._validate_points(patch["points"])
        if "created_at" in patch and not isinstance(patch["created_at"], datetime):
            raise ValueError("created_at must be a datetime.")
        for name in ("image", "correct_answer"):
            if patch.get(name) is not None and not isinstance(patch[name], str):
                raise ValueError(f"{name} must be text or None.")

        questions = self._store.snapshot.questions
        index = self._index_of(question_id)
        if index is None:
            return None
        questions[index] = replace(questions[index], **patch)
        self._store.save()
        return questions[index]

    def delete_question(self, question_id: str) -> None:
        """Remove a question, keeping the round pointer on the same question."""
        snapshot = self._store.snapshot
        index = self._index_of(question_id)
        if index is not None:
            snapshot.questions.pop(index)
            current = snapshot.current_question_index
            if current == index:
                self._clear_round()
                logger.info("Deleted the current question; round ended")
            elif current is not None and current > index:
                snapshot.current_question_index = current - 1
        self._store.save()

    def replace_questions(self, questions: list[Question]) -> None:
        """Swap in a whole new question list, giving each question a fresh id.

        Any round in progress refers to the old list, so it is reset.
        """
        self._store.snapshot.questions = [
            replace(question, id=self._next_question_id()) for question in questions
        ]
        self._clear_round()
        self._store.save()

    def get_questions(self) -> list[Question]:
        return list(self._store.snapshot.questions)

    def get_question_count(self) -> int:
        return len(self._store.snapshot.questions)

    def _clear_round(self) -> None:
        snapshot = self._store.snapshot
        snapshot.current_question_index = None
        snapshot.game_active = False
        snapshot.question_start_time = None
        snapshot.answers = {}

    def _index_of(self, question_id: str) -> int | None:
        for index, question in enumerate(self._store.snapshot.questions):
            if question.id == question_id:
                return index
        return None

    @staticmethod
    def _next_question_id() -> str:
        return f"{epoch_millis()}-{uuid4().hex[:8]}"

    @staticmethod
    def _validate_text(text: object) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Question text must be a non-empty string.")
        return text

    @staticmethod
    def _validate_options(options: object) -> list[str]:
        if not isinstance(options, list) or not all(isinstance(option, str) for option in options):
            raise ValueError("Options must be a list of strings.")
        return list(options)

    @staticmethod
    def _validate_points(points: object) -> int:
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            raise ValueError("Points must be a positive integer.")
        return points
