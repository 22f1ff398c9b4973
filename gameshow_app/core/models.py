"""Domain models for the gameshow state snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal

from gameshow_app.constants.gameshow_constants import DEFAULT_QUESTION_POINTS
from gameshow_app.utils.clock import utc_now


class QuestionType(str, Enum):
    """Closed set of question formats."""

    TEXT = "text"
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"


@dataclass(slots=True)
class Question:
    """Quiz question shown to every team during a round."""

    id: str
    text: str
    type: QuestionType
    image: str | None = None
    options: list[str] = field(default_factory=list)
    correct_answer: str | None = None
    points: int = DEFAULT_QUESTION_POINTS
    created_at: datetime = field(default_factory=utc_now)


@dataclass(slots=True)
class FreeTextAnswer:
    text: str
    kind: Literal["text"] = "text"


@dataclass(slots=True)
class MultipleChoiceAnswer:
    """Selected option together with the options the team was shown."""

    choice: str
    options: list[str] = field(default_factory=list)
    kind: Literal["multiple_choice"] = "multiple_choice"


@dataclass(slots=True)
class TrueFalseAnswer:
    value: bool
    kind: Literal["true_false"] = "true_false"


Answer = FreeTextAnswer | MultipleChoiceAnswer | TrueFalseAnswer


@dataclass(slots=True)
class Team:
    """A team identified by a short code; the captain answers for everyone."""

    id: str
    code: str
    name: str
    captain_code: str
    members: list[str] = field(default_factory=list)
    score: int = 0
    created_at: datetime = field(default_factory=utc_now)


@dataclass(slots=True)
class AnswerRecord:
    """The single answer a team submitted for the running round."""

    answer: Answer
    submitted_at: datetime
    team_name: str


@dataclass(slots=True)
class LeaderboardEntry:
    team_name: str
    score: int = 0
    correct_answers: int = 0


@dataclass(slots=True)
class GameshowSnapshot:
    """Complete persisted state of a gameshow."""

    questions: list[Question] = field(default_factory=list)
    teams: dict[str, Team] = field(default_factory=dict)
    current_question_index: int | None = None
    answers: dict[str, AnswerRecord] = field(default_factory=dict)
    game_active: bool = False
    question_start_time: datetime | None = None
    leaderboard: dict[str, LeaderboardEntry] = field(default_factory=dict)


@dataclass(slots=True)
class GameshowDisplayData:
    """Read-only aggregate consumed by the spectator screen."""

    question: Question | None
    question_number: int
    total_questions: int
    answers: dict[str, AnswerRecord]
    leaderboard: list[LeaderboardEntry]
    teams: list[Team]
    game_active: bool
    answers_received: int
    total_teams: int


@dataclass(slots=True)
class GameStats:
    """Compact counters for the admin console."""

    total_questions: int
    total_teams: int
    current_question: int
    answers_received: int
    game_active: bool
