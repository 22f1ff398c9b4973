"""Service for awarding points and maintaining the leaderboard."""

from __future__ import annotations

import logging

from gameshow_app.core.models import LeaderboardEntry
from gameshow_app.core.state_store import GameshowStateStore

logger = logging.getLogger(__name__)


class Scoreboard:
    """Keeps team scores and leaderboard entries moving together."""

    def __init__(self, store: GameshowStateStore) -> None:
        self._store = store

    def award_points(self, team_code: str, points: int) -> bool:
        """Add ``points`` to a team and its leaderboard entry.

        Every award also counts as one correct answer on the leaderboard,
        whatever the point value. Existing score screens rely on that count.
        """
        snapshot = self._store.snapshot
        team = snapshot.teams.get(team_code)
        if team is None:
            return False

        team.score += points
        entry = snapshot.leaderboard.get(team_code)
        if entry is None:
            entry = LeaderboardEntry(team_name=team.name)
            snapshot.leaderboard[team_code] = entry
        entry.score += points
        entry.correct_answers += 1
        self._store.save()
        logger.info("Awarded %d points to team %s (total %d)", points, team_code, team.score)
        return True

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        """Return entries by descending score; ties keep insertion order."""
        return sorted(
            self._store.snapshot.leaderboard.values(),
            key=lambda entry: entry.score,
            reverse=True,
        )

    def reset_scores(self) -> None:
        snapshot = self._store.snapshot
        for team in snapshot.teams.values():
            team.score = 0
        snapshot.leaderboard = {
            code: LeaderboardEntry(team_name=team.name) for code, team in snapshot.teams.items()
        }
        self._store.save()
        logger.info("Scores reset for %d team(s)", len(snapshot.teams))
