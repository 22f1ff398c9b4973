"""Service for managing teams, their members and captains."""

from __future__ import annotations

import logging
from uuid import uuid4

from gameshow_app.core.models import LeaderboardEntry, Team
from gameshow_app.core.results import ErrorKind, OperationResult
from gameshow_app.core.state_store import GameshowStateStore
from gameshow_app.core.team_codes import TeamCodeGenerator

logger = logging.getLogger(__name__)


class TeamRegistry:
    """Registers teams and keeps every captain inside their own member list."""

    def __init__(
        self,
        store: GameshowStateStore,
        code_generator: TeamCodeGenerator | None = None,
    ) -> None:
        self._store = store
        self._codes = code_generator or TeamCodeGenerator()

    def generate_team_code(self) -> str:
        return self._codes.next_code(self._store.snapshot.teams)

    def create_team(self, name: str, captain_code: str) -> Team:
        """Create a team led by ``captain_code`` and seed its leaderboard entry."""
        snapshot = self._store.snapshot
        team = Team(
            id=uuid4().hex,
            code=self.generate_team_code(),
            name=name,
            captain_code=captain_code,
            members=[captain_code],
        )
        snapshot.teams[team.code] = team
        snapshot.leaderboard[team.code] = LeaderboardEntry(team_name=name)
        self._store.save()
        logger.info("Created team %r with code %s", name, team.code)
        return team

    def join_team(self, team_code: str, member_code: str) -> OperationResult[Team]:
        team = self._store.snapshot.teams.get(team_code)
        if team is None:
            return OperationResult.failure(ErrorKind.NOT_FOUND, "Team not found")
        if member_code in team.members:
            return OperationResult.success(team)
        team.members.append(member_code)
        self._store.save()
        logger.info("Member %s joined team %s", member_code, team_code)
        return OperationResult.success(team)

    def get_team_by_code(self, team_code: str) -> Team | None:
        return self._store.snapshot.teams.get(team_code)

    def get_team_by_member(self, member_code: str) -> Team | None:
        for team in self._store.snapshot.teams.values():
            if member_code in team.members:
                return team
        return None

    def get_all_teams(self) -> list[Team]:
        return list(self._store.snapshot.teams.values())

    def get_team_count(self) -> int:
        return len(self._store.snapshot.teams)

    def is_team_captain(self, team_code: str, guest_code: str) -> bool:
        team = self._store.snapshot.teams.get(team_code)
        return team is not None and team.captain_code == guest_code

    def set_captain(self, team_code: str, new_captain_code: str) -> bool:
        """Hand the captaincy to an existing member; outsiders are refused."""
        team = self._store.snapshot.teams.get(team_code)
        if team is None or new_captain_code not in team.members:
            return False
        team.captain_code = new_captain_code
        self._store.save()
        return True
