"""
Read-only team/player catalog shared by the match and squad engines.
"""
from typing import Iterable, Optional

from flames.models.player import Player
from flames.models.team import Fixture, Team


class Roster:
    """Immutable catalog. Player order is catalog order everywhere."""

    def __init__(self, teams: Iterable[Team], players: Iterable[Player], fixtures: Iterable[Fixture] = ()):
        self._teams = tuple(teams)
        self._players = tuple(players)
        self._fixtures = tuple(fixtures)
        self._teams_by_id = {t.id: t for t in self._teams}
        self._players_by_id = {p.id: p for p in self._players}
        self._fixtures_by_id = {f.id: f for f in self._fixtures}

        unknown = [p.id for p in self._players if p.team_id not in self._teams_by_id]
        if unknown:
            raise ValueError(f"Players reference unknown teams: {unknown}")

    def teams(self) -> tuple[Team, ...]:
        return self._teams

    def team(self, team_id: str) -> Optional[Team]:
        return self._teams_by_id.get(team_id)

    def players(self, team_id: str) -> tuple[Player, ...]:
        return tuple(p for p in self._players if p.team_id == team_id)

    def all_players(self) -> tuple[Player, ...]:
        return self._players

    def player(self, player_id: str) -> Optional[Player]:
        return self._players_by_id.get(player_id)

    def fixtures(self) -> tuple[Fixture, ...]:
        return self._fixtures

    def fixture(self, fixture_id: str) -> Optional[Fixture]:
        return self._fixtures_by_id.get(fixture_id)

    def __len__(self):
        return len(self._players)
