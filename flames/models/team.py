from dataclasses import dataclass


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    short_name: str  # e.g., "JJ", "MM"
    color: str  # Hex color
    motto: str = ""

    def __repr__(self):
        return f"<Team {self.name} ({self.short_name})>"


@dataclass(frozen=True)
class Fixture:
    """A scheduled match between two catalog teams"""
    id: str
    home_team_id: str
    away_team_id: str
    venue: str
    toss: str
    batting_first_team_id: str

    @property
    def bowling_first_team_id(self) -> str:
        if self.batting_first_team_id == self.home_team_id:
            return self.away_team_id
        return self.home_team_id
