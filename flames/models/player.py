from dataclasses import dataclass
from decimal import Decimal
from statistics import mean
import enum


class PlayerRole(enum.Enum):
    BATTER = "batter"
    ALL_ROUNDER = "all_rounder"
    BOWLER = "bowler"


@dataclass(frozen=True)
class Player:
    id: str
    team_id: str
    name: str
    role: PlayerRole
    credit: Decimal

    # Season stats
    season_runs: int = 0
    season_wickets: int = 0
    strike_rate: float = 0.0
    economy: float = 0.0

    # Last five match ratings, 0-100, oldest first
    recent_form: tuple[int, ...] = ()
    bio: str = ""

    @property
    def form_average(self) -> float:
        if not self.recent_form:
            return 0.0
        return float(mean(self.recent_form))

    @property
    def can_bowl(self) -> bool:
        return self.role in (PlayerRole.BOWLER, PlayerRole.ALL_ROUNDER)

    def __repr__(self):
        return f"<Player {self.name} ({self.role.value}) - {self.credit} cr>"
