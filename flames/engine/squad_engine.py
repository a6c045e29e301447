"""
Squad recommendation: player scoring, greedy budget-constrained fill and
captain/vice-captain election.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from flames.models.player import Player, PlayerRole
from flames.models.squad import DEFAULT_BUDGET, MAX_SQUAD_SIZE, Squad

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptaincyPick:
    captain: Player
    vice_captain: Player
    captain_impact: float
    vice_captain_impact: float


class SquadEngine:
    """
    Scores players for a squad and fills squads greedily.

    smart_fill is a single greedy pass, not an optimal knapsack: it takes the
    best-ranked player that still fits, so it can leave credits unspent when
    a later, cheaper combination would have used the budget better.
    """

    # Ideal XI composition; enumeration order breaks deficit ties
    IDEAL_COMPOSITION = {
        PlayerRole.BATTER: 5,
        PlayerRole.ALL_ROUNDER: 2,
        PlayerRole.BOWLER: 4,
    }
    ROLE_NEED_BONUS = 12.0
    FORM_WEIGHT = 0.4
    ALL_ROUNDER_FACTOR = 0.7
    VALUE_PIVOT = 10.0

    CAPTAIN_ALL_ROUNDER_BONUS = 15.0

    FILL_RECOMMENDED = "recommended"
    FILL_FORM = "form"

    @staticmethod
    def batting_component(player: Player) -> float:
        return player.season_runs / 8 + player.strike_rate / 3

    @staticmethod
    def bowling_component(player: Player) -> float:
        return player.season_wickets * 8 - player.economy * 2

    @classmethod
    def base_score(cls, player: Player) -> float:
        if player.role == PlayerRole.BATTER:
            return cls.batting_component(player)
        if player.role == PlayerRole.BOWLER:
            return cls.bowling_component(player)
        return cls.ALL_ROUNDER_FACTOR * (cls.batting_component(player) + cls.bowling_component(player))

    @classmethod
    def most_needed_role(cls, squad: Optional[Squad]) -> PlayerRole:
        counts = squad.role_counts() if squad is not None else {}
        best_role, best_deficit = None, None
        for role, wanted in cls.IDEAL_COMPOSITION.items():
            deficit = wanted - counts.get(role, 0)
            if best_deficit is None or deficit > best_deficit:
                best_role, best_deficit = role, deficit
        return best_role

    @classmethod
    def score(cls, player: Player, squad: Optional[Squad] = None) -> float:
        role_bonus = cls.ROLE_NEED_BONUS if player.role == cls.most_needed_role(squad) else 0.0
        value = cls.VALUE_PIVOT - float(player.credit)
        return cls.base_score(player) + player.form_average * cls.FORM_WEIGHT + role_bonus + value

    @classmethod
    def recommend(cls, pool: Iterable[Player], squad: Optional[Squad] = None) -> list[Player]:
        """Players not yet in the squad, best first. Ties keep pool order."""
        candidates = [p for p in pool if squad is None or not squad.contains(p)]
        # sorted() is stable, so equal scores keep catalog order
        return sorted(candidates, key=lambda p: cls.score(p, squad), reverse=True)

    @classmethod
    def smart_fill(
        cls,
        pool: Iterable[Player],
        squad: Optional[Squad] = None,
        budget=DEFAULT_BUDGET,
        mode: str = FILL_RECOMMENDED,
    ) -> Squad:
        """
        Greedy fill up to 11 players within budget. Returns a new squad.

        "recommended" tops up the given squad in recommend() order.
        "form" starts from scratch and takes players by form average.
        """
        pool = list(pool)
        budget = Decimal(str(budget))
        if squad is None:
            squad = Squad(budget=budget)

        if mode == cls.FILL_FORM:
            filled = Squad(budget=budget, name=squad.name)
            ordered = sorted(pool, key=lambda p: p.form_average, reverse=True)
        elif mode == cls.FILL_RECOMMENDED:
            filled = squad.copy()
            filled.budget = budget
            ordered = cls.recommend(pool, squad)
        else:
            raise ValueError(f"Unknown fill mode: {mode}")

        for player in ordered:
            if filled.size >= MAX_SQUAD_SIZE:
                break
            # add() rejects anything that would overshoot the budget
            filled.add(player)

        logger.debug(
            "smart_fill(%s): %d players, %s/%s credits", mode, filled.size, filled.credits_spent, budget
        )
        return filled

    @classmethod
    def captaincy_impact(cls, player: Player) -> float:
        impact = player.season_runs * 0.2 + player.season_wickets * 10 + player.form_average
        if player.role == PlayerRole.ALL_ROUNDER:
            impact += cls.CAPTAIN_ALL_ROUNDER_BONUS
        return impact

    @classmethod
    def pick_captaincy(cls, pool: Iterable[Player]) -> Optional[CaptaincyPick]:
        """Top two by impact. None when fewer than two distinct players are available."""
        unique = list({p.id: p for p in pool}.values())
        if len(unique) < 2:
            return None
        ranked = sorted(unique, key=cls.captaincy_impact, reverse=True)
        captain, vice = ranked[0], ranked[1]
        return CaptaincyPick(
            captain=captain,
            vice_captain=vice,
            captain_impact=cls.captaincy_impact(captain),
            vice_captain_impact=cls.captaincy_impact(vice),
        )
