"""
User fantasy squad: up to 11 players under a credit budget, with a captain
and vice-captain.
"""
from decimal import Decimal
from typing import Optional

from flames.models.player import Player, PlayerRole

MAX_SQUAD_SIZE = 11
DEFAULT_BUDGET = Decimal(100)
DEFAULT_SQUAD_NAME = "My Dream XI"


class Squad:
    """
    Mutable squad owned by a single caller.

    All mutators return a bool instead of raising: False means the request
    was rejected and the squad is unchanged.
    """

    def __init__(self, budget=DEFAULT_BUDGET, name: str = DEFAULT_SQUAD_NAME):
        self.budget = Decimal(str(budget))
        self.name = name
        self._players: list[Player] = []
        self.captain_id: Optional[str] = None
        self.vice_captain_id: Optional[str] = None

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def size(self) -> int:
        return len(self._players)

    @property
    def is_full(self) -> bool:
        return len(self._players) >= MAX_SQUAD_SIZE

    @property
    def credits_spent(self) -> Decimal:
        return sum((p.credit for p in self._players), Decimal(0))

    @property
    def credits_remaining(self) -> Decimal:
        return self.budget - self.credits_spent

    @property
    def captain(self) -> Optional[Player]:
        return self.find(self.captain_id)

    @property
    def vice_captain(self) -> Optional[Player]:
        return self.find(self.vice_captain_id)

    def role_counts(self) -> dict[PlayerRole, int]:
        counts = {role: 0 for role in PlayerRole}
        for p in self._players:
            counts[p.role] += 1
        return counts

    def contains(self, player: Player) -> bool:
        return any(p.id == player.id for p in self._players)

    def can_add(self, player: Player) -> bool:
        if self.contains(player) or self.is_full:
            return False
        return self.credits_spent + player.credit <= self.budget

    def add(self, player: Player) -> bool:
        if not self.can_add(player):
            return False
        self._players.append(player)
        return True

    def remove(self, player: Player) -> bool:
        for i, p in enumerate(self._players):
            if p.id == player.id:
                del self._players[i]
                if self.captain_id == player.id:
                    self.captain_id = None
                if self.vice_captain_id == player.id:
                    self.vice_captain_id = None
                return True
        return False

    def set_captain(self, player: Player) -> bool:
        """Make player captain. Picking the current captain again clears the role."""
        if not self.contains(player):
            return False
        if self.captain_id == player.id:
            self.captain_id = None
            return True
        if self.vice_captain_id == player.id:
            return False
        self.captain_id = player.id
        return True

    def set_vice_captain(self, player: Player) -> bool:
        """Make player vice-captain. Picking the current vice-captain again clears the role."""
        if not self.contains(player):
            return False
        if self.vice_captain_id == player.id:
            self.vice_captain_id = None
            return True
        if self.captain_id == player.id:
            return False
        self.vice_captain_id = player.id
        return True

    def assign_captaincy(self, captain: Player, vice_captain: Player) -> bool:
        """Set both roles at once; rejected unless both are members and distinct."""
        if captain.id == vice_captain.id:
            return False
        if not (self.contains(captain) and self.contains(vice_captain)):
            return False
        self.captain_id = captain.id
        self.vice_captain_id = vice_captain.id
        return True

    def clear(self):
        self._players.clear()
        self.captain_id = None
        self.vice_captain_id = None

    def copy(self) -> "Squad":
        other = Squad(budget=self.budget, name=self.name)
        other._players = list(self._players)
        other.captain_id = self.captain_id
        other.vice_captain_id = self.vice_captain_id
        return other

    def find(self, player_id: Optional[str]) -> Optional[Player]:
        if player_id is None:
            return None
        return next((p for p in self._players if p.id == player_id), None)

    def __len__(self):
        return len(self._players)

    def __repr__(self):
        return f"<Squad {self.name}: {self.size} players, {self.credits_spent}/{self.budget} cr>"
