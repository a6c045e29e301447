from flames.models.team import Team, Fixture
from flames.models.player import Player, PlayerRole
from flames.models.roster import Roster
from flames.models.squad import Squad
from flames.models.saved_squad import SavedSquad

__all__ = [
    "Team",
    "Fixture",
    "Player",
    "PlayerRole",
    "Roster",
    "Squad",
    "SavedSquad",
]
