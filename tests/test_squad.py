"""
Tests for manual squad edits, captaincy assignment and contest validation.
"""
from decimal import Decimal

from flames.models.player import Player, PlayerRole
from flames.models.squad import Squad
from flames.validators.squad_validator import SquadValidator


def create_player(pid: str, credit: str = "5.0", role: PlayerRole = PlayerRole.BATTER) -> Player:
    return Player(id=pid, team_id="MM", name=f"Player {pid}", role=role, credit=Decimal(credit))


def full_squad() -> Squad:
    squad = Squad()
    roles = [PlayerRole.BATTER] * 5 + [PlayerRole.ALL_ROUNDER] * 2 + [PlayerRole.BOWLER] * 4
    for i, role in enumerate(roles):
        squad.add(create_player(f"P{i}", role=role))
    return squad


class TestAddRemove:
    def test_add_tracks_credits(self):
        squad = Squad()
        assert squad.add(create_player("A", "9.5"))
        assert squad.add(create_player("B", "8.2"))
        assert squad.credits_spent == Decimal("17.7")
        assert squad.credits_remaining == Decimal("82.3")

    def test_duplicate_rejected(self):
        squad = Squad()
        player = create_player("A")
        assert squad.add(player)
        assert not squad.add(player)
        assert squad.size == 1

    def test_twelfth_player_rejected(self):
        squad = full_squad()
        assert squad.size == 11
        assert not squad.add(create_player("X", "1.0"))
        assert squad.size == 11

    def test_over_budget_rejected(self):
        squad = Squad(budget=20)
        assert squad.add(create_player("A", "9.5"))
        assert squad.add(create_player("B", "9.5"))
        assert not squad.add(create_player("C", "2.0"))
        assert squad.add(create_player("D", "1.0"))
        assert squad.credits_spent == Decimal("20.0")

    def test_remove(self):
        squad = Squad()
        player = create_player("A")
        assert not squad.remove(player)
        squad.add(player)
        assert squad.remove(player)
        assert squad.size == 0

    def test_remove_clears_captaincy(self):
        squad = full_squad()
        captain, vice = squad.players[0], squad.players[1]
        squad.assign_captaincy(captain, vice)

        squad.remove(captain)
        assert squad.captain_id is None
        assert squad.vice_captain_id == vice.id

    def test_copy_is_independent(self):
        squad = full_squad()
        other = squad.copy()
        other.remove(other.players[0])
        assert squad.size == 11
        assert other.size == 10


class TestCaptaincy:
    def test_captain_cannot_be_vice_captain(self):
        squad = full_squad()
        player = squad.players[0]
        assert squad.set_captain(player)
        assert not squad.set_vice_captain(player)
        assert squad.vice_captain_id is None

    def test_vice_captain_cannot_be_captain(self):
        squad = full_squad()
        player = squad.players[3]
        assert squad.set_vice_captain(player)
        assert not squad.set_captain(player)
        assert squad.captain_id is None

    def test_reselect_toggles_role_off(self):
        squad = full_squad()
        player = squad.players[0]
        squad.set_captain(player)
        assert squad.set_captain(player)
        assert squad.captain is None

    def test_new_captain_replaces_old(self):
        squad = full_squad()
        squad.set_captain(squad.players[0])
        squad.set_captain(squad.players[1])
        assert squad.captain_id == squad.players[1].id

    def test_assign_captaincy_requires_distinct_members(self):
        squad = full_squad()
        a, b = squad.players[0], squad.players[1]
        outsider = create_player("Z")

        assert not squad.assign_captaincy(a, a)
        assert not squad.assign_captaincy(a, outsider)
        assert squad.captain_id is None
        assert squad.assign_captaincy(a, b)
        assert (squad.captain, squad.vice_captain) == (a, b)

    def test_non_member_rejected(self):
        squad = full_squad()
        assert not squad.set_captain(create_player("Z"))


class TestSquadValidator:
    def test_valid_squad(self):
        squad = full_squad()
        squad.assign_captaincy(squad.players[0], squad.players[5])

        result = SquadValidator.validate(squad)
        assert result["valid"] is True
        assert result["errors"] == []
        assert result["breakdown"]["batters"] == 5
        assert result["breakdown"]["all_rounders"] == 2
        assert result["breakdown"]["bowlers"] == 4
        assert result["breakdown"]["credits_spent"] == "55.0"

    def test_incomplete_squad(self):
        squad = full_squad()
        squad.remove(squad.players[-1])
        squad.assign_captaincy(squad.players[0], squad.players[1])

        result = SquadValidator.validate(squad)
        assert result["valid"] is False
        assert any("exactly 11" in e for e in result["errors"])

    def test_missing_captaincy(self):
        result = SquadValidator.validate(full_squad())
        assert "Must pick a captain" in result["errors"]
        assert "Must pick a vice-captain" in result["errors"]

    def test_same_captain_and_vice_captain(self):
        squad = full_squad()
        # Raw ids as submitted by a client, bypassing assignment checks
        squad.captain_id = squad.vice_captain_id = squad.players[0].id

        result = SquadValidator.validate(squad)
        assert result["valid"] is False
        assert "Captain and vice-captain must be different players" in result["errors"]
