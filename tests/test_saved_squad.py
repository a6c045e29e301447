"""
Tests for squad persistence through SQLAlchemy.
"""
import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from flames.database import Base
from flames.generators.roster_generator import get_roster
from flames.models.saved_squad import SavedSquad, load_squad, save_squad
from flames.models.squad import Squad


@pytest.fixture
def db():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()


def jaipur_squad() -> Squad:
    roster = get_roster()
    squad = Squad(name="Pink City XI")
    for player in roster.players("JJ"):
        squad.add(player)
    squad.assign_captaincy(roster.player("JJ03"), roster.player("JJ01"))
    return squad


class TestSavedSquad:
    def test_save_and_load(self, db):
        squad = jaipur_squad()
        save_squad(db, "user-1", squad)

        loaded = load_squad(db, "user-1", get_roster())
        assert loaded.name == "Pink City XI"
        assert [p.id for p in loaded.players] == [p.id for p in squad.players]
        assert loaded.captain_id == "JJ03"
        assert loaded.vice_captain_id == "JJ01"
        assert loaded.budget == squad.budget

    def test_save_overwrites_existing_row(self, db):
        save_squad(db, "user-1", jaipur_squad())
        smaller = jaipur_squad()
        smaller.remove(smaller.players[-1])
        smaller.name = "Ten Men"
        save_squad(db, "user-1", smaller)

        assert db.query(SavedSquad).count() == 1
        assert load_squad(db, "user-1", get_roster()).size == 10

    def test_unknown_user(self, db):
        assert load_squad(db, "nobody", get_roster()) is None

    def test_players_missing_from_catalog_are_dropped(self, db):
        row = save_squad(db, "user-2", jaipur_squad())
        row.player_ids_json = json.dumps(["JJ01", "GONE1", "JJ03"])
        row.vice_captain_id = "GONE1"
        db.commit()

        loaded = load_squad(db, "user-2", get_roster())
        assert [p.id for p in loaded.players] == ["JJ01", "JJ03"]
        assert loaded.captain_id == "JJ03"
        assert loaded.vice_captain_id is None
