import json
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, Session
from flames.database import Base
from flames.models.roster import Roster
from flames.models.squad import Squad


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedSquad(Base):
    """Structural snapshot of a user's squad, one row per user"""
    __tablename__ = "saved_squads"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    budget: Mapped[str] = mapped_column(String(20))  # Decimal as text
    player_ids_json: Mapped[str] = mapped_column(Text)  # JSON array, squad order
    captain_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    vice_captain_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    @property
    def player_ids(self) -> list[str]:
        return json.loads(self.player_ids_json)

    def apply(self, squad: Squad):
        self.name = squad.name
        self.budget = str(squad.budget)
        self.player_ids_json = json.dumps([p.id for p in squad.players])
        self.captain_id = squad.captain_id
        self.vice_captain_id = squad.vice_captain_id

    def to_squad(self, roster: Roster) -> Squad:
        """Rebuild a Squad; ids no longer in the catalog are dropped"""
        squad = Squad(budget=self.budget, name=self.name)
        for player_id in self.player_ids:
            player = roster.player(player_id)
            if player is not None:
                squad.add(player)
        captain = squad.find(self.captain_id)
        vice = squad.find(self.vice_captain_id)
        if captain is not None and vice is not None:
            squad.assign_captaincy(captain, vice)
        elif captain is not None:
            squad.set_captain(captain)
        elif vice is not None:
            squad.set_vice_captain(vice)
        return squad

    def __repr__(self):
        return f"<SavedSquad user={self.user_id} name={self.name}>"


def save_squad(db: Session, user_id: str, squad: Squad) -> SavedSquad:
    """Insert or overwrite the user's saved squad"""
    row = db.query(SavedSquad).filter_by(user_id=user_id).first()
    if row is None:
        row = SavedSquad(user_id=user_id)
        db.add(row)
    row.apply(squad)
    db.commit()
    db.refresh(row)
    return row


def load_squad(db: Session, user_id: str, roster: Roster) -> Optional[Squad]:
    row = db.query(SavedSquad).filter_by(user_id=user_id).first()
    if row is None:
        return None
    return row.to_squad(roster)
