import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from flames.api.deps import get_catalog, get_user_id
from flames.api.roster import player_response
from flames.api.schemas import (
    CaptaincyRequest, CaptaincyResponse, RecommendationResponse, RecommendedPlayer,
    RecommendRequest, SmartFillRequest, SquadRequest, SquadResponse, SquadValidationResponse,
)
from flames.config import settings
from flames.database import get_db
from flames.engine.squad_engine import SquadEngine
from flames.models.player import Player
from flames.models.roster import Roster
from flames.models.saved_squad import load_squad, save_squad
from flames.models.squad import MAX_SQUAD_SIZE, Squad
from flames.validators.squad_validator import SquadValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/squad", tags=["Fantasy Squad"])


def _lookup(roster: Roster, player_id: str) -> Player:
    player = roster.player(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    return player


def _build_squad(request: SquadRequest, roster: Roster) -> Squad:
    """Replay the request's picks through Squad.add so every rule still applies"""
    if len(set(request.player_ids)) != len(request.player_ids):
        raise HTTPException(status_code=400, detail="Duplicate player ids")

    budget = request.budget if request.budget is not None else settings.SQUAD_BUDGET
    squad = Squad(budget=budget) if request.name is None else Squad(budget=budget, name=request.name)
    for player_id in request.player_ids:
        player = _lookup(roster, player_id)
        if not squad.add(player):
            raise HTTPException(
                status_code=400,
                detail=f"Cannot add {player.name}: squad full or over budget",
            )

    captain = _lookup(roster, request.captain_id) if request.captain_id else None
    vice = _lookup(roster, request.vice_captain_id) if request.vice_captain_id else None
    if captain is not None and not squad.set_captain(captain):
        raise HTTPException(status_code=400, detail="Captain must be a squad member")
    if vice is not None and not squad.set_vice_captain(vice):
        raise HTTPException(
            status_code=400,
            detail="Vice-captain must be a squad member and different from the captain",
        )
    return squad


def _pool(roster: Roster, team_ids: Optional[list[str]]) -> list[Player]:
    if not team_ids:
        return list(roster.all_players())
    unknown = [t for t in team_ids if roster.team(t) is None]
    if unknown:
        raise HTTPException(status_code=404, detail=f"Unknown teams: {unknown}")
    return [p for p in roster.all_players() if p.team_id in team_ids]


def _squad_response(squad: Squad) -> SquadResponse:
    return SquadResponse(
        name=squad.name,
        players=[player_response(p) for p in squad.players],
        captain_id=squad.captain_id,
        vice_captain_id=squad.vice_captain_id,
        budget=squad.budget,
        credits_spent=squad.credits_spent,
        credits_remaining=squad.credits_remaining,
    )


@router.post("/recommend", response_model=RecommendationResponse)
def recommend_players(request: RecommendRequest, roster: Roster = Depends(get_catalog)):
    squad = _build_squad(request, roster)
    ranked = SquadEngine.recommend(_pool(roster, request.pool_team_ids), squad)
    if request.limit is not None:
        ranked = ranked[: request.limit]
    return RecommendationResponse(
        available=len(ranked) > 0,
        needed_role=SquadEngine.most_needed_role(squad).value,
        players=[
            RecommendedPlayer(player=player_response(p), score=round(SquadEngine.score(p, squad), 2))
            for p in ranked
        ],
    )


@router.post("/smart-fill", response_model=SquadResponse)
def smart_fill(request: SmartFillRequest, roster: Roster = Depends(get_catalog)):
    squad = _build_squad(request, roster)
    filled = SquadEngine.smart_fill(
        _pool(roster, request.pool_team_ids),
        squad,
        budget=squad.budget,
        mode=request.mode.value,
    )
    return _squad_response(filled)


@router.post("/captaincy", response_model=CaptaincyResponse)
def suggest_captaincy(request: CaptaincyRequest, roster: Roster = Depends(get_catalog)):
    pick = SquadEngine.pick_captaincy([_lookup(roster, pid) for pid in request.player_ids])
    if pick is None:
        return CaptaincyResponse(available=False)
    return CaptaincyResponse(
        available=True,
        captain=player_response(pick.captain),
        vice_captain=player_response(pick.vice_captain),
        captain_impact=round(pick.captain_impact, 2),
        vice_captain_impact=round(pick.vice_captain_impact, 2),
    )


@router.post("/validate", response_model=SquadValidationResponse)
def validate_squad(request: SquadRequest, roster: Roster = Depends(get_catalog)):
    """Contest-join check; problems are reported, not raised"""
    squad = _build_squad(request.model_copy(update={"captain_id": None, "vice_captain_id": None}), roster)
    # Validate the selection as submitted, including a doubled-up captaincy
    squad.captain_id = request.captain_id
    squad.vice_captain_id = request.vice_captain_id
    return SquadValidator.validate(squad)


@router.put("/me", response_model=SquadResponse)
def save_my_squad(
    request: SquadRequest,
    user_id: str = Depends(get_user_id),
    roster: Roster = Depends(get_catalog),
    db: Session = Depends(get_db),
):
    squad = _build_squad(request, roster)
    if squad.size != MAX_SQUAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Team must have exactly {MAX_SQUAD_SIZE} players to save",
        )
    save_squad(db, user_id, squad)
    logger.info("Saved squad '%s' for user %s", squad.name, user_id)
    return _squad_response(squad)


@router.get("/me", response_model=SquadResponse)
def get_my_squad(
    user_id: str = Depends(get_user_id),
    roster: Roster = Depends(get_catalog),
    db: Session = Depends(get_db),
):
    squad = load_squad(db, user_id, roster)
    if squad is None:
        raise HTTPException(status_code=404, detail="No saved squad")
    return _squad_response(squad)
