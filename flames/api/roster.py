from fastapi import APIRouter, Depends, HTTPException

from flames.api.deps import get_catalog
from flames.api.schemas import PlayerResponse, TeamResponse
from flames.models.player import Player
from flames.models.roster import Roster

router = APIRouter(prefix="/roster", tags=["Roster"])


def player_response(player: Player) -> PlayerResponse:
    return PlayerResponse(
        id=player.id,
        team_id=player.team_id,
        name=player.name,
        role=player.role.value,
        credit=player.credit,
        season_runs=player.season_runs,
        season_wickets=player.season_wickets,
        strike_rate=player.strike_rate,
        economy=player.economy,
        recent_form=list(player.recent_form),
        form_average=round(player.form_average, 2),
        bio=player.bio,
    )


@router.get("/teams", response_model=list[TeamResponse])
def list_teams(roster: Roster = Depends(get_catalog)):
    return [TeamResponse.model_validate(t) for t in roster.teams()]


@router.get("/teams/{team_id}/players", response_model=list[PlayerResponse])
def list_team_players(team_id: str, roster: Roster = Depends(get_catalog)):
    if roster.team(team_id) is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return [player_response(p) for p in roster.players(team_id)]


@router.get("/players", response_model=list[PlayerResponse])
def list_players(roster: Roster = Depends(get_catalog)):
    return [player_response(p) for p in roster.all_players()]
