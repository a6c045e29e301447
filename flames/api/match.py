import logging
import random
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from flames.api.deps import get_catalog
from flames.api.schemas import (
    BatterInningsResponse, BowlerSpellResponse, CommentaryResponse,
    InningsSummaryResponse, MatchStateResponse, StartMatchRequest,
)
from flames.config import settings
from flames.engine.match_clock import LiveMatch
from flames.engine.match_engine import (
    BatterInnings, BowlerSpell, InningsSummary, MatchPhase, MatchSimulation,
)
from flames.models.roster import Roster

logger = logging.getLogger(__name__)

# Handlers are async so they share the event loop with the match clocks
router = APIRouter(prefix="/match", tags=["Live Match"])

# In-memory store for active matches, one per featured fixture
active_matches: Dict[str, LiveMatch] = {}


def _batter_response(b: Optional[BatterInnings]) -> Optional[BatterInningsResponse]:
    if b is None:
        return None
    return BatterInningsResponse(
        player_id=b.player_id,
        name=b.name,
        runs=b.runs,
        balls=b.balls,
        fours=b.fours,
        sixes=b.sixes,
        is_out=b.is_out,
        strike_rate=round(b.strike_rate, 2),
    )


def _bowler_response(s: Optional[BowlerSpell]) -> Optional[BowlerSpellResponse]:
    if s is None:
        return None
    return BowlerSpellResponse(
        player_id=s.player_id,
        name=s.name,
        overs=s.overs_display,
        runs=s.runs,
        wickets=s.wickets,
        wides=s.wides,
        no_balls=s.no_balls,
        economy=round(s.economy, 2),
    )


def _innings_response(innings: InningsSummary) -> InningsSummaryResponse:
    return InningsSummaryResponse(
        batting_team_id=innings.batting_team_id,
        bowling_team_id=innings.bowling_team_id,
        runs=innings.runs,
        wickets=innings.wickets,
        extras=innings.extras,
        overs=innings.overs,
        batting=[_batter_response(b) for b in innings.batting_card],
        bowling=[_bowler_response(s) for s in innings.bowling_card],
    )


def _get_match_state_response(match: LiveMatch) -> MatchStateResponse:
    state = match.state
    result = state.result
    last = match.last_result
    return MatchStateResponse(
        fixture_id=state.fixture_id,
        phase=state.phase.value,
        innings=state.innings_number,
        batting_team_id=state.batting_team_id,
        bowling_team_id=state.bowling_team_id,
        runs=state.runs,
        wickets=state.wickets,
        extras=state.extras,
        overs=state.overs_display,
        run_rate=round(state.current_run_rate, 2),
        required_rate=round(state.required_run_rate, 2) if state.required_run_rate is not None else None,
        target=state.target,
        balls_remaining=state.balls_remaining,
        striker=_batter_response(state.striker_innings),
        non_striker=_batter_response(state.non_striker_innings),
        bowler=_bowler_response(state.bowler_spell),
        commentary=[CommentaryResponse(timestamp=c.timestamp, text=c.text) for c in state.commentary],
        last_ball=last.outcome.value if last is not None else None,
        winner_team_id=result.winner_team_id if result else None,
        margin=result.margin if result else None,
        result=result.summary if result else None,
        is_running=match.is_running,
    )


def _get_active(fixture_id: str) -> LiveMatch:
    match = active_matches.get(fixture_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Active match session not found")
    return match


@router.post("/{fixture_id}/start", response_model=MatchStateResponse)
async def start_match(
    fixture_id: str,
    request: Optional[StartMatchRequest] = None,
    roster: Roster = Depends(get_catalog),
):
    """Start (or restart after completion) the live simulation for a fixture"""
    fixture = roster.fixture(fixture_id)
    if fixture is None:
        raise HTTPException(status_code=404, detail="Fixture not found")

    existing = active_matches.get(fixture_id)
    if existing is not None and existing.state.phase not in (MatchPhase.NOT_STARTED, MatchPhase.COMPLETED):
        raise HTTPException(status_code=400, detail="Match already in progress")
    if existing is not None:
        existing.stop()

    request = request or StartMatchRequest()
    seed = request.seed if request.seed is not None else settings.SIMULATION_SEED
    simulation = MatchSimulation(roster, rng=random.Random(seed), max_commentary=settings.MAX_COMMENTARY)
    match = LiveMatch(
        simulation,
        simulation.create(fixture),
        interval=settings.TICK_INTERVAL_SECONDS,
        auto_play=request.auto_play,
    )
    match.start()
    active_matches[fixture_id] = match
    logger.info("Live match %s started (auto_play=%s)", fixture_id, request.auto_play)
    return _get_match_state_response(match)


@router.get("/{fixture_id}/state", response_model=MatchStateResponse)
async def get_match_state(fixture_id: str):
    return _get_match_state_response(_get_active(fixture_id))


@router.post("/{fixture_id}/ball", response_model=MatchStateResponse)
async def play_ball(fixture_id: str):
    """Bowl one delivery by hand; a no-op once the match is paused or over"""
    match = _get_active(fixture_id)
    if match.is_running:
        raise HTTPException(status_code=400, detail="Match is on the live clock, pause it first")
    match.step()
    return _get_match_state_response(match)


@router.post("/{fixture_id}/pause", response_model=MatchStateResponse)
async def pause_match(fixture_id: str):
    match = _get_active(fixture_id)
    match.pause()
    return _get_match_state_response(match)


@router.post("/{fixture_id}/resume", response_model=MatchStateResponse)
async def resume_match(fixture_id: str):
    match = _get_active(fixture_id)
    match.resume()
    return _get_match_state_response(match)


@router.get("/{fixture_id}/scorecard", response_model=list[InningsSummaryResponse])
async def get_scorecard(fixture_id: str):
    match = _get_active(fixture_id)
    return [_innings_response(i) for i in match.simulation.scorecard(match.state)]
