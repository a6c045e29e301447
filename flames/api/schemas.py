"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum


# Enums
class MatchPhaseEnum(str, Enum):
    NOT_STARTED = "not_started"
    INNINGS_ONE = "innings_one"
    INNINGS_TWO = "innings_two"
    COMPLETED = "completed"
    PAUSED = "paused"


class FillModeEnum(str, Enum):
    RECOMMENDED = "recommended"
    FORM = "form"


# Roster Schemas
class TeamResponse(BaseModel):
    id: str
    name: str
    short_name: str
    color: str
    motto: str

    class Config:
        from_attributes = True


class PlayerResponse(BaseModel):
    id: str
    team_id: str
    name: str
    role: str
    credit: Decimal
    season_runs: int
    season_wickets: int
    strike_rate: float
    economy: float
    recent_form: list[int]
    form_average: float
    bio: str


# Match Schemas
class BatterInningsResponse(BaseModel):
    player_id: str
    name: str
    runs: int
    balls: int
    fours: int
    sixes: int
    is_out: bool
    strike_rate: float


class BowlerSpellResponse(BaseModel):
    player_id: str
    name: str
    overs: str
    runs: int
    wickets: int
    wides: int
    no_balls: int
    economy: float


class CommentaryResponse(BaseModel):
    timestamp: datetime
    text: str


class InningsSummaryResponse(BaseModel):
    batting_team_id: str
    bowling_team_id: str
    runs: int
    wickets: int
    extras: int
    overs: str
    batting: list[BatterInningsResponse]
    bowling: list[BowlerSpellResponse]


class MatchStateResponse(BaseModel):
    fixture_id: str
    phase: MatchPhaseEnum
    innings: int
    batting_team_id: str
    bowling_team_id: str
    runs: int
    wickets: int
    extras: int
    overs: str
    run_rate: float
    required_rate: Optional[float] = None
    target: Optional[int] = None
    balls_remaining: int

    striker: Optional[BatterInningsResponse] = None
    non_striker: Optional[BatterInningsResponse] = None
    bowler: Optional[BowlerSpellResponse] = None

    commentary: list[CommentaryResponse]
    last_ball: Optional[str] = None  # 0,1,2,3,4,6,W,Wd,Nb

    winner_team_id: Optional[str] = None
    margin: Optional[str] = None
    result: Optional[str] = None
    is_running: bool = False


class StartMatchRequest(BaseModel):
    auto_play: bool = True  # tick on the live clock; False for manual /ball calls
    seed: Optional[int] = None


# Squad Schemas
class SquadRequest(BaseModel):
    name: Optional[str] = None
    player_ids: list[str] = Field(default_factory=list)
    captain_id: Optional[str] = None
    vice_captain_id: Optional[str] = None
    budget: Optional[Decimal] = None


class SmartFillRequest(SquadRequest):
    mode: FillModeEnum = FillModeEnum.RECOMMENDED
    pool_team_ids: Optional[list[str]] = None  # default: whole catalog


class RecommendRequest(SquadRequest):
    pool_team_ids: Optional[list[str]] = None
    limit: Optional[int] = None


class CaptaincyRequest(BaseModel):
    player_ids: list[str]


class SquadResponse(BaseModel):
    name: str
    players: list[PlayerResponse]
    captain_id: Optional[str] = None
    vice_captain_id: Optional[str] = None
    budget: Decimal
    credits_spent: Decimal
    credits_remaining: Decimal


class RecommendedPlayer(BaseModel):
    player: PlayerResponse
    score: float


class RecommendationResponse(BaseModel):
    available: bool
    needed_role: str
    players: list[RecommendedPlayer]


class CaptaincyResponse(BaseModel):
    available: bool
    captain: Optional[PlayerResponse] = None
    vice_captain: Optional[PlayerResponse] = None
    captain_impact: Optional[float] = None
    vice_captain_impact: Optional[float] = None


class SquadValidationResponse(BaseModel):
    valid: bool
    errors: list[str]
    breakdown: dict
