"""
Live T20 match simulation.

MatchSimulation is a reducer: every operation takes an immutable MatchState
and returns a new one built with dataclasses.replace. Nothing here performs
I/O or keeps per-match state, so one engine can drive any number of matches.
"""
import enum
import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Optional

from flames.engine.deliveries import BallOutcome, OutcomeGenerator
from flames.models.player import Player
from flames.models.roster import Roster
from flames.models.team import Fixture

logger = logging.getLogger(__name__)

MAX_OVERS = 20
BALLS_PER_OVER = 6
MAX_WICKETS = 10
TOTAL_BALLS = MAX_OVERS * BALLS_PER_OVER
MAX_COMMENTARY = 40


class MatchPhase(enum.Enum):
    NOT_STARTED = "not_started"
    INNINGS_ONE = "innings_one"
    INNINGS_TWO = "innings_two"
    COMPLETED = "completed"
    PAUSED = "paused"


LIVE_PHASES = (MatchPhase.INNINGS_ONE, MatchPhase.INNINGS_TWO)


@dataclass(frozen=True)
class BatterInnings:
    """Tracks a batter's innings"""
    player_id: str
    name: str
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    is_out: bool = False

    @property
    def strike_rate(self) -> float:
        if self.balls == 0:
            return 0.0
        return (self.runs / self.balls) * 100


@dataclass(frozen=True)
class BowlerSpell:
    """Tracks a bowler's spell"""
    player_id: str
    name: str
    balls: int = 0  # legal deliveries
    runs: int = 0
    wickets: int = 0
    wides: int = 0
    no_balls: int = 0

    @property
    def overs_display(self) -> str:
        return f"{self.balls // BALLS_PER_OVER}.{self.balls % BALLS_PER_OVER}"

    @property
    def economy(self) -> float:
        if self.balls == 0:
            return 0.0
        return (self.runs / self.balls) * BALLS_PER_OVER


@dataclass(frozen=True)
class CommentaryEntry:
    timestamp: datetime
    text: str


@dataclass(frozen=True)
class InningsSummary:
    batting_team_id: str
    bowling_team_id: str
    runs: int
    wickets: int
    extras: int
    overs: str
    batting_card: tuple[BatterInnings, ...]
    bowling_card: tuple[BowlerSpell, ...]


@dataclass(frozen=True)
class MatchResult:
    winner_team_id: Optional[str]  # None for a tie
    margin: str
    summary: str


@dataclass(frozen=True)
class MatchState:
    fixture_id: str
    batting_team_id: str
    bowling_team_id: str
    phase: MatchPhase = MatchPhase.NOT_STARTED
    resume_phase: Optional[MatchPhase] = None  # set only while PAUSED

    legal_balls_in_over: int = 0
    completed_overs: int = 0
    runs: int = 0
    wickets: int = 0
    extras: int = 0
    target: Optional[int] = None
    current_run_rate: float = 0.0
    required_run_rate: Optional[float] = None

    # Indexes into the cards below
    striker: Optional[int] = None
    non_striker: Optional[int] = None
    current_bowler: Optional[int] = None

    batting_card: tuple[BatterInnings, ...] = ()
    bowling_card: tuple[BowlerSpell, ...] = ()
    commentary: tuple[CommentaryEntry, ...] = ()

    first_innings: Optional[InningsSummary] = None
    result: Optional[MatchResult] = None

    @property
    def innings_phase(self) -> MatchPhase:
        """The innings this state belongs to, looking through a pause"""
        if self.phase == MatchPhase.PAUSED and self.resume_phase is not None:
            return self.resume_phase
        return self.phase

    @property
    def innings_number(self) -> int:
        return 2 if self.innings_phase in (MatchPhase.INNINGS_TWO, MatchPhase.COMPLETED) else 1

    @property
    def is_live(self) -> bool:
        return self.phase in LIVE_PHASES

    @property
    def all_out(self) -> bool:
        """Ten down, or a short side has no one left to partner the last batter"""
        if self.wickets >= MAX_WICKETS:
            return True
        at_crease = (self.striker_innings, self.non_striker_innings)
        return any(b is not None and b.is_out for b in at_crease)

    @property
    def legal_balls_total(self) -> int:
        return self.completed_overs * BALLS_PER_OVER + self.legal_balls_in_over

    @property
    def balls_remaining(self) -> int:
        return max(0, TOTAL_BALLS - self.legal_balls_total)

    @property
    def overs_display(self) -> str:
        return f"{self.completed_overs}.{self.legal_balls_in_over}"

    @property
    def striker_innings(self) -> Optional[BatterInnings]:
        return self.batting_card[self.striker] if self.striker is not None else None

    @property
    def non_striker_innings(self) -> Optional[BatterInnings]:
        return self.batting_card[self.non_striker] if self.non_striker is not None else None

    @property
    def bowler_spell(self) -> Optional[BowlerSpell]:
        return self.bowling_card[self.current_bowler] if self.current_bowler is not None else None

    @property
    def last_commentary(self) -> Optional[str]:
        return self.commentary[0].text if self.commentary else None


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick; outcome is None when the tick was not processed"""
    state: MatchState
    outcome: Optional[BallOutcome] = None
    events: tuple[str, ...] = field(default_factory=tuple)

    @property
    def processed(self) -> bool:
        return self.outcome is not None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MatchSimulation:
    """
    Cricket match simulation engine.
    Simulates T20 matches ball by ball from a weighted outcome table.
    """

    def __init__(
        self,
        roster: Roster,
        generator=None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        max_commentary: int = MAX_COMMENTARY,
    ):
        self.roster = roster
        self.rng = rng if rng is not None else random.Random()
        # Generator shares the rng unless one is injected
        self.generator = generator if generator is not None else OutcomeGenerator(self.rng)
        self.clock = clock or _utcnow
        self.max_commentary = max_commentary

    # ---- lifecycle --------------------------------------------------------

    def create(self, fixture: Fixture) -> MatchState:
        return MatchState(
            fixture_id=fixture.id,
            batting_team_id=fixture.batting_first_team_id,
            bowling_team_id=fixture.bowling_first_team_id,
        )

    def start(self, state: MatchState) -> MatchState:
        """Walk the openers out for the first innings"""
        if state.phase != MatchPhase.NOT_STARTED:
            return state

        state = self._setup_innings(state, state.batting_team_id, state.bowling_team_id)
        fixture = self.roster.fixture(state.fixture_id)
        commentary = state.commentary
        if fixture and fixture.toss:
            commentary = self._log(commentary, fixture.toss)
        batting = self._team_name(state.batting_team_id)
        commentary = self._log(
            commentary,
            f"{batting} to bat. {state.batting_card[0].name} and {state.batting_card[1].name} open, "
            f"{state.bowling_card[0].name} has the new ball.",
        )
        logger.info("Match %s started, %s batting", state.fixture_id, state.batting_team_id)
        return replace(state, phase=MatchPhase.INNINGS_ONE, commentary=commentary)

    def pause(self, state: MatchState) -> MatchState:
        if state.phase not in LIVE_PHASES:
            return state
        logger.info("Match %s paused at %s", state.fixture_id, state.overs_display)
        return replace(state, phase=MatchPhase.PAUSED, resume_phase=state.phase, required_run_rate=None)

    def resume(self, state: MatchState) -> MatchState:
        if state.phase != MatchPhase.PAUSED or state.resume_phase is None:
            return state
        logger.info("Match %s resumed", state.fixture_id)
        required_rr = None
        if state.resume_phase == MatchPhase.INNINGS_TWO:
            required_rr = self._required_rate(state.target, state.runs, state.legal_balls_total)
        return replace(state, phase=state.resume_phase, resume_phase=None, required_run_rate=required_rr)

    def advance(self, state: MatchState) -> MatchState:
        """Process one delivery. Returns the same object when nothing was processed."""
        return self.tick(state).state

    def tick(self, state: MatchState) -> TickResult:
        if state.phase not in LIVE_PHASES:
            return TickResult(state=state)

        outcome = self.generator.next_outcome()
        state = self._apply_outcome(state, outcome)
        events = []

        if state.phase == MatchPhase.INNINGS_ONE:
            if state.all_out or state.completed_overs >= MAX_OVERS:
                state = self._start_second_innings(state)
                events.append("innings_break")
        elif state.phase == MatchPhase.INNINGS_TWO:
            if (
                state.runs >= state.target
                or state.completed_overs >= MAX_OVERS
                or state.all_out
            ):
                state = self._complete(state)
                events.append("match_completed")

        return TickResult(state=state, outcome=outcome, events=tuple(events))

    # ---- ball processing --------------------------------------------------

    def _apply_outcome(self, state: MatchState, outcome: BallOutcome) -> MatchState:
        batting = list(state.batting_card)
        bowling = list(state.bowling_card)
        striker, non_striker = state.striker, state.non_striker
        bowler = state.current_bowler
        runs, wickets, extras = state.runs, state.wickets, state.extras
        balls, overs = state.legal_balls_in_over, state.completed_overs
        all_out = False

        label = f"{overs}.{balls + 1}"
        batter = batting[striker]
        spell = bowling[bowler]

        if outcome == BallOutcome.WIDE:
            runs += 1
            extras += 1
            bowling[bowler] = replace(spell, runs=spell.runs + 1, wides=spell.wides + 1)
            text = "Wide ball, 1 run added."
        elif outcome == BallOutcome.NO_BALL:
            runs += 1
            extras += 1
            bowling[bowler] = replace(spell, runs=spell.runs + 1, no_balls=spell.no_balls + 1)
            text = "No ball! 1 run added."
        elif outcome == BallOutcome.WICKET:
            balls += 1
            wickets += 1
            batting[striker] = replace(batter, balls=batter.balls + 1, is_out=True)
            bowling[bowler] = replace(spell, balls=spell.balls + 1, wickets=spell.wickets + 1)
            text = f"WICKET! {batter.name} is out, {spell.name} strikes. {batter.name} {batter.runs}({batter.balls + 1})."
            incoming = self._next_batter(state.batting_team_id, batting) if wickets < MAX_WICKETS else None
            if incoming is not None:
                batting.append(BatterInnings(player_id=incoming.id, name=incoming.name))
                striker = len(batting) - 1
                text += f" {incoming.name} walks in."
            else:
                # Dismissed batter stays at the crease index; all_out picks it up
                all_out = True
                text += " That's all out!"
        else:
            scored = outcome.runs
            balls += 1
            runs += scored
            batting[striker] = replace(
                batter,
                runs=batter.runs + scored,
                balls=batter.balls + 1,
                fours=batter.fours + (1 if scored == 4 else 0),
                sixes=batter.sixes + (1 if scored == 6 else 0),
            )
            bowling[bowler] = replace(spell, balls=spell.balls + 1, runs=spell.runs + scored)
            text = self._run_commentary(batter.name, spell.name, scored)
            if scored % 2 == 1:
                striker, non_striker = non_striker, striker

        if balls == BALLS_PER_OVER:
            balls = 0
            overs += 1
            striker, non_striker = non_striker, striker
            text += f" End of over {overs}."
            innings_over = (
                all_out
                or overs >= MAX_OVERS
                or (state.target is not None and runs >= state.target)
            )
            if not innings_over:
                bowling, bowler = self._select_bowler(state.bowling_team_id, bowling)

        legal_total = overs * BALLS_PER_OVER + balls
        current_rr = runs * BALLS_PER_OVER / legal_total if legal_total else 0.0
        required_rr = None
        if state.phase == MatchPhase.INNINGS_TWO:
            required_rr = self._required_rate(state.target, runs, legal_total)

        logger.debug("%s %s: %s -> %d/%d", state.fixture_id, label, outcome.value, runs, wickets)

        return replace(
            state,
            batting_card=tuple(batting),
            bowling_card=tuple(bowling),
            striker=striker,
            non_striker=non_striker,
            current_bowler=bowler,
            runs=runs,
            wickets=wickets,
            extras=extras,
            legal_balls_in_over=balls,
            completed_overs=overs,
            current_run_rate=current_rr,
            required_run_rate=required_rr,
            commentary=self._log(state.commentary, f"{label} {text}"),
        )

    @staticmethod
    def _required_rate(target: int, runs: int, legal_total: int) -> float:
        balls_left = TOTAL_BALLS - legal_total
        if balls_left <= 0:
            return 0.0
        return max(0, target - runs) * BALLS_PER_OVER / balls_left

    @staticmethod
    def _run_commentary(batter: str, bowler: str, runs: int) -> str:
        if runs == 6:
            return f"SIX! {batter} launches {bowler} into the stands!"
        if runs == 4:
            return f"FOUR! {batter} finds the boundary."
        if runs == 0:
            return f"Dot ball. {bowler} beats {batter}."
        if runs == 1:
            return f"{batter} pushes for a single."
        return f"{batter} works it away for {runs} runs."

    # ---- innings management -----------------------------------------------

    def _setup_innings(self, state: MatchState, batting_team_id: str, bowling_team_id: str) -> MatchState:
        order = self.roster.players(batting_team_id)
        openers = tuple(BatterInnings(player_id=p.id, name=p.name) for p in order[:2])
        bowling, bowler = self._select_bowler(bowling_team_id, [])
        return replace(
            state,
            batting_team_id=batting_team_id,
            bowling_team_id=bowling_team_id,
            batting_card=openers,
            bowling_card=tuple(bowling),
            striker=0,
            non_striker=1 if len(openers) > 1 else None,
            current_bowler=bowler,
            legal_balls_in_over=0,
            completed_overs=0,
            runs=0,
            wickets=0,
            extras=0,
            current_run_rate=0.0,
        )

    def _next_batter(self, team_id: str, batting: list[BatterInnings]) -> Optional[Player]:
        """Next player in catalog order who has not batted yet"""
        batted = {b.player_id for b in batting}
        return next((p for p in self.roster.players(team_id) if p.id not in batted), None)

    def _select_bowler(self, team_id: str, bowling: list[BowlerSpell]) -> tuple[list[BowlerSpell], int]:
        """Pick any bowler or all-rounder; the same bowler may bowl consecutive overs"""
        squad = self.roster.players(team_id)
        options = [p for p in squad if p.can_bowl] or list(squad)
        chosen = self.rng.choice(options)
        bowling = list(bowling)
        for i, spell in enumerate(bowling):
            if spell.player_id == chosen.id:
                return bowling, i
        bowling.append(BowlerSpell(player_id=chosen.id, name=chosen.name))
        return bowling, len(bowling) - 1

    def _summarize(self, state: MatchState) -> InningsSummary:
        return InningsSummary(
            batting_team_id=state.batting_team_id,
            bowling_team_id=state.bowling_team_id,
            runs=state.runs,
            wickets=state.wickets,
            extras=state.extras,
            overs=state.overs_display,
            batting_card=state.batting_card,
            bowling_card=state.bowling_card,
        )

    def _start_second_innings(self, state: MatchState) -> MatchState:
        summary = self._summarize(state)
        target = state.runs + 1
        batting_name = self._team_name(state.batting_team_id)
        chasing_name = self._team_name(state.bowling_team_id)

        next_state = self._setup_innings(state, state.bowling_team_id, state.batting_team_id)
        commentary = self._log(
            state.commentary,
            f"Innings break. {batting_name} finish on {summary.runs}/{summary.wickets} "
            f"({summary.overs} ov). {chasing_name} need {target} to win, target {target}.",
        )
        logger.info("Match %s innings break, target %d", state.fixture_id, target)
        return replace(
            next_state,
            phase=MatchPhase.INNINGS_TWO,
            target=target,
            required_run_rate=target * BALLS_PER_OVER / TOTAL_BALLS,
            first_innings=summary,
            commentary=commentary,
        )

    def _complete(self, state: MatchState) -> MatchState:
        chasing_id, defending_id = state.batting_team_id, state.bowling_team_id
        if state.runs >= state.target:
            left = MAX_WICKETS - state.wickets
            result = MatchResult(
                winner_team_id=chasing_id,
                margin=f"won by {left} wicket{'s' if left != 1 else ''}",
                summary="",
            )
        else:
            short = state.target - state.runs - 1
            if short == 0:
                result = MatchResult(winner_team_id=None, margin="Match tied", summary="")
            else:
                result = MatchResult(
                    winner_team_id=defending_id,
                    margin=f"won by {short} run{'s' if short != 1 else ''}",
                    summary="",
                )

        if result.winner_team_id is None:
            summary = "Match tied!"
        else:
            summary = f"{self._team_name(result.winner_team_id)} {result.margin}."
        result = replace(result, summary=summary)

        logger.info("Match %s completed: %s", state.fixture_id, summary)
        return replace(
            state,
            phase=MatchPhase.COMPLETED,
            required_run_rate=None,
            result=result,
            commentary=self._log(state.commentary, f"RESULT: {summary}"),
        )

    # ---- read models ------------------------------------------------------

    def scorecard(self, state: MatchState) -> list[InningsSummary]:
        """Both innings (as far as played) in batting order"""
        innings = []
        if state.first_innings is not None:
            innings.append(state.first_innings)
        if state.batting_card:
            innings.append(self._summarize(state))
        return innings

    # ---- helpers ----------------------------------------------------------

    def _team_name(self, team_id: str) -> str:
        team = self.roster.team(team_id)
        return team.name if team else team_id

    def _log(self, commentary: tuple[CommentaryEntry, ...], text: str) -> tuple[CommentaryEntry, ...]:
        entry = CommentaryEntry(timestamp=self.clock(), text=text)
        return ((entry,) + commentary)[: self.max_commentary]
