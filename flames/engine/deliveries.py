"""
Ball outcome definitions and the weighted outcome generator.
Each call consumes exactly one draw from the injected random source.
"""
import enum
import random
from typing import Optional, Protocol


class BallOutcome(enum.Enum):
    DOT = "0"
    SINGLE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    SIX = "6"
    WICKET = "W"
    WIDE = "Wd"
    NO_BALL = "Nb"

    @property
    def runs(self) -> int:
        """Runs off the bat (0 for wicket and extras)"""
        return _BAT_RUNS.get(self, 0)

    @property
    def is_extra(self) -> bool:
        return self in (BallOutcome.WIDE, BallOutcome.NO_BALL)

    @property
    def is_legal(self) -> bool:
        return not self.is_extra

    @classmethod
    def from_runs(cls, runs: int) -> "BallOutcome":
        for outcome, value in _BAT_RUNS.items():
            if value == runs:
                return outcome
        raise ValueError(f"No run outcome for {runs}")


_BAT_RUNS = {
    BallOutcome.DOT: 0,
    BallOutcome.SINGLE: 1,
    BallOutcome.TWO: 2,
    BallOutcome.THREE: 3,
    BallOutcome.FOUR: 4,
    BallOutcome.SIX: 6,
}

# Fixed outcome table, must sum to 1
OUTCOME_WEIGHTS = {
    BallOutcome.DOT: 0.274,
    BallOutcome.SINGLE: 0.24,
    BallOutcome.TWO: 0.12,
    BallOutcome.THREE: 0.05,
    BallOutcome.FOUR: 0.18,
    BallOutcome.SIX: 0.08,
    BallOutcome.WICKET: 0.04,
    BallOutcome.WIDE: 0.008,
    BallOutcome.NO_BALL: 0.008,
}


class RandomSource(Protocol):
    def random(self) -> float: ...


def outcome_for_draw(draw: float) -> BallOutcome:
    """Map a uniform draw in [0, 1) onto the outcome table"""
    cumulative = 0.0
    for outcome, weight in OUTCOME_WEIGHTS.items():
        cumulative += weight
        if draw < cumulative:
            return outcome
    # Float rounding can leave a sliver above the last bucket
    return BallOutcome.NO_BALL


class OutcomeGenerator:
    """Samples ball outcomes from OUTCOME_WEIGHTS using an injected source"""

    def __init__(self, source: Optional[RandomSource] = None):
        self.source = source if source is not None else random.Random()

    def next_outcome(self) -> BallOutcome:
        return outcome_for_draw(self.source.random())


class ScriptedOutcomes:
    """Replays a fixed outcome sequence; used for replays and deterministic runs"""

    def __init__(self, outcomes):
        self._outcomes = [o if isinstance(o, BallOutcome) else _coerce(o) for o in outcomes]
        self._index = 0

    @property
    def remaining(self) -> int:
        return len(self._outcomes) - self._index

    def next_outcome(self) -> BallOutcome:
        if self._index >= len(self._outcomes):
            raise IndexError("Scripted outcome sequence exhausted")
        outcome = self._outcomes[self._index]
        self._index += 1
        return outcome


def _coerce(value) -> BallOutcome:
    if isinstance(value, int):
        return BallOutcome.from_runs(value)
    return BallOutcome(value)
