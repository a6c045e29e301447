"""
Tests for the ball outcome generator.
"""
import random
from collections import Counter

import pytest

from flames.engine.deliveries import (
    OUTCOME_WEIGHTS, BallOutcome, OutcomeGenerator, ScriptedOutcomes, outcome_for_draw,
)


class FixedSource:
    """Random source that returns a canned sequence of draws"""

    def __init__(self, *draws):
        self.draws = list(draws)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.draws.pop(0)


class TestOutcomeTable:
    def test_weights_sum_to_one(self):
        assert sum(OUTCOME_WEIGHTS.values()) == pytest.approx(1.0)

    def test_table_covers_every_outcome(self):
        assert set(OUTCOME_WEIGHTS) == set(BallOutcome)

    @pytest.mark.parametrize("draw,expected", [
        (0.0, BallOutcome.DOT),
        (0.27, BallOutcome.DOT),
        (0.30, BallOutcome.SINGLE),
        (0.60, BallOutcome.TWO),
        (0.65, BallOutcome.THREE),
        (0.80, BallOutcome.FOUR),
        (0.92, BallOutcome.SIX),
        (0.95, BallOutcome.WICKET),
        (0.988, BallOutcome.WIDE),
        (0.999, BallOutcome.NO_BALL),
    ])
    def test_draw_maps_to_bucket(self, draw, expected):
        assert outcome_for_draw(draw) == expected

    def test_run_values(self):
        assert [o.runs for o in BallOutcome] == [0, 1, 2, 3, 4, 6, 0, 0, 0]
        assert not BallOutcome.WIDE.is_legal
        assert not BallOutcome.NO_BALL.is_legal
        assert BallOutcome.WICKET.is_legal


class TestOutcomeGenerator:
    def test_one_draw_per_outcome(self):
        source = FixedSource(0.1, 0.95)
        generator = OutcomeGenerator(source)

        assert generator.next_outcome() == BallOutcome.DOT
        assert generator.next_outcome() == BallOutcome.WICKET
        assert source.calls == 2

    def test_seeded_sources_replay(self):
        first = OutcomeGenerator(random.Random(42))
        second = OutcomeGenerator(random.Random(42))

        assert [first.next_outcome() for _ in range(50)] == [second.next_outcome() for _ in range(50)]

    def test_frequencies_follow_table(self):
        generator = OutcomeGenerator(random.Random(7))
        counts = Counter(generator.next_outcome() for _ in range(20000))

        assert counts[BallOutcome.FOUR] / 20000 == pytest.approx(0.18, abs=0.02)
        assert counts[BallOutcome.DOT] / 20000 == pytest.approx(0.274, abs=0.02)
        assert counts[BallOutcome.WICKET] / 20000 == pytest.approx(0.04, abs=0.01)


class TestScriptedOutcomes:
    def test_accepts_runs_and_codes(self):
        script = ScriptedOutcomes([4, 1, "W", "Wd", BallOutcome.NO_BALL])

        assert [script.next_outcome() for _ in range(5)] == [
            BallOutcome.FOUR, BallOutcome.SINGLE, BallOutcome.WICKET, BallOutcome.WIDE, BallOutcome.NO_BALL,
        ]
        assert script.remaining == 0

    def test_exhausted_script_raises(self):
        script = ScriptedOutcomes([0])
        script.next_outcome()
        with pytest.raises(IndexError):
            script.next_outcome()

    def test_unknown_run_value_rejected(self):
        with pytest.raises(ValueError):
            ScriptedOutcomes([5])
