"""
Tests for the live match clock (pause/resume cancellation semantics).
"""
import asyncio
import logging
import random

from flames.engine.match_clock import LiveMatch
from flames.engine.match_engine import MatchPhase, MatchSimulation
from flames.generators.roster_generator import get_roster


def create_live_match(interval: float = 0.001, auto_play: bool = True, seed: int = 3):
    roster = get_roster()
    sim = MatchSimulation(roster, rng=random.Random(seed))
    ticks = []
    match = LiveMatch(
        sim,
        sim.create(roster.fixture("JPL09_M12")),
        interval=interval,
        on_tick=ticks.append,
        auto_play=auto_play,
    )
    return match, ticks


class TestLiveClock:
    def test_pause_stops_ticking_immediately(self):
        async def scenario():
            match, ticks = create_live_match()
            match.start()
            assert match.is_running
            await asyncio.sleep(0.05)

            match.pause()
            paused_at = len(ticks)
            paused_state = match.state
            assert not match.is_running
            assert match.state.phase == MatchPhase.PAUSED

            await asyncio.sleep(0.05)
            assert len(ticks) == paused_at
            assert match.state is paused_state
            return paused_at

        assert asyncio.run(scenario()) > 0

    def test_resume_schedules_a_fresh_clock(self):
        async def scenario():
            match, ticks = create_live_match()
            match.start()
            await asyncio.sleep(0.02)
            match.pause()
            paused_at = len(ticks)

            match.resume()
            assert match.is_running
            assert match.state.phase in (MatchPhase.INNINGS_ONE, MatchPhase.INNINGS_TWO)
            await asyncio.sleep(0.05)
            match.stop()
            return paused_at, len(ticks)

        paused_at, total = asyncio.run(scenario())
        assert total > paused_at

    def test_clock_runs_match_to_completion(self):
        async def scenario():
            match, ticks = create_live_match(interval=0)
            match.start()
            await asyncio.wait_for(match.wait(), timeout=10)
            return match, ticks

        match, ticks = asyncio.run(scenario())
        assert match.state.phase == MatchPhase.COMPLETED
        assert not match.is_running
        assert match.last_result is ticks[-1]
        assert all(t.processed for t in ticks)

    def test_manual_mode_steps_one_ball(self):
        match, ticks = create_live_match(auto_play=False)
        match.start()
        assert not match.is_running

        result = match.step()
        assert result.processed
        assert len(ticks) == 1
        assert match.state is result.state

    def test_step_while_paused_is_noop(self):
        match, ticks = create_live_match(auto_play=False)
        match.start()
        match.pause()

        result = match.step()
        assert not result.processed
        assert ticks == []
        assert match.last_result is None

    def test_failing_callback_is_logged(self, caplog):
        def explode(result):
            raise RuntimeError("scoreboard offline")

        async def scenario():
            roster = get_roster()
            sim = MatchSimulation(roster, rng=random.Random(3))
            match = LiveMatch(sim, sim.create(roster.fixture("JPL09_M12")), interval=0, on_tick=explode)
            match.start()
            await asyncio.wait_for(match.wait(), timeout=10)
            await asyncio.sleep(0)
            return match

        with caplog.at_level(logging.ERROR, logger="flames.engine.match_clock"):
            match = asyncio.run(scenario())

        assert not match.is_running
        assert match.last_result is not None
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "clock died" in errors[0].getMessage()
        assert isinstance(errors[0].exc_info[1], RuntimeError)
