"""
Live match clock: drives MatchSimulation.advance on a fixed interval inside
the running asyncio loop.
"""
import asyncio
import logging
from typing import Callable, Optional

from flames.engine.match_engine import MatchSimulation, MatchState, TickResult

logger = logging.getLogger(__name__)


class LiveMatch:
    """
    Owns one MatchState and the timer task that ticks it.

    Only one tick task exists at a time. pause() cancels it before returning,
    so no delivery is processed after a pause request; resume() schedules a
    fresh task rather than waking the old one.
    """

    def __init__(
        self,
        simulation: MatchSimulation,
        state: MatchState,
        interval: float = 1.0,
        on_tick: Optional[Callable[[TickResult], None]] = None,
        auto_play: bool = True,
    ):
        self.simulation = simulation
        self.state = state
        self.interval = interval
        self.on_tick = on_tick
        self.auto_play = auto_play
        self.last_result: Optional[TickResult] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> MatchState:
        self.state = self.simulation.start(self.state)
        if self.auto_play:
            self._schedule()
        return self.state

    def step(self) -> TickResult:
        """Process a single delivery by hand"""
        result = self.simulation.tick(self.state)
        self._accept(result)
        return result

    def pause(self) -> MatchState:
        self._cancel()
        self.state = self.simulation.pause(self.state)
        return self.state

    def resume(self) -> MatchState:
        self.state = self.simulation.resume(self.state)
        if self.auto_play:
            self._schedule()
        return self.state

    def stop(self):
        self._cancel()

    async def wait(self):
        """Wait until the clock stops by itself or is cancelled"""
        if self._task is not None:
            await asyncio.wait({self._task})

    def _schedule(self):
        self._cancel()
        if not self.state.is_live:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._on_done)

    def _cancel(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self):
        while self.state.is_live:
            await asyncio.sleep(self.interval)
            self._accept(self.simulation.tick(self.state))
        logger.info("Match %s clock stopped in phase %s", self.state.fixture_id, self.state.phase.value)

    def _on_done(self, task: asyncio.Task):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Match %s clock died in phase %s", self.state.fixture_id, self.state.phase.value, exc_info=error
            )

    def _accept(self, result: TickResult):
        self.state = result.state
        if result.processed:
            self.last_result = result
            if self.on_tick is not None:
                self.on_tick(result)
