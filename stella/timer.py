"""Countdown driver — feeds wall-clock time into Game.tick().

Runs as one asyncio task on the same loop as the UI callbacks, so ticks and
player actions never interleave mid-transition. The interval only controls
how smoothly the countdown animates: the game sees the measured clock delta,
so timing out depends on elapsed time, not on how often the task wakes.

The driver stops itself when the game signals session end (game over or
abandon). stop() may be called any number of times; the task is cancelled at
most once.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from stella.game import Game
from stella.models import GameSession

logger = logging.getLogger(__name__)


class CountdownDriver:
    def __init__(
        self,
        game: Game,
        interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._game = game
        self._interval = game.config.tick_interval_seconds if interval is None else interval
        self._clock = clock
        self._task: asyncio.Task | None = None
        self._stopped = False
        self.ticks = 0
        game.on_session_end(self._on_session_end)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stopped

    def start(self) -> asyncio.Task:
        """Schedule the tick loop on the running event loop."""
        if self._task is not None:
            raise RuntimeError("CountdownDriver already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        task = self._task
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # From inside the loop itself the while-condition ends it cleanly.
        if task is not current:
            task.cancel()
        logger.debug("Countdown stopped after %d ticks", self.ticks)

    async def join(self) -> None:
        """Wait until the tick loop has finished."""
        if self._task is None:
            return
        await asyncio.wait([self._task])

    async def _run(self) -> None:
        last = self._clock()
        while not self._stopped and self._game.state == "playing":
            await asyncio.sleep(self._interval)
            now = self._clock()
            delta, last = now - last, now
            self.ticks += 1
            self._game.tick(delta)

    def _on_session_end(self, session: GameSession) -> None:
        self.stop()
