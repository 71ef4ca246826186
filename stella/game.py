"""Game — owner of one day's session.

The presentation layer reads `game.session` and calls:

    start_game()            start → playing (once per calendar day)
    perform_action(name)    playing: resolve one action
    tick(delta_seconds)     playing: advance the countdown

Calls made in the wrong state are ignored, never raised, so a UI that fires
a stray click after the game ended cannot break anything.

On game over the result is recorded through the PersistenceManager exactly
once, and every session-end listener (e.g. the countdown driver) is told
exactly once. abandon() ends a session without recording it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from stella import engine
from stella.config import GameConfig
from stella.models import ActionEvent, GameSession, PersistedStats
from stella.persistence import PersistenceManager
from stella.seed import daily_seed, day_string
from stella.share import format_share

logger = logging.getLogger(__name__)

SessionEndListener = Callable[[GameSession], None]


class Game:
    def __init__(
        self,
        persistence: PersistenceManager,
        config: GameConfig | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._persistence = persistence
        self._config = config or GameConfig()
        self._today = today
        self._day: date | None = None
        self._session = engine.new_session()
        self._stats: PersistedStats | None = None
        self._ended = False
        self._listeners: list[SessionEndListener] = []

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def persistence(self) -> PersistenceManager:
        return self._persistence

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def state(self) -> str:
        return self._session.state

    @property
    def stats(self) -> PersistedStats | None:
        """Stats written at game over, or None while the game is unfinished."""
        return self._stats

    def current_streak(self) -> int:
        """Streak still alive on the game's current day, for display before play."""
        return self._persistence.current_streak(self._today())

    def on_session_end(self, listener: SessionEndListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_game(self) -> bool:
        if self._session.state != "start":
            logger.debug("start_game ignored in state %s", self._session.state)
            return False
        today = self._today()
        if self._persistence.has_played_today(today):
            logger.warning("start_game rejected: already played %s", day_string(today))
            return False
        self._day = today
        self._stats = None
        self._ended = False
        seed = daily_seed(today)
        self._session = engine.start_session(self._session, day_string(today), seed, self._config)
        logger.info("Game started day=%s seed=%d", self._session.day, seed)
        return True

    def perform_action(self, action_name: str) -> ActionEvent | None:
        if self._session.state != "playing":
            logger.debug("perform_action(%r) ignored in state %s", action_name, self._session.state)
            return None
        if self._config.actions and action_name not in self._config.actions:
            logger.warning("Unknown action %r ignored", action_name)
            return None
        self._session, event = engine.apply_action(self._session, action_name, self._config)
        if self._session.state == "game_over":
            self.finish()
        return event

    def tick(self, delta_seconds: float) -> None:
        if self._session.state != "playing":
            return
        self._session, event = engine.apply_tick(self._session, delta_seconds, self._config)
        if event is not None:
            logger.info("Timed out after %.2fs", self._session.elapsed)
        if self._session.state == "game_over":
            self.finish()

    def finish(self) -> PersistedStats | None:
        """Game-over handler. Records the session once; repeat calls are no-ops."""
        if self._session.state != "game_over" or self._day is None:
            return None
        if self._stats is not None:
            return self._stats
        self._stats = self._persistence.record_game_end(
            elapsed=self._session.elapsed,
            action_count=self._session.action_count,
            history=list(self._session.history),
            today=self._day,
        )
        logger.info(
            "Game over reason=%s elapsed=%.2f actions=%d",
            self._session.end_reason, self._session.elapsed, self._session.action_count,
        )
        self._notify_end()
        return self._stats

    def abandon(self) -> None:
        """Drop an unfinished session without recording it."""
        if self._session.state != "playing":
            return
        logger.info("Session abandoned after %.2fs", self._session.elapsed)
        ended = self._session
        self._session = engine.new_session()
        self._day = None
        self._notify_end(ended)

    def share_text(self) -> str | None:
        if self._stats is None:
            return None
        return format_share(self._session, self._stats, self._config)

    def _notify_end(self, session: GameSession | None = None) -> None:
        if self._ended:
            return
        self._ended = True
        for listener in list(self._listeners):
            listener(session or self._session)
