"""Pure session transitions.

Each function takes a GameSession and returns a new one; nothing here mutates
its input, touches storage or reads the clock. Values change by applying
deltas to the incoming session and clamping:

    patience, mood  → [0, 100]
    time_left       → [0, action window]

Game over is reached only when patience or time_left hits 0.
"""

from __future__ import annotations

import logging

from stella.config import GameConfig
from stella.models import TIMEOUT_ACTION, ActionEvent, GameSession
from stella.outcomes import band_for_tier, resolve_outcome
from stella.seed import action_seed

logger = logging.getLogger(__name__)

STAT_MIN = 0
STAT_MAX = 100

# Float residue left after summing many small tick deltas counts as expired.
_TIME_EPSILON = 1e-9


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _stat(current: int, delta: int) -> int:
    return int(clamp(current + delta, STAT_MIN, STAT_MAX))


def new_session() -> GameSession:
    return GameSession()


def start_session(session: GameSession, day: str, seed: int, config: GameConfig) -> GameSession:
    if session.state != "start":
        return session
    return GameSession(
        state="playing",
        patience=config.starting_patience,
        mood=config.starting_mood,
        time_left=config.action_window_seconds,
        day=day,
        seed=seed,
    )


def apply_action(
    session: GameSession, action_name: str, config: GameConfig
) -> tuple[GameSession, ActionEvent | None]:
    """Resolve one player action. Returns (session, event or None if ignored)."""
    if session.state != "playing" or session.seed is None:
        return session, None

    index = session.action_counts.get(action_name, 0)
    r = action_seed(action_name, index, session.seed)
    band = resolve_outcome(r, config.bands)
    logger.debug("draw action=%s index=%d r=%.4f tier=%s", action_name, index, r, band.tier)

    event = ActionEvent(
        action_name=action_name,
        occurrence_index=index,
        outcome_tier=band.tier,
        patience_delta=band.patience_delta,
        mood_delta=band.mood_delta,
    )
    patience = _stat(session.patience, band.patience_delta)
    updated = session.model_copy(update={
        "patience": patience,
        "mood": _stat(session.mood, band.mood_delta),
        "time_left": config.action_window_seconds,
        "action_counts": {**session.action_counts, action_name: index + 1},
        "history": [*session.history, event],
    })
    if patience == STAT_MIN:
        updated = updated.model_copy(update={"state": "game_over", "end_reason": "patience"})
    return updated, event


def apply_tick(
    session: GameSession, delta: float, config: GameConfig
) -> tuple[GameSession, ActionEvent | None]:
    """Advance the countdown. Returns (session, synthetic timeout event or None)."""
    if session.state != "playing" or delta <= 0:
        return session, None

    consumed = min(delta, session.time_left)
    time_left = clamp(session.time_left - consumed, 0.0, config.action_window_seconds)
    if time_left <= _TIME_EPSILON:
        time_left = 0.0
    updated = session.model_copy(update={
        "time_left": time_left,
        "elapsed": session.elapsed + consumed,
    })
    if time_left > 0.0:
        return updated, None

    band = band_for_tier(config.timeout_tier, config.bands)
    event = ActionEvent(
        action_name=TIMEOUT_ACTION,
        occurrence_index=0,
        outcome_tier=band.tier,
        patience_delta=band.patience_delta,
        mood_delta=band.mood_delta,
        timed_out=True,
    )
    updated = updated.model_copy(update={
        "patience": _stat(updated.patience, band.patience_delta),
        "mood": _stat(updated.mood, band.mood_delta),
        "history": [*updated.history, event],
        "state": "game_over",
        "end_reason": "timeout",
    })
    return updated, event
