"""Core domain models.

The engine, persistence manager and share formatter all operate on these
types. Pydantic is used for validation and serialisation at every boundary.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from stella.outcomes import OutcomeTier

GameState = Literal["start", "playing", "game_over"]
EndReason = Literal["patience", "timeout"]

TIMEOUT_ACTION = "timeout"


class ActionEvent(BaseModel):
    """One resolved action (or the synthetic timeout) in a session's history."""

    model_config = ConfigDict(frozen=True)

    action_name: str
    occurrence_index: int = Field(ge=0)
    outcome_tier: OutcomeTier
    patience_delta: int
    mood_delta: int
    timed_out: bool = False


class HistoryEntry(BaseModel):
    """Persisted summary of an ActionEvent."""

    model_config = ConfigDict(populate_by_name=True)

    action_name: str = Field(alias="actionName")
    outcome_tier: OutcomeTier = Field(alias="outcomeTier")

    @classmethod
    def from_event(cls, event: ActionEvent) -> HistoryEntry:
        return cls(action_name=event.action_name, outcome_tier=event.outcome_tier)


class GameSession(BaseModel):
    """Everything the presentation layer needs to draw one session."""

    state: GameState = "start"
    patience: int = 0
    mood: int = 0
    time_left: float = 0.0
    action_counts: dict[str, int] = Field(default_factory=dict)
    history: list[ActionEvent] = Field(default_factory=list)
    day: str | None = None  # canonical day string, set on start
    seed: int | None = None
    elapsed: float = 0.0  # seconds consumed by ticks
    end_reason: EndReason | None = None

    @property
    def action_count(self) -> int:
        """Player actions taken, not counting the synthetic timeout."""
        return sum(1 for e in self.history if not e.timed_out)


class PersistedStats(BaseModel):
    """Durable stats kept across days."""

    last_play_date: str | None = None
    best_time: float | None = None
    streak: int = Field(default=0, ge=0)
    last_game_time: float = 0.0
    last_game_action_count: int = 0
    last_game_history: list[HistoryEntry] = Field(default_factory=list)
