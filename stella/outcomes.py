"""Outcome tiers and the bands that map a draw onto them.

A draw r in [0, 1) is matched against cumulative bands in order; the first
band whose upper bound exceeds r wins. Each band carries the patience and mood
deltas Stella's reaction applies. Callers clamp the resulting values.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict

OutcomeTier = Literal[
    "terrible",
    "bad",
    "okay",
    "neutral",
    "good",
    "great",
    "excellent",
]


class OutcomeBand(BaseModel):
    """One tier's slice of [0, 1) and the deltas it applies."""

    model_config = ConfigDict(frozen=True)

    tier: OutcomeTier
    upper: float  # exclusive upper bound of the cumulative band
    patience_delta: int
    mood_delta: int
    reaction: str = ""


DEFAULT_BANDS: tuple[OutcomeBand, ...] = (
    OutcomeBand(tier="terrible", upper=0.10, patience_delta=-40, mood_delta=-25,
                reaction="Stella hisses and stalks off."),
    OutcomeBand(tier="bad", upper=0.25, patience_delta=-25, mood_delta=-15,
                reaction="Stella flattens her ears."),
    OutcomeBand(tier="okay", upper=0.45, patience_delta=-12, mood_delta=-8,
                reaction="Stella tolerates it. Barely."),
    OutcomeBand(tier="neutral", upper=0.65, patience_delta=-5, mood_delta=0,
                reaction="Stella stares at you, unimpressed."),
    OutcomeBand(tier="good", upper=0.82, patience_delta=10, mood_delta=8,
                reaction="Stella flicks her tail approvingly."),
    OutcomeBand(tier="great", upper=0.95, patience_delta=20, mood_delta=15,
                reaction="Stella purrs."),
    OutcomeBand(tier="excellent", upper=1.00, patience_delta=35, mood_delta=25,
                reaction="Stella headbutts your hand. You are forgiven."),
)

_MOOD_LABELS = (
    (20, "furious"),
    (40, "grumpy"),
    (60, "content"),
    (80, "happy"),
)


def validate_bands(bands: Sequence[OutcomeBand]) -> None:
    """Raise ValueError unless bands tile [0, 1) exactly once, in order."""
    if not bands:
        raise ValueError("At least one outcome band is required")
    previous = 0.0
    for band in bands:
        if band.upper <= previous:
            raise ValueError(
                f"Band {band.tier!r} upper bound {band.upper} must exceed {previous}"
            )
        previous = band.upper
    if previous != 1.0:
        raise ValueError(f"Last band must end at 1.0, got {previous}")


def resolve_outcome(r: float, bands: Sequence[OutcomeBand] = DEFAULT_BANDS) -> OutcomeBand:
    if not 0.0 <= r < 1.0:
        raise ValueError(f"Draw must be in [0, 1), got {r}")
    for band in bands:
        if r < band.upper:
            return band
    # Only reachable with bands that fail validate_bands()
    raise ValueError(f"No band covers draw {r}")


def band_for_tier(tier: str, bands: Sequence[OutcomeBand] = DEFAULT_BANDS) -> OutcomeBand:
    for band in bands:
        if band.tier == tier:
            return band
    raise ValueError(f"Unknown outcome tier {tier!r}")


def describe_mood(mood: int) -> str:
    """Mood 0–100 → a one-word label for the HUD."""
    for limit, label in _MOOD_LABELS:
        if mood < limit:
            return label
    return "blissful"
