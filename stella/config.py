"""Game tunables (window length, tick rate, catalogue, difficulty bands).

load_config() returns defaults merged with an optional JSON file, then
environment overrides. Scalars in the file overwrite defaults; `bands` and
`actions` are replaced wholesale.

Environment:
    STELLA_ACTION_WINDOW   seconds per action window
    STELLA_TICK_INTERVAL   seconds between timer ticks
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from stella.outcomes import DEFAULT_BANDS, OutcomeBand, OutcomeTier, band_for_tier, validate_bands

_ENV_OVERRIDES = {
    "STELLA_ACTION_WINDOW": "action_window_seconds",
    "STELLA_TICK_INTERVAL": "tick_interval_seconds",
}


class ConfigError(ValueError):
    """Raised when a config file or override holds invalid values."""


class GameConfig(BaseModel):
    action_window_seconds: float = Field(default=10.0, gt=0)
    tick_interval_seconds: float = Field(default=0.05, gt=0)
    starting_patience: int = Field(default=100, ge=0, le=100)
    starting_mood: int = Field(default=50, ge=0, le=100)
    actions: list[str] = Field(default_factory=lambda: ["pet", "feed", "play", "brush", "treat"])
    bands: list[OutcomeBand] = Field(default_factory=lambda: list(DEFAULT_BANDS))
    timeout_tier: OutcomeTier = "terrible"
    title: str = "Stella"
    footer: str = "Can you keep Stella happy?"
    share_row_width: int = Field(default=10, gt=0)

    @model_validator(mode="after")
    def _check_bands(self) -> GameConfig:
        validate_bands(self.bands)
        band_for_tier(self.timeout_tier, self.bands)
        return self


def load_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> GameConfig:
    """Build the effective config. Raises ConfigError on bad input."""
    env = os.environ if env is None else env
    fields: dict[str, Any] = {}
    if path is not None and path.is_file():
        try:
            stored = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
        if not isinstance(stored, dict):
            raise ConfigError(f"Config file {path} must hold a JSON object")
        fields.update(stored)
    for var, key in _ENV_OVERRIDES.items():
        if env.get(var):
            fields[key] = env[var]
    try:
        return GameConfig.model_validate(fields)
    except ValidationError as e:
        raise ConfigError(f"Invalid game config: {e}") from e
