"""Durable stats on top of a string key-value store.

Every value is stored as text:

    lastPlayDate         "Wed Nov 19 2025"
    bestTime             "42.5"           (absent until a game is recorded)
    streak               "3"
    lastGameTime         "42.5"
    lastGameActionCount  "7"
    lastGameHistory      '[{"actionName": "pet", "outcomeTier": "bad"}, ...]'

Reads never raise: a missing or unparseable value reads as its default
("never played", streak 0, no best time).

Two stores are provided:

    MemoryStore    — plain dict, used by tests and throwaway sessions.
    JsonFileStore  — one flat JSON object on disk.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import date, timedelta
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from stella.models import ActionEvent, HistoryEntry, PersistedStats
from stella.seed import day_string

logger = logging.getLogger(__name__)

KEY_LAST_PLAY_DATE = "lastPlayDate"
KEY_BEST_TIME = "bestTime"
KEY_STREAK = "streak"
KEY_LAST_GAME_TIME = "lastGameTime"
KEY_LAST_GAME_ACTION_COUNT = "lastGameActionCount"
KEY_LAST_GAME_HISTORY = "lastGameHistory"

_history_adapter = TypeAdapter(list[HistoryEntry])


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Flat {key: text} JSON file. A missing or corrupt file reads as empty."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Stats file %s unreadable, treating as empty: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Stats file %s is not a JSON object, treating as empty", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


# ---------------------------------------------------------------------------
# Parsing helpers (all fail soft)
# ---------------------------------------------------------------------------

def _parse_float(raw: str | None, key: str) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logger.warning("Ignoring malformed %s value %r", key, raw)
        return None
    return value


def _parse_int(raw: str | None, key: str) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s value %r", key, raw)
        return None


def _parse_history(raw: str | None) -> list[HistoryEntry]:
    if raw is None:
        return []
    try:
        return _history_adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning("Ignoring malformed %s: %s", KEY_LAST_GAME_HISTORY, e)
        return []


# ---------------------------------------------------------------------------
# PersistenceManager
# ---------------------------------------------------------------------------

class PersistenceManager:
    """Sole owner of the persisted stats keys."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load_stats(self) -> PersistedStats:
        best = _parse_float(self._store.get(KEY_BEST_TIME), KEY_BEST_TIME)
        streak = _parse_int(self._store.get(KEY_STREAK), KEY_STREAK)
        last_time = _parse_float(self._store.get(KEY_LAST_GAME_TIME), KEY_LAST_GAME_TIME)
        last_count = _parse_int(
            self._store.get(KEY_LAST_GAME_ACTION_COUNT), KEY_LAST_GAME_ACTION_COUNT
        )
        return PersistedStats(
            last_play_date=self._store.get(KEY_LAST_PLAY_DATE) or None,
            best_time=best if best is not None and best >= 0 else None,
            streak=streak if streak is not None and streak >= 0 else 0,
            last_game_time=last_time or 0.0,
            last_game_action_count=last_count or 0,
            last_game_history=_parse_history(self._store.get(KEY_LAST_GAME_HISTORY)),
        )

    def has_played_today(self, today: date) -> bool:
        return self._store.get(KEY_LAST_PLAY_DATE) == day_string(today)

    def current_streak(self, today: date) -> int:
        """Streak still alive today: last play was today or yesterday."""
        stats = self.load_stats()
        if stats.last_play_date in (day_string(today), day_string(today - timedelta(days=1))):
            return stats.streak
        return 0

    def record_game_end(
        self,
        elapsed: float,
        action_count: int,
        history: list[ActionEvent],
        today: date,
    ) -> PersistedStats:
        """Write one finished game and return the resulting stats.

        The previous play date must be read before lastPlayDate is
        overwritten, or the streak can never continue.

        A store that fails to write is logged, not raised: the returned
        stats describe the finished game either way.
        """
        previous = self.load_stats()
        yesterday = day_string(today - timedelta(days=1))
        streak = previous.streak + 1 if previous.last_play_date == yesterday else 1
        best = elapsed if previous.best_time is None else min(previous.best_time, elapsed)
        entries = [HistoryEntry.from_event(e) for e in history]
        stats = PersistedStats(
            last_play_date=day_string(today),
            best_time=best,
            streak=streak,
            last_game_time=elapsed,
            last_game_action_count=action_count,
            last_game_history=entries,
        )

        try:
            self._write(stats)
        except OSError as e:
            logger.warning("Could not save stats for %s: %s", stats.last_play_date, e)
            return stats
        logger.info(
            "Recorded game day=%s elapsed=%.2f actions=%d streak=%d",
            stats.last_play_date, elapsed, action_count, streak,
        )
        return stats

    def _write(self, stats: PersistedStats) -> None:
        self._store.set(KEY_STREAK, str(stats.streak))
        self._store.set(KEY_LAST_PLAY_DATE, stats.last_play_date or "")
        self._store.set(KEY_BEST_TIME, repr(float(stats.best_time)))
        self._store.set(KEY_LAST_GAME_TIME, repr(float(stats.last_game_time)))
        self._store.set(KEY_LAST_GAME_ACTION_COUNT, str(stats.last_game_action_count))
        self._store.set(
            KEY_LAST_GAME_HISTORY,
            _history_adapter.dump_json(stats.last_game_history, by_alias=True).decode(),
        )
