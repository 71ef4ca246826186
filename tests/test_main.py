"""Tests for the terminal launcher's non-interactive paths."""

from datetime import date

import pytest

from main import play
from stella.game import Game
from stella.persistence import MemoryStore, PersistenceManager
from stella.seed import day_string

TODAY = date(2025, 11, 19)


def _game(store: MemoryStore) -> Game:
    return Game(PersistenceManager(store), today=lambda: TODAY)


@pytest.mark.asyncio
async def test_locked_day_reports_live_streak(capsys):
    store = MemoryStore({
        "lastPlayDate": day_string(TODAY),
        "streak": "6",
        "lastGameTime": "42.5",
        "lastGameActionCount": "7",
    })
    assert await play(_game(store)) == 1
    out = capsys.readouterr().out
    assert "Come back tomorrow" in out
    assert "Last game: 0:42 over 7 actions, streak 6." in out
