"""Tests for the asyncio countdown driver."""

import asyncio
import itertools
from datetime import date

import pytest

from stella.config import GameConfig
from stella.game import Game
from stella.persistence import MemoryStore, PersistenceManager
from stella.timer import CountdownDriver


def _game(window: float = 3.0) -> Game:
    return Game(
        PersistenceManager(MemoryStore()),
        config=GameConfig(action_window_seconds=window),
        today=lambda: date(2025, 11, 19),
    )


def _stepping_clock(step: float = 1.0):
    counter = itertools.count(0.0, step)
    return lambda: next(counter)


@pytest.mark.asyncio
async def test_driver_times_out_game():
    game = _game(window=3.0)
    game.start_game()
    driver = CountdownDriver(game, interval=0.001, clock=_stepping_clock(1.0))
    driver.start()
    await asyncio.wait_for(driver.join(), timeout=5)

    assert game.state == "game_over"
    assert game.session.end_reason == "timeout"
    assert game.session.elapsed == 3.0
    assert driver.ticks == 3
    assert driver.running is False
    assert game.stats is not None


@pytest.mark.asyncio
async def test_driver_interval_does_not_change_outcome():
    results = []
    for step in (0.5, 0.25):
        game = _game(window=2.0)
        game.start_game()
        driver = CountdownDriver(game, interval=0.001, clock=_stepping_clock(step))
        driver.start()
        await asyncio.wait_for(driver.join(), timeout=5)
        results.append((game.session.elapsed, game.session.history))
    assert results[0] == results[1]


@pytest.mark.asyncio
async def test_actions_between_ticks_reset_window():
    game = _game(window=3.0)
    game.start_game()
    driver = CountdownDriver(game, interval=0.001, clock=_stepping_clock(1.0))

    original_tick = game.tick
    calls = 0

    def tick_and_act(delta):
        nonlocal calls
        calls += 1
        original_tick(delta)
        if calls == 2:
            game.perform_action("pet")

    game.tick = tick_and_act
    driver.start()
    await asyncio.wait_for(driver.join(), timeout=5)

    assert game.session.end_reason == "timeout"
    assert game.session.elapsed == 5.0  # 2s, action, then a full 3s window


@pytest.mark.asyncio
async def test_abandon_stops_driver():
    game = _game(window=60.0)
    game.start_game()
    driver = CountdownDriver(game, interval=0.005)
    driver.start()
    await asyncio.sleep(0.02)
    assert driver.running is True

    game.abandon()
    await asyncio.wait_for(driver.join(), timeout=5)
    assert driver.running is False
    ticks = driver.ticks
    await asyncio.sleep(0.02)
    assert driver.ticks == ticks
    assert game.state == "start"


@pytest.mark.asyncio
async def test_stop_is_idempotent():
    game = _game(window=60.0)
    game.start_game()
    driver = CountdownDriver(game, interval=0.005)
    driver.start()
    driver.stop()
    driver.stop()
    await asyncio.wait_for(driver.join(), timeout=5)
    assert driver.running is False
    assert game.state == "playing"


@pytest.mark.asyncio
async def test_start_twice_raises():
    game = _game()
    game.start_game()
    driver = CountdownDriver(game, interval=0.005)
    driver.start()
    with pytest.raises(RuntimeError):
        driver.start()
    driver.stop()
    await driver.join()


@pytest.mark.asyncio
async def test_driver_exits_when_game_not_playing():
    game = _game()
    driver = CountdownDriver(game, interval=0.001)
    driver.start()
    await asyncio.wait_for(driver.join(), timeout=5)
    assert driver.ticks == 0


def test_default_interval_from_config():
    game = _game()
    driver = CountdownDriver(game)
    assert driver.interval == game.config.tick_interval_seconds
