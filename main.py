"""Stella — terminal launcher. Plays today's game in the console."""

import argparse
import asyncio
import logging
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from stella.config import ConfigError, load_config
from stella.game import Game
from stella.outcomes import band_for_tier, describe_mood
from stella.persistence import JsonFileStore, PersistenceManager
from stella.share import format_duration
from stella.timer import CountdownDriver

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

DATA_DIR = Path(os.getenv("STELLA_DATA_DIR", str(ROOT / "data")))
CONFIG_FILE = os.getenv("STELLA_CONFIG", "")


def _hud(game: Game) -> str:
    s = game.session
    return (
        f"patience {s.patience:3d} | mood {s.mood:3d} ({describe_mood(s.mood)}) "
        f"| {s.time_left:4.1f}s left"
    )


async def play(game: Game) -> int:
    streak = game.current_streak()
    if not game.start_game():
        stats = game.persistence.load_stats()
        print("Stella has had enough of you for today. Come back tomorrow.")
        print(f"Last game: {format_duration(stats.last_game_time)} "
              f"over {stats.last_game_action_count} actions, streak {streak}.")
        return 1

    actions = game.config.actions
    if streak:
        print(f"🔥 {streak} day streak. Don't break it.")
    print(f"Keep Stella happy. Actions: {', '.join(actions)}  (q to walk away)")
    print(_hud(game))

    driver = CountdownDriver(game)
    ticker = driver.start()
    while game.state == "playing":
        reader = asyncio.ensure_future(asyncio.to_thread(input, "> "))
        done, _ = await asyncio.wait({reader, ticker}, return_when=asyncio.FIRST_COMPLETED)
        if reader not in done:
            print("\nToo slow! Stella wandered off.  (press Enter)")
            break
        command = reader.result().strip().lower()
        if command in ("q", "quit"):
            game.abandon()
            print("You walked away. Today's game was not recorded.")
            return 0
        event = game.perform_action(command)
        if event is None:
            print(f"Stella doesn't know what {command!r} means.")
            continue
        reaction = band_for_tier(event.outcome_tier, game.config.bands).reaction
        print(f"[{event.outcome_tier}] {reaction}")
        print(_hud(game))

    await driver.join()
    if game.session.end_reason == "patience":
        print("Stella has run out of patience.")
    share = game.share_text()
    if share:
        print()
        print(share)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Stella daily pet game")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Stats storage directory (default: ./data)")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON file with game tunables")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="Play as if today were YYYY-MM-DD")
    parser.add_argument("--verbose", action="store_true",
                        help="Log draws and ticks")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = args.config or (Path(CONFIG_FILE) if CONFIG_FILE else None)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print(e, file=sys.stderr)
        sys.exit(2)

    data_dir = args.data_dir or DATA_DIR
    store = JsonFileStore(data_dir / "stats.json")
    today = (lambda: args.date) if args.date else date.today
    game = Game(PersistenceManager(store), config=config, today=today)

    sys.exit(asyncio.run(play(game)))


if __name__ == "__main__":
    main()
