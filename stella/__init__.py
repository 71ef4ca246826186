"""Stella — a once-a-day virtual pet game with deterministic, seeded outcomes.

Layout:
  seed.py         daily seed + per-action draws
  outcomes.py     outcome bands, tiers, mood labels
  models.py       pydantic records (ActionEvent, GameSession, PersistedStats)
  engine.py       pure session transitions
  game.py         Game: owns a session, records game over
  timer.py        CountdownDriver: asyncio tick loop
  persistence.py  key-value stores + PersistenceManager (streak, best time)
  share.py        emoji share text
  config.py       GameConfig tunables
"""
