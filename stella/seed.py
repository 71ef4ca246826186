"""Daily seed and per-action draws.

Every player gets the same seed for the same calendar day, and the same draw
for the same (day, action, occurrence) triple. The draw is a sine-based hash:
chaotic enough for gameplay, NOT cryptographically secure, and not a
general-purpose PRNG. Changing the formula changes every historical outcome.

    seed  = sum of char codes of "Wed Nov 19 2025"
    n     = seed + sum of char codes of action name + occurrence index
    draw  = frac(sin(n) * 10000)
"""

from __future__ import annotations

import math
from datetime import date

# Fixed English names; strftime("%a %b") would follow the process locale.
_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_SINE_SCALE = 10000


def day_string(day: date) -> str:
    """Canonical day-level string, e.g. date(2025, 11, 19) → "Wed Nov 19 2025"."""
    return (
        f"{_DAY_NAMES[day.weekday()]} {_MONTH_NAMES[day.month - 1]} "
        f"{day.day:02d} {day.year:04d}"
    )


def char_code_sum(text: str) -> int:
    """Sum of UTF-16 code units, matching what a browser's charCodeAt sees."""
    data = text.encode("utf-16-le")
    return sum(int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2))


def seed_from_day_string(text: str) -> int:
    return char_code_sum(text)


def daily_seed(day: date) -> int:
    return seed_from_day_string(day_string(day))


def action_seed(action_name: str, occurrence_index: int, seed: int) -> float:
    """Deterministic draw in [0, 1) for one action occurrence."""
    n = seed + char_code_sum(action_name) + occurrence_index
    x = math.sin(n) * _SINE_SCALE
    frac = x - math.floor(x)
    # x a hair below an integer can round the fraction up to exactly 1.0
    return frac if frac < 1.0 else 0.0
