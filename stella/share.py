"""Share text for a finished session.

Pure: the same session and stats always render the same string. Each history
event becomes one glyph, followed by a single game-ended glyph:

    Stella Wed Nov 19 2025
    ⏱️ 0:42 | 🐾 7 actions | 🔥 3 day streak
    🟥🟩🟨🟨🟧🟩🟩⌛💔
    Can you keep Stella happy?

The layout is a Handlebars template. The glyph grid is wrapped by the
``rows`` block helper, ``share_row_width`` glyphs per line.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pybars

from stella.config import GameConfig
from stella.models import ActionEvent, GameSession, PersistedStats

TIER_GLYPHS: dict[str, str] = {
    "excellent": "🟩",
    "great": "🟩",
    "good": "🟨",
    "neutral": "🟨",
    "okay": "🟧",
    "bad": "🟥",
    "terrible": "🟥",
}
TIMEOUT_GLYPH = "⌛"
GAME_OVER_GLYPH = "💔"

SHARE_TEMPLATE = (
    "{{{title}}} {{{date}}}\n"
    "⏱️ {{{elapsed}}} | 🐾 {{actions}} {{{action_word}}} | 🔥 {{streak}} day streak\n"
    "{{#rows glyphs width}}{{{this}}}\n{{/rows}}"
    "{{{footer}}}"
)


# ── Rendering ────────────────────────────────────────────────

_compiler = pybars.Compiler()
_compiled: dict[str, Callable] = {}


class ShareRenderError(Exception):
    """A share template failed to compile or render."""


def _helper_rows(this, options, glyphs, width):
    """{{#rows glyphs N}}...{{/rows}}: one block per line of N glyphs."""
    glyphs = list(glyphs)
    size = max(1, int(width))
    lines = []
    for start in range(0, len(glyphs), size):
        lines.extend(options["fn"]("".join(glyphs[start:start + size])))
    return lines


def render_share(context: dict[str, Any], template: str = SHARE_TEMPLATE) -> str:
    try:
        compiled = _compiled.get(template)
        if compiled is None:
            compiled = _compiled[template] = _compiler.compile(template)
        return str(compiled(context, helpers={"rows": _helper_rows}))
    except Exception as e:
        raise ShareRenderError(f"Share template error: {e}") from e


def format_duration(seconds: float) -> str:
    """42.7 → "0:42", 125 → "2:05". Partial seconds are dropped."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def glyph_for(event: ActionEvent) -> str:
    if event.timed_out:
        return TIMEOUT_GLYPH
    return TIER_GLYPHS[event.outcome_tier]


def format_share(
    session: GameSession,
    stats: PersistedStats,
    config: GameConfig | None = None,
) -> str:
    config = config or GameConfig()
    glyphs = [glyph_for(e) for e in session.history] + [GAME_OVER_GLYPH]
    actions = session.action_count
    return render_share({
        "title": config.title,
        "date": session.day or stats.last_play_date or "",
        "elapsed": format_duration(session.elapsed),
        "actions": str(actions),
        "action_word": "action" if actions == 1 else "actions",
        "streak": str(stats.streak),
        "glyphs": glyphs,
        "width": config.share_row_width,
        "footer": config.footer,
    })
