# planner/duration.py

"""
Free-text study durations.

Durations are typed by hand ("60 min", "1h 30m", "1:30") and must never block
saving a session, so parsing is lenient: anything unreadable is 0 minutes.
"""

from __future__ import annotations

import math
import re

_COLON_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(h|hr|hrs|hour|hours)\b")
_MINUTES_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(m|min|mins|minute|minutes)\b")
_INT_RE = re.compile(r"^\d+$")
_FIRST_INT_RE = re.compile(r"(\d+)")


def _round_half_up(value: float) -> int:
    # half-up: 2.5 -> 3 (round() would give 2)
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def parse_duration_to_minutes(text: object) -> int:
    """
    Parse a duration string into whole minutes (>= 0).

    Rules, first match wins:
    1. "H:MM"                      -> H*60 + MM
    2. hour and/or minute tokens    -> "1h 30m", "1.5 hours", "45 mins"
    3. a bare integer               -> minutes
    4. the first integer anywhere   -> minutes
    5. otherwise                    -> 0
    """
    if not isinstance(text, str) or not text:
        return 0
    s = text.lower().strip()
    if not s:
        return 0

    colon = _COLON_RE.match(s)
    if colon:
        return int(colon.group(1)) * 60 + int(colon.group(2))

    h_match = _HOURS_RE.search(s)
    m_match = _MINUTES_RE.search(s)
    if h_match or m_match:
        hours = float(h_match.group(1)) if h_match else 0.0
        minutes = float(m_match.group(1)) if m_match else 0.0
        return _round_half_up(hours * 60 + minutes)

    if _INT_RE.match(s):
        return int(s)

    first = _FIRST_INT_RE.search(s)
    return int(first.group(1)) if first else 0


def format_minutes(total: float) -> str:
    """Render minutes as "45m", "2h" or "1h 30m"."""
    value = float(total)
    if not math.isfinite(value):
        value = 0.0
    mins = max(0, _round_half_up(value))
    h, m = divmod(mins, 60)
    if h <= 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"
