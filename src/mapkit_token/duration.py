"""Relative time strings such as ``"0"``, ``"2d"`` or ``"1 year"``.

Bare numbers are milliseconds.  Years are 365.25 days long.
"""

from __future__ import annotations

import math
import re
from datetime import datetime

from mapkit_token.errors import ConfigurationError

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7
YEAR = DAY * 365.25

_DURATION_RE = re.compile(
    r"^(?P<value>-?(?:\d+)?\.?\d+) *"
    r"(?P<unit>milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m"
    r"|hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?$",
    re.IGNORECASE,
)

_UNITS: dict[str, float] = {
    **dict.fromkeys(("years", "year", "yrs", "yr", "y"), YEAR),
    **dict.fromkeys(("weeks", "week", "w"), WEEK),
    **dict.fromkeys(("days", "day", "d"), DAY),
    **dict.fromkeys(("hours", "hour", "hrs", "hr", "h"), HOUR),
    **dict.fromkeys(("minutes", "minute", "mins", "min", "m"), MINUTE),
    **dict.fromkeys(("seconds", "second", "secs", "sec", "s"), SECOND),
    **dict.fromkeys(("milliseconds", "millisecond", "msecs", "msec", "ms"), 1),
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def parse_duration(text: str) -> float:
    """Convert a relative time string into milliseconds."""
    if not text or len(text) > 100:
        raise ConfigurationError(f"Invalid relative time: {text!r}")
    match = _DURATION_RE.match(text.strip())
    if match is None:
        raise ConfigurationError(f"Invalid relative time: {text!r}")
    unit = (match.group("unit") or "ms").lower()
    return float(match.group("value")) * _UNITS[unit]


def resolve_timestamp(relative: str, now: datetime) -> int:
    """Seconds since the epoch for ``now`` shifted by ``relative``."""
    milliseconds = now.timestamp() * 1000 + parse_duration(relative)
    return _round_half_up(milliseconds / 1000)


def _plural(ms: float, ms_abs: float, size: float, name: str) -> str:
    is_plural = ms_abs >= size * 1.5
    return f"{_round_half_up(ms / size)} {name}{'s' if is_plural else ''}"


def format_duration(ms: float) -> str:
    """Long human form, e.g. ``"364 days"`` or ``"1 hour"``."""
    ms_abs = abs(ms)
    for size, name in ((DAY, "day"), (HOUR, "hour"), (MINUTE, "minute"), (SECOND, "second")):
        if ms_abs >= size:
            return _plural(ms, ms_abs, size, name)
    return f"{ms:g} ms"
