"""
Time-of-day arithmetic on a 24-hour clock.

Every clock value in the engine is a **minute of day** in ``[0, 1439]``.
All "is X inside the window" and "how long until Y" questions are answered
through :func:`minutes_between`, which walks *forward* (clockwise) around the
clock.  That makes midnight wraparound a non-event::

    minutes_between(to_minutes("23:50"), to_minutes("00:10")) == 20

No other module should subtract two minute-of-day values directly.
"""

from __future__ import annotations

import datetime
import re

from fitcycle.core.exceptions import InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

_HHMM = re.compile(r"^(\d{2}):(\d{2})$")


def to_minutes(value: str | int | datetime.time) -> int:
    """Convert a clock value to its minute of day.

    Accepts an ``"HH:MM"`` string, a :class:`datetime.time`, or an int that
    is already a minute of day.

    Raises:
        InvalidTimeFormat: if a string is not ``HH:MM`` with
            ``00 <= HH <= 23`` and ``00 <= MM <= 59``, or an int is out of
            range.
    """
    if isinstance(value, bool):
        raise InvalidTimeFormat(value)
    if isinstance(value, int):
        if 0 <= value < MINUTES_PER_DAY:
            return value
        raise InvalidTimeFormat(value)
    if isinstance(value, datetime.time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)

    match = _HHMM.match(value.strip())
    if match is None:
        raise InvalidTimeFormat(value)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(value)
    return hours * 60 + minutes


def format_minutes(minute_of_day: int) -> str:
    """Render a minute of day as ``"HH:MM"``."""
    minute_of_day %= MINUTES_PER_DAY
    return f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}"


def minute_of_day(moment: datetime.datetime) -> int:
    """Minute of day of a wall-clock instant (seconds are ignored)."""
    return moment.hour * 60 + moment.minute


def add_minutes(minute_of_day: int, delta: int) -> int:
    """Add *delta* minutes (may be negative) and wrap around midnight."""
    return (minute_of_day + delta) % MINUTES_PER_DAY


def minutes_between(start: int, end: int) -> int:
    """Forward distance from *start* to *end* around the clock.

    Always in ``[0, 1439]``; ``minutes_between(a, a) == 0``.
    """
    return (end - start) % MINUTES_PER_DAY


def is_within(minute: int, start: int, length: int) -> bool:
    """Whether *minute* falls in the half-open interval ``[start, start + length)``."""
    return minutes_between(start, minute) < length
