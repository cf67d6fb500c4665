"""
Live phase evaluation against a fasting window.

Read-only and side-effect free: callers poll :func:`evaluate_phase`
(typically every few seconds up to once a minute) and decide separately
whether a phase change warrants a cycle transition.

One formula for both phases::

    phase_start = eating_start  if eating else  fasting_start
    elapsed     = minutes_between(phase_start, now)
    total       = phase length in minutes
    remaining   = total - elapsed

The next boundary *instant* is ``now`` (floored to the minute) plus
``remaining`` minutes, so the next-phase date rolls over exactly when that
instant lies past midnight.
"""

from __future__ import annotations

import datetime

from fitcycle.engine.timewindow import format_minutes, is_within, minute_of_day, minutes_between
from fitcycle.schemas.fasting import FastingWindow, Phase, PhaseStatus, TimeRemaining


def current_phase(window: FastingWindow, now: datetime.datetime) -> Phase:
    """Fasting or eating at *now*."""
    if is_within(minute_of_day(now), window.eating_start, window.eating_minutes):
        return Phase.EATING
    return Phase.FASTING


def next_boundary(window: FastingWindow, now: datetime.datetime) -> datetime.datetime:
    """Instant at which the phase containing *now* ends."""
    phase = current_phase(window, now)
    start, total = _phase_bounds(window, phase)
    elapsed = minutes_between(start, minute_of_day(now))
    floored = now.replace(second=0, microsecond=0)
    return floored + datetime.timedelta(minutes=total - elapsed)


def evaluate_phase(window: FastingWindow, now: datetime.datetime) -> PhaseStatus:
    """Compute the :class:`PhaseStatus` of *window* at *now*.

    ``percent_complete`` is rounded to two decimals; ``time_remaining``
    counts down to the second.
    """
    phase = current_phase(window, now)
    start, total = _phase_bounds(window, phase)

    elapsed = minutes_between(start, minute_of_day(now))
    remaining_minutes = total - elapsed
    remaining_seconds = remaining_minutes * 60 - now.second

    percent = min(max(elapsed / total, 0.0), 1.0) if total else 1.0

    boundary = now.replace(second=0, microsecond=0) + datetime.timedelta(minutes=remaining_minutes)
    if phase is Phase.EATING:
        next_time = window.fasting_start
    else:
        next_time = window.eating_start

    return PhaseStatus(phase=phase, is_fasting=phase is Phase.FASTING, is_eating=phase is Phase.EATING,
                       percent_complete=round(percent, 2), time_remaining=TimeRemaining.from_seconds(remaining_seconds),
                       next_phase_time=format_minutes(next_time), next_phase_date=boundary.date(), )


def _phase_bounds(window: FastingWindow, phase: Phase) -> tuple[int, int]:
    """(start minute, length in minutes) of *phase*."""
    if phase is Phase.EATING:
        return window.eating_start, window.eating_minutes
    return window.fasting_start, window.fasting_minutes
