"""
Fasting window derivation.

Given a protocol and an eating-window start, the four boundaries follow::

    eating_end    = eating_start + eating_hours (mod 24h)
    fasting_start = eating_end
    fasting_end   = eating_start

An authorised override may supply the four boundaries directly via
:func:`custom_window`; it must still describe exactly one 24h day.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from fitcycle.core.exceptions import InvalidWindow
from fitcycle.engine.timewindow import MINUTES_PER_DAY, add_minutes, minutes_between, to_minutes
from fitcycle.schemas.fasting import FastingProtocol, FastingWindow

DEFAULT_EATING_START = 12 * 60  # noon


def compute_window(protocol: FastingProtocol, eating_start: Optional[str | int] = None, ) -> FastingWindow:
    """Derive the fasting window for *protocol*.

    Args:
        protocol: Selected fasting protocol.
        eating_start: ``"HH:MM"`` or minute of day; defaults to noon.

    Raises:
        InvalidTimeFormat: if *eating_start* cannot be parsed.
    """
    start = DEFAULT_EATING_START if eating_start is None else to_minutes(eating_start)
    eating_minutes = protocol.eating_hours * 60
    eating_end = add_minutes(start, eating_minutes)
    return FastingWindow(eating_start=start, eating_end=eating_end, fasting_start=eating_end, fasting_end=start,
                         eating_minutes=eating_minutes, )


def custom_window(eating_start: str | int, eating_end: str | int, fasting_start: str | int,
                  fasting_end: str | int, ) -> FastingWindow:
    """Build a window from four explicit boundaries.

    Raises:
        InvalidTimeFormat: if any boundary cannot be parsed.
        InvalidWindow: if the eating and fasting periods do not chain into
            exactly 24 hours, or either period is empty.
    """
    es, ee = to_minutes(eating_start), to_minutes(eating_end)
    fs, fe = to_minutes(fasting_start), to_minutes(fasting_end)

    eating = minutes_between(es, ee)
    fasting = minutes_between(fs, fe)
    if eating == 0 or fasting == 0:
        raise InvalidWindow("Custom windows need a non-empty eating and fasting period")
    if eating + fasting != MINUTES_PER_DAY:
        raise InvalidWindow(f"Eating ({eating} min) and fasting ({fasting} min) periods must sum to 24h")

    try:
        return FastingWindow(eating_start=es, eating_end=ee, fasting_start=fs, fasting_end=fe,
                             eating_minutes=eating, )
    except ValidationError as e:
        raise InvalidWindow(str(e)) from e
