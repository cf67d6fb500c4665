"""
Domain errors raised by the cycle engine.

A rejected mid-fast plan change is not an error here; it is reported as a
``False`` return value.
"""


class FitCycleError(Exception):
    """Base class for all engine errors."""


class InvalidTimeFormat(FitCycleError, ValueError):
    """A time-of-day string is not a valid ``HH:MM`` value."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid time of day: {value!r} (expected HH:MM, 00:00-23:59)")


class InvalidWindow(FitCycleError, ValueError):
    """A custom fasting window does not describe a consistent 24h day."""


class EmptyCatalogSelection(FitCycleError, LookupError):
    """No exercise could be selected because the catalog is empty."""
