"""SQLModel database models."""

from fitcycle.models.fasting_state import FastingStateRecord

__all__ = [
    "FastingStateRecord",
]
