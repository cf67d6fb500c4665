"""Database repositories."""

from fitcycle.db.repositories.fasting_state import FastingStateRepository

__all__ = [
    "FastingStateRepository",
]
