"""
Fasting state model.

One row per user holding the whole fasting state machine snapshot as a
JSON document.  The row is read and written wholesale; ``schema_version``
mirrors the version inside the document so old rows can be found by query.
"""

import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class FastingStateRecord(SQLModel, table=True):
    """Persisted :class:`~fitcycle.schemas.fasting.FastingState` of one user."""

    __tablename__ = "fasting_states"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, unique=True, index=True, max_length=64)

    schema_version: int = Field(default=1)
    state: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=_utcnow)
    updated_at: datetime.datetime = Field(default_factory=_utcnow)
