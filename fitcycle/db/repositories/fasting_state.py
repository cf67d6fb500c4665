"""Fasting state repository."""

import datetime
from typing import Optional

from sqlmodel import Session, select

from fitcycle.models.fasting_state import FastingStateRecord
from fitcycle.schemas.fasting import FastingState


class FastingStateRepository:
    """Loads and saves a user's fasting state blob wholesale."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user(self, user_id: str) -> Optional[FastingStateRecord]:
        statement = select(FastingStateRecord).where(FastingStateRecord.user_id == user_id)
        return self.session.exec(statement).first()

    def load(self, user_id: str) -> Optional[FastingState]:
        """The stored state, or ``None`` if the user has none yet."""
        record = self.get_by_user(user_id)
        if record is None:
            return None
        return FastingState.model_validate(record.state)

    def save(self, user_id: str, state: FastingState) -> FastingStateRecord:
        """Replace the stored state (last writer wins)."""
        record = self.get_by_user(user_id)
        if record is None:
            record = FastingStateRecord(user_id=user_id)
        record.state = state.model_dump(mode="json")
        record.schema_version = state.schema_version
        record.updated_at = datetime.datetime.now(datetime.timezone.utc)
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record
