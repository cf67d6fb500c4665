"""
Fasting schemas: protocols, windows, phase status, and daily cycles.

A :class:`FastingWindow` stores its four boundaries as minutes of day and
serialises them as ``"HH:MM"`` strings.  A :class:`FastingCycle` is an
explicit lifecycle state plus only the timestamps valid for that state;
the model validator rejects any other combination, so a ``completed``
cycle without ``fasting_started_at`` cannot be constructed.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import (BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator, )

from fitcycle.engine.timewindow import MINUTES_PER_DAY, format_minutes, minutes_between, to_minutes


# ======================================================================
# Protocols
# ======================================================================


class FastingProtocol(str, Enum):
    """Fixed fasting:eating hour splits."""

    TWELVE_TWELVE = "12:12"
    FOURTEEN_TEN = "14:10"
    SIXTEEN_EIGHT = "16:8"
    EIGHTEEN_SIX = "18:6"
    TWENTY_FOUR = "20:4"
    TWENTY_FOUR_ZERO = "24:0"

    @property
    def fasting_hours(self) -> int:
        return _PROTOCOL_INFO[self][0]

    @property
    def eating_hours(self) -> int:
        return _PROTOCOL_INFO[self][1]

    @property
    def label(self) -> str:
        return _PROTOCOL_INFO[self][2]

    @property
    def description(self) -> str:
        return _PROTOCOL_INFO[self][3]


_PROTOCOL_INFO: dict[FastingProtocol, tuple[int, int, str, str]] = {
    FastingProtocol.TWELVE_TWELVE: (12, 12, "12:12 Balanced",
                                    "Fast for 12 hours, eat within 12 hours. Great for beginners."),
    FastingProtocol.FOURTEEN_TEN: (14, 10, "14:10 Moderate", "Fast for 14 hours with a 10-hour eating window."),
    FastingProtocol.SIXTEEN_EIGHT: (16, 8, "16:8 Standard",
                                    "The most popular protocol. Fast 16 hours, eat within 8."),
    FastingProtocol.EIGHTEEN_SIX: (18, 6, "18:6 Aggressive", "Fast for 18 hours with a 6-hour eating window."),
    FastingProtocol.TWENTY_FOUR: (20, 4, "20:4 Warrior",
                                  "Fast for 20 hours with a 4-hour eating window. Very challenging."),
    FastingProtocol.TWENTY_FOUR_ZERO: (24, 0, "24:0 OMAD+", "Complete 24-hour fast. Only for advanced users."),
}


class ProtocolInfo(BaseModel):
    """Reference data for one protocol, as exposed by the API."""

    protocol: FastingProtocol
    fasting_hours: int
    eating_hours: int
    label: str
    description: str

    @classmethod
    def from_protocol(cls, protocol: FastingProtocol) -> ProtocolInfo:
        return cls(protocol=protocol, fasting_hours=protocol.fasting_hours, eating_hours=protocol.eating_hours,
                   label=protocol.label, description=protocol.description, )


# ======================================================================
# Window
# ======================================================================


class FastingWindow(BaseModel):
    """The four clock boundaries of a fasting day.

    ``eating_minutes`` is stored explicitly: with the 24:0 protocol the
    eating start and end coincide, and only the length tells a zero-hour
    eating window apart from a full day.
    """

    model_config = ConfigDict(frozen=True)

    eating_start: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    eating_end: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    fasting_start: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    fasting_end: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    eating_minutes: int = Field(..., ge=0, le=MINUTES_PER_DAY)

    @field_validator("eating_start", "eating_end", "fasting_start", "fasting_end", mode="before")
    @classmethod
    def _parse_clock(cls, value):
        return to_minutes(value)

    @field_serializer("eating_start", "eating_end", "fasting_start", "fasting_end")
    def _format_clock(self, value: int) -> str:
        return format_minutes(value)

    @model_validator(mode="after")
    def _check_boundaries(self) -> FastingWindow:
        if minutes_between(self.eating_start, self.eating_end) != self.eating_minutes % MINUTES_PER_DAY:
            raise ValueError("eating_end must lie exactly eating_minutes after eating_start")
        if self.fasting_start != self.eating_end:
            raise ValueError("fasting_start must equal eating_end")
        if self.fasting_end != self.eating_start:
            raise ValueError("fasting_end must equal eating_start")
        return self

    @property
    def fasting_minutes(self) -> int:
        return MINUTES_PER_DAY - self.eating_minutes


class CustomWindowUpdate(BaseModel):
    """Authorised override of the protocol-derived window."""

    eating_start: str = Field(..., description="HH:MM")
    eating_end: str = Field(..., description="HH:MM")
    fasting_start: str = Field(..., description="HH:MM")
    fasting_end: str = Field(..., description="HH:MM")


class PlanUpdate(BaseModel):
    """Protocol selection request."""

    protocol: FastingProtocol
    eating_start: Optional[str] = Field(None, description="HH:MM; keeps the current start if omitted")


# ======================================================================
# Phase status
# ======================================================================


class Phase(str, Enum):
    FASTING = "fasting"
    EATING = "eating"


class TimeRemaining(BaseModel):
    hours: int = Field(..., ge=0)
    minutes: int = Field(..., ge=0, le=59)
    seconds: int = Field(..., ge=0, le=59)
    total_seconds: int = Field(..., ge=0)

    @classmethod
    def from_seconds(cls, total_seconds: int) -> TimeRemaining:
        total_seconds = max(0, total_seconds)
        return cls(hours=total_seconds // 3600, minutes=(total_seconds % 3600) // 60, seconds=total_seconds % 60,
                   total_seconds=total_seconds, )


class PhaseStatus(BaseModel):
    """Live position of "now" inside a fasting window."""

    phase: Phase
    is_fasting: bool
    is_eating: bool
    percent_complete: float = Field(..., ge=0.0, le=1.0, description="Share of the current phase elapsed")
    time_remaining: TimeRemaining
    next_phase_time: str = Field(..., description="HH:MM at which the opposite phase begins")
    next_phase_date: datetime.date = Field(..., description="Calendar date of the next phase boundary")


# ======================================================================
# Cycle lifecycle
# ======================================================================


class CycleState(str, Enum):
    PENDING = "pending"
    FASTING = "fasting"
    EATING = "eating"
    COMPLETED = "completed"
    BROKEN = "broken"
    MISSED_WINDOW = "missed_window"


TERMINAL_STATES = frozenset({CycleState.COMPLETED, CycleState.BROKEN, CycleState.MISSED_WINDOW})

_TIMESTAMPS = ("fasting_started_at", "fasting_ended_at", "eating_started_at", "eating_ended_at")

# state -> (required timestamps, forbidden timestamps)
_STATE_FIELDS: dict[CycleState, tuple[tuple[str, ...], tuple[str, ...]]] = {
    CycleState.PENDING: ((), _TIMESTAMPS),
    CycleState.FASTING: (("fasting_started_at",), ("fasting_ended_at",)),
    CycleState.EATING: (("fasting_started_at", "fasting_ended_at", "eating_started_at"), ("eating_ended_at",)),
    CycleState.COMPLETED: (_TIMESTAMPS, ()),
    CycleState.BROKEN: (("fasting_ended_at",), ()),
    CycleState.MISSED_WINDOW: ((), ()),
}


class FastingCycle(BaseModel):
    """One calendar day's fasting lifecycle record.

    Frozen: transitions produce a new record, the previous one is never
    touched.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    state: CycleState = CycleState.PENDING
    cycle_started_at: datetime.datetime
    fasting_started_at: Optional[datetime.datetime] = None
    fasting_ended_at: Optional[datetime.datetime] = None
    eating_started_at: Optional[datetime.datetime] = None
    eating_ended_at: Optional[datetime.datetime] = None

    @model_validator(mode="after")
    def _check_state_fields(self) -> FastingCycle:
        required, forbidden = _STATE_FIELDS[self.state]
        missing = [f for f in required if getattr(self, f) is None]
        if missing:
            raise ValueError(f"{self.state.value} cycle requires {missing}")
        present = [f for f in forbidden if getattr(self, f) is not None]
        if present:
            raise ValueError(f"{self.state.value} cycle cannot carry {present}")
        if self.state is CycleState.FASTING and ((self.eating_started_at is None) != (self.eating_ended_at is None)):
            raise ValueError("fasting cycle carries an unfinished eating period")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def completed(self) -> bool:
        return self.state is CycleState.COMPLETED

    @property
    def broken(self) -> bool:
        return self.state is CycleState.BROKEN

    @property
    def missed_window(self) -> bool:
        return self.state is CycleState.MISSED_WINDOW


# ======================================================================
# Persisted per-user blob
# ======================================================================

FASTING_STATE_VERSION = 1


class FastingState(BaseModel):
    """Everything the cycle state machine persists for one user.

    Loaded wholesale at startup and written wholesale after every mutating
    transition (last writer wins).
    """

    schema_version: int = FASTING_STATE_VERSION
    selected_protocol: FastingProtocol = FastingProtocol.SIXTEEN_EIGHT
    eating_start: int = Field(12 * 60, ge=0, lt=MINUTES_PER_DAY)
    custom_window: Optional[FastingWindow] = None
    current_cycle: Optional[FastingCycle] = None
    cycle_history: dict[datetime.date, FastingCycle] = Field(default_factory=dict)
    last_reset_date: Optional[datetime.date] = None

    @field_validator("eating_start", mode="before")
    @classmethod
    def _parse_clock(cls, value):
        return to_minutes(value)

    @field_serializer("eating_start")
    def _format_clock(self, value: int) -> str:
        return format_minutes(value)


# ======================================================================
# API responses
# ======================================================================


class CycleAction(str, Enum):
    """User-facing cycle actions, as named in the URL."""

    START_FASTING = "start-fasting"
    START_EATING = "start-eating"
    BREAK = "break"
    COMPLETE = "complete"
    MISSED = "missed"
    FORCE_RESET = "force-reset"


class CycleTransitionResponse(BaseModel):
    """Outcome of a cycle action.  ``applied`` is False for a no-op."""

    applied: bool
    cycle: Optional[FastingCycle]


class SyncResponse(BaseModel):
    transitions: list[str] = Field(default_factory=list, description="Automatic transitions applied, in order")
    cycle: Optional[FastingCycle]
    status: PhaseStatus
    poll_interval_seconds: int


class FastingStats(BaseModel):
    current_streak: int = Field(..., ge=0)
    weekly_compliance: int = Field(..., ge=0, le=100, description="Percent of trailing-week entries completed")
    total_cycles: int = Field(..., ge=0)
    completed_cycles: int = Field(..., ge=0)
    can_change_plan: bool
