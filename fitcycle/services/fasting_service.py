"""
Fasting service.

Binds the pure :class:`FastingCycleStateMachine` to storage and HTTP.

Every call follows the same sequence under the user's lock::

    load state -> initialize_today_cycle(now) -> operation -> save state

so a restart (or a day boundary passing between requests) is reconciled
before anything else runs.  The lock is per user id and process-wide;
a failed operation raises before the save, leaving the stored blob as it
was.
"""

import datetime
import logging
import threading
import weakref
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from fitcycle.core.config import settings
from fitcycle.core.exceptions import InvalidTimeFormat, InvalidWindow
from fitcycle.db.repositories.fasting_state import FastingStateRepository
from fitcycle.engine.fasting_cycle import FastingCycleStateMachine
from fitcycle.engine.fasting_window import custom_window
from fitcycle.engine.timewindow import to_minutes
from fitcycle.schemas.fasting import (CustomWindowUpdate, CycleAction, CycleTransitionResponse, FastingCycle,
                                      FastingProtocol, FastingState, FastingStats, FastingWindow, PhaseStatus,
                                      PlanUpdate, ProtocolInfo, SyncResponse, )

logger = logging.getLogger(__name__)

# Entries disappear once no request holds the lock.
_user_locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
_registry_lock = threading.Lock()


def _lock_for(user_id: str) -> threading.Lock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = threading.Lock()
        return lock


def default_state() -> FastingState:
    """Initial state for a user seen for the first time."""
    return FastingState(selected_protocol=FastingProtocol(settings.DEFAULT_PROTOCOL),
                        eating_start=to_minutes(settings.DEFAULT_EATING_START), )


class FastingService:
    """Service for fasting plans and the daily cycle."""

    def __init__(self, session: Session, clock: Optional[Callable[[], datetime.datetime]] = None):
        self.repo = FastingStateRepository(session)
        self.clock = clock or datetime.datetime.now

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    @staticmethod
    def list_protocols() -> list[ProtocolInfo]:
        return [ProtocolInfo.from_protocol(protocol) for protocol in FastingProtocol]

    # ------------------------------------------------------------------
    # Window & status
    # ------------------------------------------------------------------

    def get_window(self, user_id: str) -> FastingWindow:
        with self._machine(user_id) as (machine, _):
            return machine.get_fasting_window()

    def get_status(self, user_id: str, as_of: Optional[datetime.datetime] = None) -> PhaseStatus:
        with self._machine(user_id) as (machine, now):
            return machine.get_current_status(as_of or now)

    def set_plan(self, user_id: str, data: PlanUpdate) -> FastingWindow:
        with self._machine(user_id) as (machine, now):
            try:
                applied = machine.set_fasting_plan(data.protocol, now, eating_start=data.eating_start)
            except InvalidTimeFormat as e:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e), )
            if not applied:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                    detail="Cannot change the fasting plan while a fast is in progress", )
            return machine.get_fasting_window()

    def set_custom_window(self, user_id: str, data: CustomWindowUpdate) -> FastingWindow:
        try:
            window = custom_window(data.eating_start, data.eating_end, data.fasting_start, data.fasting_end)
        except (InvalidTimeFormat, InvalidWindow) as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e), )

        with self._machine(user_id) as (machine, _):
            if not machine.set_custom_window(window):
                raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                    detail="Cannot change the fasting window while a fast is in progress", )
            return window

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def get_cycle(self, user_id: str) -> Optional[FastingCycle]:
        with self._machine(user_id) as (machine, _):
            return machine.current_cycle

    def apply_action(self, user_id: str, action: CycleAction) -> CycleTransitionResponse:
        with self._machine(user_id) as (machine, now):
            if action is CycleAction.START_FASTING:
                applied = machine.start_fasting(now)
            elif action is CycleAction.START_EATING:
                applied = machine.start_eating(now)
            elif action is CycleAction.BREAK:
                applied = machine.break_fast(now)
            elif action is CycleAction.COMPLETE:
                applied = machine.complete_cycle(now)
            elif action is CycleAction.MISSED:
                applied = machine.handle_missed_window(now)
            else:
                machine.force_reset_cycle(now)
                applied = True
            return CycleTransitionResponse(applied=applied, cycle=machine.current_cycle)

    def sync(self, user_id: str) -> SyncResponse:
        with self._machine(user_id, reconcile=False) as (machine, now):
            transitions = machine.sync(now)
            return SyncResponse(transitions=transitions, cycle=machine.current_cycle,
                                status=machine.get_current_status(now),
                                poll_interval_seconds=settings.STATUS_POLL_INTERVAL_SECONDS, )

    def reset(self, user_id: str) -> FastingState:
        with self._machine(user_id) as (machine, now):
            machine.reset_all_data(now)
            machine.initialize_today_cycle(now)
            return machine.state

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history(self, user_id: str, start: Optional[datetime.date] = None,
                end: Optional[datetime.date] = None, ) -> list[FastingCycle]:
        with self._machine(user_id) as (machine, now):
            end = end or now.date()
            start = start or end - datetime.timedelta(days=30)
            if start > end:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start must not be after end", )
            return machine.history_between(start, end)

    def get_cycle_for_date(self, user_id: str, date: datetime.date) -> FastingCycle:
        with self._machine(user_id) as (machine, _):
            cycle = machine.get_cycle_for_date(date)
        if cycle is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No cycle recorded for {date}", )
        return cycle

    def stats(self, user_id: str) -> FastingStats:
        with self._machine(user_id) as (machine, now):
            cycles = machine.state.cycle_history.values()
            return FastingStats(current_streak=machine.get_current_streak(now.date()),
                                weekly_compliance=machine.get_weekly_compliance(now.date()),
                                total_cycles=len(cycles), completed_cycles=sum(1 for c in cycles if c.completed),
                                can_change_plan=machine.can_change_plan(), )

    def weekly_compliance(self, user_id: str) -> Optional[int]:
        """Trailing-week compliance, or ``None`` for a user with no stored state."""
        state = self.repo.load(user_id)
        if state is None:
            return None
        return FastingCycleStateMachine(state).get_weekly_compliance(self.clock().date())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _machine(self, user_id: str,
                 reconcile: bool = True, ) -> Iterator[tuple[FastingCycleStateMachine, datetime.datetime]]:
        """Locked state machine for *user_id*; saved on clean exit.

        With *reconcile* the daily reset runs before the caller sees the
        machine.  ``sync`` runs it itself so that it can report it.
        """
        with _lock_for(user_id):
            now = self.clock()
            state = self.repo.load(user_id)
            if state is None:
                logger.info("No fasting state for user %s; starting from defaults", user_id)
                state = default_state()
            machine = FastingCycleStateMachine(state, streak_lookback_days=settings.STREAK_LOOKBACK_DAYS)
            if reconcile:
                machine.initialize_today_cycle(now)
            yield machine, now
            self.repo.save(user_id, machine.state)
