"""
Daily fasting cycle state machine.

Lifecycle of one calendar day's :class:`~fitcycle.schemas.fasting.FastingCycle`::

    pending ──start_fasting──▶ fasting ──start_eating──▶ eating ──complete_cycle──▶ completed
                                  ▲                        │
                                  └──────start_fasting─────┘

    any non-terminal ──break_fast──▶ broken
    any non-terminal ──handle_missed_window / daily reset──▶ missed_window

Terminal cycles (completed, broken, missed_window) are final; every action
on them is a logged no-op so that callers may retry idempotently.  Records
are frozen; a transition validates the new record before anything is
assigned, so a failed transition leaves state and history untouched.

The machine is single-writer.  Callers exposing it to concurrent requests
must serialise per user (see :class:`~fitcycle.services.fasting_service.FastingService`).
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from fitcycle.engine.fasting_phase import current_phase, evaluate_phase, next_boundary
from fitcycle.engine.fasting_window import compute_window
from fitcycle.engine.timewindow import to_minutes
from fitcycle.schemas.fasting import (CycleState, FastingCycle, FastingProtocol, FastingState, FastingWindow, Phase,
                                      PhaseStatus, )

logger = logging.getLogger(__name__)

STREAK_LOOKBACK_DAYS = 365
COMPLIANCE_WINDOW_DAYS = 7


class FastingCycleStateMachine:
    """Owns one user's :class:`FastingState` and every transition on it."""

    def __init__(self, state: Optional[FastingState] = None, streak_lookback_days: int = STREAK_LOOKBACK_DAYS, ):
        self.state = state if state is not None else FastingState()
        self.streak_lookback_days = streak_lookback_days

    @property
    def current_cycle(self) -> Optional[FastingCycle]:
        return self.state.current_cycle

    # ------------------------------------------------------------------
    # Daily reset
    # ------------------------------------------------------------------

    def initialize_today_cycle(self, now: datetime.datetime) -> FastingCycle:
        """Reconcile the stored cycle with the calendar date of *now*.

        On a new date the outgoing cycle, if still open, is archived as
        missed and a fresh pending cycle is created.  On the same date this
        only creates a cycle when none exists, so repeated calls are no-ops.

        A full-day fast runs into the next calendar day.  It stays current
        until its 24 hours have passed and is then archived as completed.
        """
        today = now.date()
        last = self.state.last_reset_date
        current = self.state.current_cycle

        if last is not None and today < last:
            logger.warning("Clock moved back from %s to %s; keeping the current cycle", last, today)
            if current is None:
                self._commit(self._new_cycle(now))
            return self.state.current_cycle

        if last != today:
            if current is not None and current.date == today:
                # Cycle already belongs to today (e.g. after a force reset without a reset date).
                self.state.last_reset_date = today
                return current

            if self._settle_full_day_fast(now):
                current = self.state.current_cycle
            elif self._full_day_fast_end() is not None:
                return current

            logger.info("Daily reset for %s (last reset %s)", today, last)
            history = dict(self.state.cycle_history)
            if current is not None and not current.is_terminal:
                missed = self._transition(current, state=CycleState.MISSED_WINDOW)
                history[missed.date] = missed
                logger.info("Archived open cycle for %s as missed", missed.date)

            self.state.cycle_history = history
            self.state.current_cycle = self._new_cycle(now)
            self.state.last_reset_date = today
            return self.state.current_cycle

        if current is None:
            self.state.current_cycle = self._new_cycle(now)
        return self.state.current_cycle

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_fasting(self, now: datetime.datetime) -> bool:
        cycle = self._require_state("start_fasting", CycleState.PENDING, CycleState.EATING)
        if cycle is None:
            return False
        if cycle.state is CycleState.EATING:
            updated = self._transition(cycle, state=CycleState.FASTING, fasting_started_at=now,
                                       fasting_ended_at=None, eating_ended_at=now, )
        else:
            updated = self._transition(cycle, state=CycleState.FASTING, fasting_started_at=now)
        self._commit(updated)
        return True

    def start_eating(self, now: datetime.datetime) -> bool:
        cycle = self._require_state("start_eating", CycleState.FASTING)
        if cycle is None:
            return False
        self._commit(self._transition(cycle, state=CycleState.EATING, eating_started_at=now, fasting_ended_at=now,
                                      eating_ended_at=None, ))
        return True

    def break_fast(self, now: datetime.datetime) -> bool:
        """End the day early.  The cycle counts as broken, never completed."""
        cycle = self._require_state("break_fast", CycleState.PENDING, CycleState.FASTING, CycleState.EATING)
        if cycle is None:
            return False
        self._commit(self._transition(cycle, state=CycleState.BROKEN, fasting_ended_at=now), archive=True)
        return True

    def complete_cycle(self, now: datetime.datetime) -> bool:
        cycle = self._require_state("complete_cycle", CycleState.EATING)
        if cycle is None:
            return False
        self._commit(self._transition(cycle, state=CycleState.COMPLETED, eating_ended_at=now), archive=True)
        return True

    def handle_missed_window(self, now: datetime.datetime) -> bool:
        """Mark the cycle missed if its eating window passed unused.

        Applies only to an open cycle with no ``eating_started_at`` whose
        eating window has fully elapsed at *now*.  Runs the daily reset
        afterwards in either case.
        """
        cycle = self._require_state("handle_missed_window", CycleState.PENDING, CycleState.FASTING)
        applied = False
        if cycle is not None:
            window = self.get_fasting_window()
            if cycle.eating_started_at is not None:
                logger.warning("Cycle for %s already used its eating window; not missed", cycle.date)
            elif window.eating_minutes == 0:
                logger.warning("Protocol has no eating window; nothing to miss")
            elif now < eating_window_end(cycle.date, window, now.tzinfo):
                logger.warning("Eating window for %s has not elapsed yet", cycle.date)
            else:
                self._commit(self._transition(cycle, state=CycleState.MISSED_WINDOW), archive=True)
                applied = True

        self.initialize_today_cycle(now)
        return applied

    def sync(self, now: datetime.datetime) -> list[str]:
        """Apply the transitions a poller would detect at *now*.

        Returns the names of the transitions applied, in order.
        """
        applied: list[str] = []
        window = self.get_fasting_window()

        before = self.state.current_cycle
        if self._settle_full_day_fast(now):
            applied += ["start_eating", "complete_cycle"]
            before = self.state.current_cycle

        cycle = self.initialize_today_cycle(now)
        if cycle is not before:
            applied.append("initialize_today_cycle")

        if window.eating_minutes == 0:
            return applied

        phase = current_phase(window, now)

        phase_started = next_boundary(window, now) - datetime.timedelta(
            minutes=window.eating_minutes if phase is Phase.EATING else window.fasting_minutes)

        if cycle.state is CycleState.FASTING and phase is Phase.EATING and cycle.fasting_started_at < phase_started:
            self.start_eating(now)
            applied.append("start_eating")
        elif cycle.state is CycleState.EATING and phase is Phase.FASTING and cycle.eating_started_at < phase_started:
            self.complete_cycle(now)
            applied.append("complete_cycle")
        elif (cycle.state in (CycleState.PENDING, CycleState.FASTING) and cycle.eating_started_at is None
              and now >= eating_window_end(cycle.date, window, now.tzinfo)):
            self.handle_missed_window(now)
            applied.append("handle_missed_window")

        return applied

    # ------------------------------------------------------------------
    # Plan configuration
    # ------------------------------------------------------------------

    def can_change_plan(self) -> bool:
        """False only while a fast is under way."""
        cycle = self.state.current_cycle
        if cycle is None or cycle.is_terminal:
            return True
        return cycle.fasting_started_at is None

    def set_fasting_plan(self, protocol: FastingProtocol, now: datetime.datetime,
                         eating_start: Optional[str | int] = None, ) -> bool:
        """Select a protocol; returns False (no change) mid-fast.

        Raises:
            InvalidTimeFormat: if *eating_start* cannot be parsed.
        """
        start = self.state.eating_start if eating_start is None else to_minutes(eating_start)
        if not self.can_change_plan():
            logger.warning("Plan change to %s rejected: fast in progress", protocol.value)
            return False
        self.state.selected_protocol = protocol
        self.state.eating_start = start
        self.state.custom_window = None
        self.initialize_today_cycle(now)
        return True

    def set_custom_window(self, window: FastingWindow) -> bool:
        """Install an override window; returns False (no change) mid-fast."""
        if not self.can_change_plan():
            logger.warning("Custom window rejected: fast in progress")
            return False
        self.state.custom_window = window
        return True

    def get_fasting_window(self) -> FastingWindow:
        if self.state.custom_window is not None:
            return self.state.custom_window
        return compute_window(self.state.selected_protocol, self.state.eating_start)

    def get_current_status(self, now: datetime.datetime) -> PhaseStatus:
        return evaluate_phase(self.get_fasting_window(), now)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def get_cycle_for_date(self, date: datetime.date) -> Optional[FastingCycle]:
        archived = self.state.cycle_history.get(date)
        if archived is not None:
            return archived
        current = self.state.current_cycle
        if current is not None and current.date == date:
            return current
        return None

    def history_between(self, start: datetime.date, end: datetime.date) -> list[FastingCycle]:
        """Archived cycles with ``start <= date <= end``, oldest first."""
        return [c for d, c in sorted(self.state.cycle_history.items()) if start <= d <= end]

    def get_current_streak(self, today: datetime.date) -> int:
        """Consecutive completed days walking back from *today*."""
        streak = 0
        for offset in range(self.streak_lookback_days):
            cycle = self.state.cycle_history.get(today - datetime.timedelta(days=offset))
            if cycle is None or not cycle.completed:
                break
            streak += 1
        return streak

    def get_weekly_compliance(self, today: datetime.date) -> int:
        """Percent of the trailing week's archived cycles that completed.

        Days without an entry are left out of the denominator.
        """
        completed = 0
        total = 0
        for offset in range(COMPLIANCE_WINDOW_DAYS):
            cycle = self.state.cycle_history.get(today - datetime.timedelta(days=offset))
            if cycle is None:
                continue
            total += 1
            if cycle.completed:
                completed += 1
        return round(completed / total * 100) if total else 0

    # ------------------------------------------------------------------
    # Support tools
    # ------------------------------------------------------------------

    def force_reset_cycle(self, now: datetime.datetime) -> FastingCycle:
        """Replace the current cycle with a fresh one, archiving nothing."""
        logger.info("Forced cycle reset for %s", now.date())
        self.state.current_cycle = self._new_cycle(now)
        self.state.last_reset_date = now.date()
        return self.state.current_cycle

    def reset_all_data(self, now: datetime.datetime) -> None:
        """Drop cycles and history; keep the selected protocol and eating start."""
        logger.info("Resetting all fasting data")
        self.state = FastingState(selected_protocol=self.state.selected_protocol,
                                  eating_start=self.state.eating_start, last_reset_date=now.date(), )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_state(self, action: str, *allowed: CycleState) -> Optional[FastingCycle]:
        cycle = self.state.current_cycle
        if cycle is None:
            logger.warning("Ignoring %s: no current cycle", action)
            return None
        if cycle.state not in allowed:
            logger.warning("Ignoring %s on %s cycle for %s", action, cycle.state.value, cycle.date)
            return None
        return cycle

    def _full_day_fast_end(self) -> Optional[datetime.datetime]:
        """End of the full-day fast under way, or ``None`` if there is none."""
        cycle = self.state.current_cycle
        window = self.get_fasting_window()
        if window.eating_minutes != 0 or cycle is None or cycle.state is not CycleState.FASTING:
            return None
        return cycle.fasting_started_at + datetime.timedelta(minutes=window.fasting_minutes)

    def _settle_full_day_fast(self, now: datetime.datetime) -> bool:
        """Complete a full-day fast whose 24 hours have passed at *now*."""
        end = self._full_day_fast_end()
        if end is None or now < end:
            return False
        self.start_eating(end)
        self.complete_cycle(end)
        logger.info("Full-day fast for %s completed at %s", self.state.current_cycle.date, end)
        return True

    @staticmethod
    def _new_cycle(now: datetime.datetime) -> FastingCycle:
        return FastingCycle(date=now.date(), cycle_started_at=now)

    @staticmethod
    def _transition(cycle: FastingCycle, **updates) -> FastingCycle:
        """Validated copy of *cycle* with *updates* applied."""
        return FastingCycle.model_validate({**cycle.model_dump(), **updates})

    def _commit(self, cycle: FastingCycle, archive: bool = False) -> None:
        if archive:
            history = dict(self.state.cycle_history)
            history[cycle.date] = cycle
            self.state.cycle_history = history
        self.state.current_cycle = cycle


def eating_window_end(date: datetime.date, window: FastingWindow,
                      tzinfo: Optional[datetime.tzinfo] = None, ) -> datetime.datetime:
    """Instant at which *date*'s eating window closes (may be the next day)."""
    start = datetime.datetime.combine(date, datetime.time(window.eating_start // 60, window.eating_start % 60),
                                      tzinfo=tzinfo)
    return start + datetime.timedelta(minutes=window.eating_minutes)
