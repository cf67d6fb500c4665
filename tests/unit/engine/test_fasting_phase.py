"""Tests for live phase evaluation.

Dusk, midnight and dawn cases for a daytime window and a window that
crosses midnight, plus continuity at the phase boundaries.
"""

import datetime

import pytest

from fitcycle.engine.fasting_phase import current_phase, evaluate_phase, next_boundary
from fitcycle.engine.fasting_window import compute_window
from fitcycle.schemas.fasting import FastingProtocol, Phase

DAY = datetime.date(2026, 3, 10)
NEXT_DAY = DAY + datetime.timedelta(days=1)


def _at(hour: int, minute: int, second: int = 0) -> datetime.datetime:
    return datetime.datetime.combine(DAY, datetime.time(hour, minute, second))


@pytest.fixture
def noon_window():
    """16:8, eating 12:00-20:00."""
    return compute_window(FastingProtocol.SIXTEEN_EIGHT, "12:00")


@pytest.fixture
def evening_window():
    """16:8, eating 20:00-04:00 (crosses midnight)."""
    return compute_window(FastingProtocol.SIXTEEN_EIGHT, "20:00")


# ======================================================================
# Daytime eating window
# ======================================================================


class TestDaytimeWindow:
    def test_late_evening_is_fasting_until_tomorrow_noon(self, noon_window):
        status = evaluate_phase(noon_window, _at(23, 50))
        assert status.phase is Phase.FASTING
        assert status.is_fasting and not status.is_eating
        assert status.percent_complete == pytest.approx(0.24, abs=0.005)  # 3h50m of 16h
        assert status.next_phase_time == "12:00"
        assert status.next_phase_date == NEXT_DAY
        assert (status.time_remaining.hours, status.time_remaining.minutes) == (12, 10)

    def test_one_minute_before_eating(self, noon_window):
        status = evaluate_phase(noon_window, _at(11, 59))
        assert status.phase is Phase.FASTING
        remaining = status.time_remaining
        assert (remaining.hours, remaining.minutes, remaining.seconds) == (0, 1, 0)
        assert remaining.total_seconds == 60
        assert status.next_phase_date == DAY

    def test_seconds_within_the_minute_count_down(self, noon_window):
        remaining = evaluate_phase(noon_window, _at(11, 59, 30)).time_remaining
        assert (remaining.hours, remaining.minutes, remaining.seconds) == (0, 0, 30)

    def test_after_midnight_is_fasting_until_today_noon(self, noon_window):
        status = evaluate_phase(noon_window, _at(0, 30))
        assert status.phase is Phase.FASTING
        assert status.percent_complete == pytest.approx(270 / 960, abs=0.005)
        assert status.next_phase_date == DAY

    def test_eating_start_is_inclusive(self, noon_window):
        status = evaluate_phase(noon_window, _at(12, 0))
        assert status.phase is Phase.EATING
        assert status.percent_complete == 0.0
        assert status.time_remaining.total_seconds == 8 * 3600
        assert status.next_phase_time == "20:00"
        assert status.next_phase_date == DAY

    def test_last_second_of_eating(self, noon_window):
        status = evaluate_phase(noon_window, _at(19, 59, 59))
        assert status.phase is Phase.EATING
        assert status.time_remaining.total_seconds == 1

    def test_fasting_starts_at_eating_end(self, noon_window):
        status = evaluate_phase(noon_window, _at(20, 0))
        assert status.phase is Phase.FASTING
        assert status.percent_complete == 0.0
        assert status.time_remaining.total_seconds == 16 * 3600
        assert status.next_phase_date == NEXT_DAY


# ======================================================================
# Eating window crossing midnight
# ======================================================================


class TestOvernightWindow:
    def test_before_midnight_eating_ends_tomorrow(self, evening_window):
        status = evaluate_phase(evening_window, _at(23, 0))
        assert status.phase is Phase.EATING
        assert status.percent_complete == 0.38
        assert status.next_phase_time == "04:00"
        assert status.next_phase_date == NEXT_DAY

    def test_after_midnight_eating_ends_today(self, evening_window):
        status = evaluate_phase(evening_window, _at(2, 0))
        assert status.phase is Phase.EATING
        assert status.percent_complete == 0.75
        assert status.next_phase_date == DAY
        assert status.time_remaining.total_seconds == 2 * 3600

    def test_dawn_is_fasting_until_evening(self, evening_window):
        status = evaluate_phase(evening_window, _at(4, 0))
        assert status.phase is Phase.FASTING
        assert status.next_phase_time == "20:00"
        assert status.next_phase_date == DAY
        assert status.time_remaining.total_seconds == 16 * 3600

    def test_midnight_exactly(self, evening_window):
        status = evaluate_phase(evening_window, _at(0, 0))
        assert status.phase is Phase.EATING
        assert status.percent_complete == 0.5


# ======================================================================
# Boundaries & special protocols
# ======================================================================


class TestBoundaries:
    @pytest.mark.parametrize("start", ["12:00", "20:00", "00:00", "23:30"])
    def test_percent_is_continuous_around_eating_start(self, start):
        window = compute_window(FastingProtocol.SIXTEEN_EIGHT, start)
        at_start = datetime.datetime.combine(DAY, datetime.time(window.eating_start // 60, window.eating_start % 60))
        before = evaluate_phase(window, at_start - datetime.timedelta(minutes=1))
        after = evaluate_phase(window, at_start)
        assert before.phase is Phase.FASTING and before.percent_complete == pytest.approx(1.0, abs=0.005)
        assert after.phase is Phase.EATING and after.percent_complete == 0.0

    def test_percent_always_in_unit_interval(self, evening_window):
        moment = datetime.datetime.combine(DAY, datetime.time(0, 0))
        for _ in range(0, 24 * 60, 7):
            status = evaluate_phase(evening_window, moment)
            assert 0.0 <= status.percent_complete <= 1.0
            assert status.time_remaining.total_seconds > 0
            moment += datetime.timedelta(minutes=7)

    def test_twenty_four_hour_fast_is_always_fasting(self):
        window = compute_window(FastingProtocol.TWENTY_FOUR_ZERO, "12:00")
        status = evaluate_phase(window, _at(12, 0))
        assert status.phase is Phase.FASTING
        assert status.percent_complete == 0.0
        assert status.time_remaining.total_seconds == 24 * 3600
        assert status.next_phase_date == NEXT_DAY
        assert current_phase(window, _at(18, 0)) is Phase.FASTING

    def test_next_boundary_instant(self, noon_window):
        assert next_boundary(noon_window, _at(23, 50, 12)) == datetime.datetime.combine(NEXT_DAY, datetime.time(12))
        assert next_boundary(noon_window, _at(13, 0)) == _at(20, 0)
