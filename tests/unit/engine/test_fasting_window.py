"""Tests for fasting window derivation and custom overrides."""

import pytest
from pydantic import ValidationError

from fitcycle.core.exceptions import InvalidTimeFormat, InvalidWindow
from fitcycle.engine.fasting_window import compute_window, custom_window
from fitcycle.engine.timewindow import MINUTES_PER_DAY, minutes_between, to_minutes
from fitcycle.schemas.fasting import FastingProtocol, FastingWindow, ProtocolInfo


# ======================================================================
# Protocols
# ======================================================================


class TestFastingProtocol:
    @pytest.mark.parametrize("protocol", list(FastingProtocol))
    def test_hours_sum_to_a_day(self, protocol):
        assert protocol.fasting_hours + protocol.eating_hours == 24

    def test_value_matches_hours(self):
        for protocol in FastingProtocol:
            assert protocol.value == f"{protocol.fasting_hours}:{protocol.eating_hours}"

    def test_lookup_by_value(self):
        assert FastingProtocol("16:8") is FastingProtocol.SIXTEEN_EIGHT

    def test_protocol_info(self):
        info = ProtocolInfo.from_protocol(FastingProtocol.TWENTY_FOUR)
        assert info.fasting_hours == 20
        assert info.eating_hours == 4
        assert "Warrior" in info.label


# ======================================================================
# compute_window
# ======================================================================


class TestComputeWindow:
    def test_sixteen_eight_at_noon(self):
        window = compute_window(FastingProtocol.SIXTEEN_EIGHT, "12:00")
        assert window.eating_start == to_minutes("12:00")
        assert window.eating_end == to_minutes("20:00")
        assert window.fasting_start == to_minutes("20:00")
        assert window.fasting_end == to_minutes("12:00")
        assert window.eating_minutes == 480
        assert window.fasting_minutes == 960

    def test_default_start_is_noon(self):
        assert compute_window(FastingProtocol.SIXTEEN_EIGHT) == compute_window(FastingProtocol.SIXTEEN_EIGHT, "12:00")

    def test_window_crossing_midnight(self):
        window = compute_window(FastingProtocol.SIXTEEN_EIGHT, "20:00")
        assert window.eating_end == to_minutes("04:00")
        assert window.eating_end < window.eating_start

    def test_daytime_window_does_not_cross(self):
        window = compute_window(FastingProtocol.SIXTEEN_EIGHT, "12:00")
        assert window.eating_start < window.eating_end

    @pytest.mark.parametrize("protocol", list(FastingProtocol))
    @pytest.mark.parametrize("start", ["00:00", "06:30", "12:00", "18:45", "23:59"])
    def test_boundary_invariants(self, protocol, start):
        window = compute_window(protocol, start)
        assert minutes_between(window.eating_start, window.eating_end) == (protocol.eating_hours * 60) % 1440
        assert window.fasting_start == window.eating_end
        assert window.fasting_end == window.eating_start
        assert window.eating_minutes + window.fasting_minutes == MINUTES_PER_DAY

    def test_twenty_four_zero_has_no_eating_period(self):
        window = compute_window(FastingProtocol.TWENTY_FOUR_ZERO, "12:00")
        assert window.eating_start == window.eating_end
        assert window.eating_minutes == 0
        assert window.fasting_minutes == MINUTES_PER_DAY

    def test_minute_integer_start(self):
        assert compute_window(FastingProtocol.EIGHTEEN_SIX, 600).eating_end == 960

    def test_invalid_start(self):
        with pytest.raises(InvalidTimeFormat):
            compute_window(FastingProtocol.SIXTEEN_EIGHT, "12h00")

    def test_serialises_as_clock_strings(self):
        dumped = compute_window(FastingProtocol.SIXTEEN_EIGHT, "20:00").model_dump(mode="json")
        assert dumped == {
            "eating_start": "20:00",
            "eating_end": "04:00",
            "fasting_start": "04:00",
            "fasting_end": "20:00",
            "eating_minutes": 480,
        }

    def test_parses_serialised_form(self):
        window = compute_window(FastingProtocol.FOURTEEN_TEN, "09:15")
        assert FastingWindow.model_validate(window.model_dump(mode="json")) == window


# ======================================================================
# custom_window
# ======================================================================


class TestCustomWindow:
    def test_valid_custom_window(self):
        window = custom_window("10:00", "17:00", "17:00", "10:00")
        assert window.eating_minutes == 7 * 60
        assert window.fasting_minutes == 17 * 60

    def test_custom_window_crossing_midnight(self):
        window = custom_window("21:00", "03:00", "03:00", "21:00")
        assert window.eating_minutes == 360
        assert window.eating_end < window.eating_start

    def test_gap_between_periods_rejected(self):
        with pytest.raises(InvalidWindow):
            custom_window("12:00", "20:00", "21:00", "12:00")

    def test_overlapping_periods_rejected(self):
        with pytest.raises(InvalidWindow):
            custom_window("12:00", "20:00", "19:00", "12:00")

    def test_shifted_fasting_period_rejected(self):
        """Lengths sum to 24h but the periods do not chain."""
        with pytest.raises(InvalidWindow):
            custom_window("12:00", "20:00", "21:00", "13:00")

    def test_empty_eating_period_rejected(self):
        with pytest.raises(InvalidWindow):
            custom_window("12:00", "12:00", "12:00", "12:00")

    def test_malformed_time_rejected(self):
        with pytest.raises(InvalidTimeFormat):
            custom_window("12:00", "20:00", "20:00", "25:00")

    def test_invalid_window_is_a_value_error(self):
        with pytest.raises(ValueError):
            custom_window("12:00", "20:00", "21:00", "12:00")


class TestFastingWindowModel:
    def test_inconsistent_boundaries_rejected(self):
        with pytest.raises(ValidationError):
            FastingWindow(eating_start=720, eating_end=1200, fasting_start=1200, fasting_end=720, eating_minutes=400)

    def test_window_is_frozen(self):
        window = compute_window(FastingProtocol.SIXTEEN_EIGHT)
        with pytest.raises(ValidationError):
            window.eating_start = 0
