"""Unit tests for spreadsheet time conversions and H:MM labels."""

from datetime import datetime, time, timedelta

import pytest

from flightbook.time_utils import excel_time_to_seconds, excel_time_to_hhmm, sec_to_hm, hm_to_sec


class TestExcelTimeToSeconds:
    """Tests for fractional-day to seconds conversion."""

    @pytest.mark.parametrize("val, expected", [
        (None, 0),
        (0, 0),
        (0.5, 43200),
        (1.0, 86400),
        (0.04097222222, 3540),
        (100 / 86400, 100),
    ])
    def test_numbers(self, val, expected):
        """Fractions of a day become rounded seconds."""
        assert excel_time_to_seconds(val) == expected

    def test_string_returns_zero(self):
        """Strings are not durations here."""
        assert excel_time_to_seconds('foo') == 0

    def test_bool_returns_zero(self):
        """Booleans are not numbers for spreadsheet purposes."""
        assert excel_time_to_seconds(True) == 0

    def test_time_and_timedelta(self):
        """openpyxl time-formatted cells convert too."""
        assert excel_time_to_seconds(time(1, 10)) == 4200
        assert excel_time_to_seconds(timedelta(minutes=59)) == 3540

    def test_datetime_keeps_whole_days(self):
        """Durations of a day or more come back from openpyxl as datetimes."""
        assert excel_time_to_seconds(datetime(1899, 12, 31, 2, 30)) == 86400 + 9000
        assert excel_time_to_seconds(datetime(1900, 1, 1, 0, 0)) == 2 * 86400


class TestExcelTimeToHHMM:
    """Tests for fractional-day to HH:MM conversion."""

    def test_none_returns_empty(self):
        assert excel_time_to_hhmm(None) == ''

    def test_string_passthrough(self):
        assert excel_time_to_hhmm('10:30') == '10:30'

    @pytest.mark.parametrize("val, expected", [
        (0.5, '12:00'),
        (10 / 24, '10:00'),
        (18.5 / 24, '18:30'),
        (0, '00:00'),
    ])
    def test_numbers(self, val, expected):
        """Numbers render zero-padded, midnight included."""
        assert excel_time_to_hhmm(val) == expected

    def test_datetime_uses_clock_part(self):
        assert excel_time_to_hhmm(datetime(2026, 1, 1, 10, 30)) == '10:30'

    def test_other_objects_return_string(self):
        """Unknown shapes fall back to str()."""
        assert isinstance(excel_time_to_hhmm({'x': 1}), str)


class TestSecToHM:
    """Tests for the H:MM display label."""

    @pytest.mark.parametrize("sec, expected", [
        (0, '0:00'),
        (None, '0:00'),
        (3600, '1:00'),
        (5400, '1:30'),
        (35520, '9:52'),
        (198600, '55:10'),
        (60, '0:01'),
        (3661, '1:01'),
        (59, '0:00'),
    ])
    def test_labels(self, sec, expected):
        """Hours unpadded, minutes floored and padded."""
        assert sec_to_hm(sec) == expected


class TestHMToSec:
    """Tests for parsing H:MM labels."""

    def test_parses_labels(self):
        assert hm_to_sec('9:52') == 35520
        assert hm_to_sec('10:00') == 36000

    def test_garbage_returns_zero(self):
        assert hm_to_sec('soon') == 0
        assert hm_to_sec(None) == 0
