# tests/utils/test_date_utils.py
"""Tests for calendar day helpers."""

from datetime import date, datetime

from portfolio_api.utils.date_utils import as_calendar_date, calendar_days


class TestCalendarDays:

    def test_inclusive_range(self):
        days = calendar_days(date(2024, 1, 30), date(2024, 2, 1))

        assert days == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)]

    def test_single_day(self):
        assert calendar_days(date(2024, 1, 1), date(2024, 1, 1)) == [date(2024, 1, 1)]

    def test_end_before_start_is_empty(self):
        assert calendar_days(date(2024, 1, 2), date(2024, 1, 1)) == []

    def test_full_leap_year(self):
        assert len(calendar_days(date(2024, 1, 1), date(2024, 12, 31))) == 366


class TestAsCalendarDate:

    def test_datetime_is_truncated(self):
        assert as_calendar_date(datetime(2024, 1, 15, 23, 59)) == date(2024, 1, 15)

    def test_date_passes_through(self):
        assert as_calendar_date(date(2024, 1, 15)) == date(2024, 1, 15)
