# backend/portfolio_api/utils/date_utils.py
"""
Date helpers shared by the performance engine and its callers.

Usage:
    from portfolio_api.utils.date_utils import calendar_days

    days = calendar_days(start_date, end_date)
"""

from datetime import date, datetime, timedelta


def calendar_days(start_date: date, end_date: date) -> list[date]:
    """
    Every calendar day from start_date to end_date, both inclusive.

    Returns an empty list when end_date is before start_date.

    Example:
        >>> calendar_days(date(2024, 1, 30), date(2024, 2, 1))
        [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)]
    """
    return [
        start_date + timedelta(days=offset)
        for offset in range((end_date - start_date).days + 1)
    ]


def as_calendar_date(value: date | datetime) -> date:
    """Drop the time-of-day component of a datetime (dates pass through)."""
    if isinstance(value, datetime):
        return value.date()
    return value
