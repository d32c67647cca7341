from __future__ import annotations

import calendar
from datetime import date, timedelta


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def is_working_day(day: date) -> bool:
    return not is_weekend(day)


def working_days_in_period(start: date, end: date) -> list[date]:
    """Monday-to-Friday dates in ``[start, end]``; empty when start > end."""

    days: list[date] = []
    current = start
    while current <= end:
        if is_working_day(current):
            days.append(current)
        current += timedelta(days=1)
    return days


def working_days_in_month(year: int, month: int) -> list[date]:
    last = calendar.monthrange(year, month)[1]
    return working_days_in_period(date(year, month, 1), date(year, month, last))
