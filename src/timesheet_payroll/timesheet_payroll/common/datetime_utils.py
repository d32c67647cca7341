from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easily.
    """
    return datetime.now()


def hhmm_to_minutes(value: Optional[str]) -> Optional[int]:
    """Minutes since midnight for an ``HH:MM`` (or ``HH:MM:SS``) string.

    Anything that does not parse (None, empty, garbage, out of range) returns
    None so callers can treat it exactly like an absent clock event.
    """

    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours * 60 + minutes


def format_hours_as_time(hours: Optional[float]) -> str:
    """Render a decimal hour count as ``HH:MM`` (e.g. 7.5 -> ``07:30``)."""

    if not hours:
        return "00:00"
    total_minutes = int(round(hours * 60))
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"
