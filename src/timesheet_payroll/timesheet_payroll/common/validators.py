from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import hhmm_to_minutes


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_hhmm(value: str, field_name: str) -> str:
    minutes = hhmm_to_minutes(value)
    if minutes is None:
        raise ValidationError(f"{field_name} must be a time in HH:MM format")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def require_date_range(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    if start is None or end is None:
        raise ValidationError("Select both a start date and an end date before generating the report")
    if start > end:
        raise ValidationError("The start date must be on or before the end date")
    return start, end
