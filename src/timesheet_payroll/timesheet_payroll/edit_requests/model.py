from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EditRequestStatus, TimeField
from ..locations.model import LocationDetails


@dataclass(frozen=True)
class EditRequest:
    """An employee's request to change one clock event of a past day."""

    request_id: str
    employee_id: str
    work_date: date
    field: TimeField
    old_value: Optional[str]
    new_value: str
    reason: str
    status: EditRequestStatus
    created_at: datetime
    location: Optional[LocationDetails] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewEditRequest:
    employee_id: str
    work_date: date
    field: TimeField
    old_value: Optional[str]
    new_value: str
    reason: str
    location: Optional[LocationDetails] = None
