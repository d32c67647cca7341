from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Optional

from ..core.enums import TimeField
from ..payroll.model import DailyTimeEvents


@dataclass(frozen=True)
class TimeRecord:
    """Domain entity: one employee's clock events for one calendar day.

    The stored hour/pay figures are a snapshot written when the record was
    last recomputed; reports always recompute from the clock fields.
    """

    id: str
    user_id: str
    date: date
    clock_in: Optional[str] = None
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    clock_out: Optional[str] = None
    total_hours: float = 0.0
    normal_hours: float = 0.0
    overtime_hours: float = 0.0
    normal_pay: float = 0.0
    overtime_pay: float = 0.0
    total_pay: float = 0.0
    status: str = "active"
    locations: Dict[str, Any] = field(default_factory=dict)

    @property
    def events(self) -> DailyTimeEvents:
        return DailyTimeEvents(
            clock_in=self.clock_in,
            lunch_start=self.lunch_start,
            lunch_end=self.lunch_end,
            clock_out=self.clock_out,
        )

    def value_of(self, time_field: TimeField) -> Optional[str]:
        return getattr(self, time_field.value)

    def with_value(self, time_field: TimeField, value: Optional[str]) -> "TimeRecord":
        return replace(self, **{time_field.value: value})
