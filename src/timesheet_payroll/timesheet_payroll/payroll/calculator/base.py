from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import DailyTimeEvents, WorkingHoursResult


class WorkingHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for working hours)."""

    @abstractmethod
    def calculate(
        self,
        clock_in: Optional[str],
        lunch_start: Optional[str],
        lunch_end: Optional[str],
        clock_out: Optional[str],
        *,
        normal_hours_threshold: Optional[float] = None,
    ) -> WorkingHoursResult:
        raise NotImplementedError

    def calculate_day(self, events: DailyTimeEvents, *, normal_hours_threshold: Optional[float] = None) -> WorkingHoursResult:
        return self.calculate(
            events.clock_in,
            events.lunch_start,
            events.lunch_end,
            events.clock_out,
            normal_hours_threshold=normal_hours_threshold,
        )
