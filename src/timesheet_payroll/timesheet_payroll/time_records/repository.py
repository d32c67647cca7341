from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeRecord


class TimeRecordRepository(Protocol):
    def list_for_employee_in_range(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[TimeRecord]:
        """Records whose date falls in ``[start_date, end_date]`` (date-only comparison)."""

        raise NotImplementedError

    def get_for_employee_and_date(self, *, employee_id: str, work_date: date) -> Optional[TimeRecord]:
        raise NotImplementedError

    def update_record(self, record: TimeRecord) -> bool:
        """Persist clock fields and the recomputed hour/pay snapshot."""

        raise NotImplementedError
