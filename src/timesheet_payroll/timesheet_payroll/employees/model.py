from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee profile with its pay rates.

    Note: Pure data object (no DB access code).
    """

    id: str
    name: str
    email: str
    hourly_rate: float = 0.0
    overtime_rate: Optional[float] = None
    role: Role = Role.USER
    status: Optional[EmployeeStatus] = None
    daily_hours: Optional[float] = None

    @property
    def effective_overtime_rate(self) -> float:
        """Overtime is paid at the hourly rate unless a separate rate is configured."""
        if self.overtime_rate is None:
            return float(self.hourly_rate)
        return float(self.overtime_rate)

    @property
    def is_active(self) -> bool:
        return self.status in (None, EmployeeStatus.ACTIVE)
