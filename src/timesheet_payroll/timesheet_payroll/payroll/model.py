from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import MONEY_DECIMALS
from ..employees.model import Employee


@dataclass(frozen=True)
class DailyTimeEvents:
    """The four clock events of one calendar day, as ``HH:MM`` strings."""

    clock_in: Optional[str] = None
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    clock_out: Optional[str] = None


@dataclass(frozen=True)
class WorkingHoursResult:
    total_hours: float = 0.0
    normal_hours: float = 0.0
    overtime_hours: float = 0.0


ZERO_HOURS = WorkingHoursResult()


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def round_money(value: float) -> float:
    return round(float(value), MONEY_DECIMALS)


@dataclass(frozen=True)
class PayBreakdown:
    normal_pay: float
    overtime_pay: float
    total_pay: float


def compute_pay(normal_hours: float, overtime_hours: float, employee: Employee) -> PayBreakdown:
    """Round each part to cents first, then round their sum again."""

    normal_pay = round_money(normal_hours * employee.hourly_rate)
    overtime_pay = round_money(overtime_hours * employee.effective_overtime_rate)
    return PayBreakdown(
        normal_pay=normal_pay,
        overtime_pay=overtime_pay,
        total_pay=round_money(normal_pay + overtime_pay),
    )


@dataclass(frozen=True)
class PayrollLineItem:
    """One employee's payroll for a report period.

    Hour sums are raw (unrounded); pay figures are rounded per part, then the
    rounded parts are summed and rounded again for ``total_pay``.
    """

    employee: Employee
    total_hours_raw: float
    normal_hours_raw: float
    overtime_hours_raw: float
    normal_pay: float
    overtime_pay: float
    total_pay: float
    days_worked: int = 0

    @classmethod
    def build(
        cls,
        *,
        employee: Employee,
        total_hours_raw: float,
        normal_hours_raw: float,
        overtime_hours_raw: float,
        days_worked: int = 0,
    ) -> "PayrollLineItem":
        pay = compute_pay(normal_hours_raw, overtime_hours_raw, employee)
        return cls(
            employee=employee,
            total_hours_raw=total_hours_raw,
            normal_hours_raw=normal_hours_raw,
            overtime_hours_raw=overtime_hours_raw,
            normal_pay=pay.normal_pay,
            overtime_pay=pay.overtime_pay,
            total_pay=pay.total_pay,
            days_worked=days_worked,
        )


@dataclass(frozen=True)
class PayrollReport:
    period: DateRange
    items: list[PayrollLineItem] = field(default_factory=list)
    grand_total_hours_raw: float = 0.0
    grand_total_overtime_hours_raw: float = 0.0

    @property
    def employee_count(self) -> int:
        return len(self.items)

    @property
    def grand_total_pay(self) -> float:
        # Sum of the already-rounded per-employee totals, not a re-derivation from raw hours.
        return round_money(sum(item.total_pay for item in self.items))

    @property
    def is_empty(self) -> bool:
        return not self.items
