from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_NORMAL_HOURS_THRESHOLD
from ..employees.filters import select_employees
from ..employees.model import Employee
from ..time_records.model import TimeRecord
from .calculator.base import WorkingHoursCalculator
from .calculator.standard_calculator import StandardWorkingHoursCalculator
from .model import DateRange, PayrollLineItem, PayrollReport

logger = logging.getLogger(__name__)

RecordsByEmployeeAndDate = Mapping[str, Mapping[date, TimeRecord]]


def index_records(records: Iterable[TimeRecord]) -> dict[str, dict[date, TimeRecord]]:
    """Group records as ``{employee_id: {date: record}}``."""

    out: dict[str, dict[date, TimeRecord]] = {}
    for r in records:
        out.setdefault(str(r.user_id), {})[r.date] = r
    return out


def generate_payroll(
    employees: Sequence[Employee],
    date_range: DateRange,
    records_by_employee_and_date: RecordsByEmployeeAndDate,
    *,
    employee_id: Optional[str] = None,
    calculator: Optional[WorkingHoursCalculator] = None,
    default_threshold: float = DEFAULT_NORMAL_HOURS_THRESHOLD,
) -> PayrollReport:
    """Aggregate working hours and pay per employee over ``date_range``.

    Hours are summed unrounded, per employee and report-wide. Pay is derived
    from the raw sums; each part is rounded to cents, then their sum is
    rounded again. Employees without records in range produce no line.

    The range is not validated here: callers reject ``start > end`` before
    calling, and an inverted range simply matches no records.
    """

    calc = calculator or StandardWorkingHoursCalculator(default_threshold)
    items: list[PayrollLineItem] = []
    grand_total_hours = 0.0
    grand_total_overtime = 0.0

    for employee in select_employees(employees, employee_id):
        by_date = records_by_employee_and_date.get(str(employee.id)) or {}
        in_range = [r for d, r in sorted(by_date.items()) if date_range.contains(d)]
        if not in_range:
            continue

        threshold = employee.daily_hours if employee.daily_hours is not None else default_threshold
        total_hours = 0.0
        normal_hours = 0.0
        overtime_hours = 0.0
        days_worked = 0

        for record in in_range:
            day = calc.calculate_day(record.events, normal_hours_threshold=threshold)
            total_hours += day.total_hours
            normal_hours += day.normal_hours
            overtime_hours += day.overtime_hours
            if day.total_hours > 0:
                days_worked += 1

        grand_total_hours += total_hours
        grand_total_overtime += overtime_hours

        logger.debug(
            "Payroll totals for %s: total=%s normal=%s overtime=%s",
            employee.name,
            total_hours,
            normal_hours,
            overtime_hours,
        )

        items.append(
            PayrollLineItem.build(
                employee=employee,
                total_hours_raw=total_hours,
                normal_hours_raw=normal_hours,
                overtime_hours_raw=overtime_hours,
                days_worked=days_worked,
            )
        )

    return PayrollReport(
        period=date_range,
        items=items,
        grand_total_hours_raw=grand_total_hours,
        grand_total_overtime_hours_raw=grand_total_overtime,
    )
