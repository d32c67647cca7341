from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_hours_as_time
from ..common.validators import require_date_range
from ..common.working_days import working_days_in_period
from ..core.constants import DEFAULT_CURRENCY, DEFAULT_NORMAL_HOURS_THRESHOLD
from ..employees.filters import get_active_employees, select_employees
from ..employees.repository import EmployeeRepository
from ..time_records.repository import TimeRecordRepository
from .aggregator import generate_payroll, index_records
from .calculator.base import WorkingHoursCalculator
from .formatting import format_currency, round_hours
from .model import DateRange, PayrollReport

logger = logging.getLogger(__name__)


class PayrollReportService:
    def __init__(
        self,
        employees: EmployeeRepository,
        time_records: TimeRecordRepository,
        *,
        calculator: Optional[WorkingHoursCalculator] = None,
        default_threshold: float = DEFAULT_NORMAL_HOURS_THRESHOLD,
        currency: str = DEFAULT_CURRENCY,
    ):
        self._employees = employees
        self._time_records = time_records
        self._calculator = calculator
        self._default_threshold = float(default_threshold)
        self._currency = currency

    def generate(
        self,
        *,
        start: Optional[date],
        end: Optional[date],
        employee_id: Optional[str] = None,
    ) -> PayrollReport:
        start, end = require_date_range(start, end)
        period = DateRange(start=start, end=end)

        employees = select_employees(get_active_employees(self._employees.list_employees()), employee_id)
        logger.info("Generating payroll %s..%s for %d employee(s)", start, end, len(employees))

        records = []
        for employee in employees:
            try:
                records.extend(
                    self._time_records.list_for_employee_in_range(
                        employee_id=employee.id,
                        start_date=start,
                        end_date=end,
                    )
                )
            except Exception:
                logger.exception("Failed to load time records for employee %s", employee.id)
                raise

        return generate_payroll(
            employees,
            period,
            index_records(records),
            calculator=self._calculator,
            default_threshold=self._default_threshold,
        )

    def build_rows(self, report: PayrollReport) -> list[dict]:
        rows: list[dict] = []
        for item in report.items:
            e = item.employee
            rows.append(
                {
                    "employee_id": e.id,
                    "name": e.name,
                    "email": e.email,
                    "hourly_rate": round(e.hourly_rate, 2),
                    "overtime_rate": round(e.effective_overtime_rate, 2),
                    "total_hours": round_hours(item.total_hours_raw),
                    "normal_hours": round_hours(item.normal_hours_raw),
                    "overtime_hours": round_hours(item.overtime_hours_raw),
                    "total_hours_hhmm": format_hours_as_time(item.total_hours_raw),
                    "normal_hours_hhmm": format_hours_as_time(item.normal_hours_raw),
                    "overtime_hours_hhmm": format_hours_as_time(item.overtime_hours_raw),
                    "days_worked": item.days_worked,
                    "normal_pay": item.normal_pay,
                    "overtime_pay": item.overtime_pay,
                    "total_pay": item.total_pay,
                    "normal_pay_display": format_currency(item.normal_pay, self._currency),
                    "overtime_pay_display": format_currency(item.overtime_pay, self._currency),
                    "total_pay_display": format_currency(item.total_pay, self._currency),
                }
            )
        return rows

    def build_summary(self, report: PayrollReport) -> dict:
        # Grand-total hours are rounded once here, from the raw report-wide sums.
        working_days = len(working_days_in_period(report.period.start, report.period.end))
        return {
            "start_date": report.period.start.strftime("%Y-%m-%d"),
            "end_date": report.period.end.strftime("%Y-%m-%d"),
            "employee_count": report.employee_count,
            "working_days": working_days,
            "expected_hours_per_employee": round_hours(working_days * self._default_threshold),
            "total_hours": round_hours(report.grand_total_hours_raw),
            "total_hours_hhmm": format_hours_as_time(report.grand_total_hours_raw),
            "overtime_hours": round_hours(report.grand_total_overtime_hours_raw),
            "overtime_hours_hhmm": format_hours_as_time(report.grand_total_overtime_hours_raw),
            "total_pay": report.grand_total_pay,
            "total_pay_display": format_currency(report.grand_total_pay, self._currency),
        }
