from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_hhmm, require_non_empty
from ..core.constants import DEFAULT_NORMAL_HOURS_THRESHOLD, DEFAULT_REQUEST_LIST_LIMIT
from ..core.enums import EditRequestStatus, TimeField
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..locations.geocoding import ReverseGeocoder
from ..locations.model import CoordinatesLocation, LocationDetails, normalize_location_details
from ..payroll.calculator.base import WorkingHoursCalculator
from ..payroll.calculator.standard_calculator import StandardWorkingHoursCalculator
from ..payroll.model import compute_pay
from ..time_records.model import TimeRecord
from ..time_records.repository import TimeRecordRepository
from .model import EditRequest, NewEditRequest
from .repository import EditRequestRepository

logger = logging.getLogger(__name__)


class EditRequestService:
    def __init__(
        self,
        requests: EditRequestRepository,
        time_records: TimeRecordRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[WorkingHoursCalculator] = None,
        default_threshold: float = DEFAULT_NORMAL_HOURS_THRESHOLD,
        geocoder: Optional[ReverseGeocoder] = None,
    ):
        self._requests = requests
        self._time_records = time_records
        self._employees = employees
        self._default_threshold = float(default_threshold)
        self._calculator = calculator or StandardWorkingHoursCalculator(self._default_threshold)
        self._geocoder = geocoder

    def _resolve_location(self, raw: Any) -> Optional[LocationDetails]:
        location = normalize_location_details(raw)
        if isinstance(location, CoordinatesLocation) and not location.address and self._geocoder:
            result = self._geocoder.reverse(location.lat, location.lng)
            if result.success:
                location = replace(location, address=result.address)
        return location

    @staticmethod
    def _parse_field(value: Any) -> TimeField:
        try:
            return TimeField(value)
        except ValueError:
            raise ValidationError(f"Unknown time field: {value!r}")

    def submit(
        self,
        *,
        employee_id: str,
        work_date: date,
        field: str | TimeField,
        new_value: str,
        reason: str,
        location: Any = None,
    ) -> str:
        time_field = self._parse_field(field)
        value = require_hhmm(new_value, "New time")
        reason = require_non_empty(reason, "Reason")

        record = self._time_records.get_for_employee_and_date(employee_id=str(employee_id), work_date=work_date)
        if not record:
            raise NotFoundError("No time record found for this day")

        request_id = self._requests.create(
            NewEditRequest(
                employee_id=str(employee_id),
                work_date=work_date,
                field=time_field,
                old_value=record.value_of(time_field),
                new_value=value,
                reason=reason,
                location=self._resolve_location(location),
            )
        )
        logger.info("Edit request %s submitted by %s for %s (%s)", request_id, employee_id, work_date, time_field.value)
        return request_id

    def _get_pending(self, request_id: str) -> EditRequest:
        req = self._requests.get(request_id=str(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.status != EditRequestStatus.PENDING:
            raise ValidationError("Request was already reviewed")
        return req

    def recompute(self, record: TimeRecord) -> TimeRecord:
        """Refresh a record's stored hour/pay snapshot from its clock fields."""

        employee = self._employees.get_by_id(record.user_id)
        if not employee:
            raise NotFoundError("Employee not found")

        threshold = employee.daily_hours if employee.daily_hours is not None else self._default_threshold
        hours = self._calculator.calculate_day(record.events, normal_hours_threshold=threshold)
        pay = compute_pay(hours.normal_hours, hours.overtime_hours, employee)
        return replace(
            record,
            total_hours=hours.total_hours,
            normal_hours=hours.normal_hours,
            overtime_hours=hours.overtime_hours,
            normal_pay=pay.normal_pay,
            overtime_pay=pay.overtime_pay,
            total_pay=pay.total_pay,
        )

    def approve(self, *, request_id: str, reviewer_id: str, now: datetime | None = None) -> TimeRecord:
        req = self._get_pending(request_id)

        record = self._time_records.get_for_employee_and_date(employee_id=req.employee_id, work_date=req.work_date)
        if not record:
            raise NotFoundError("No time record found to apply the request to")

        updated = self.recompute(record.with_value(req.field, req.new_value))
        if not self._time_records.update_record(updated):
            raise ValidationError("Failed to update the time record")

        decided = self._requests.decide(
            request_id=req.request_id,
            status=EditRequestStatus.APPROVED,
            reviewed_by=str(reviewer_id),
            reviewed_at=now or now_local(),
        )
        if not decided:
            raise ValidationError("Failed to approve the request")

        logger.info("Edit request %s approved by %s", req.request_id, reviewer_id)
        return updated

    def reject(self, *, request_id: str, reviewer_id: str, now: datetime | None = None) -> None:
        req = self._get_pending(request_id)
        decided = self._requests.decide(
            request_id=req.request_id,
            status=EditRequestStatus.REJECTED,
            reviewed_by=str(reviewer_id),
            reviewed_at=now or now_local(),
        )
        if not decided:
            raise ValidationError("Failed to reject the request")
        logger.info("Edit request %s rejected by %s", req.request_id, reviewer_id)

    def list_requests(
        self,
        *,
        status: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[EditRequest]:
        parsed: Optional[EditRequestStatus] = None
        if status:
            try:
                parsed = EditRequestStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown request status: {status!r}")
        return self._requests.list_requests(status=parsed, employee_id=employee_id, limit=DEFAULT_REQUEST_LIST_LIMIT)
