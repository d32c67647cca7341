from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

from src.timesheet_payroll.timesheet_payroll.core.enums import EditRequestStatus
from src.timesheet_payroll.timesheet_payroll.edit_requests.model import EditRequest, NewEditRequest
from src.timesheet_payroll.timesheet_payroll.employees.model import Employee
from src.timesheet_payroll.timesheet_payroll.time_records.model import TimeRecord


class FakeEmployeesRepo:
    def __init__(self, employees: list[Employee]):
        self._employees = list(employees)

    def get_by_id(self, employee_id):
        for e in self._employees:
            if str(e.id) == str(employee_id):
                return e
        return None

    def list_employees(self, *, ids=None):
        if ids is None:
            return list(self._employees)
        wanted = {str(i) for i in ids}
        return [e for e in self._employees if str(e.id) in wanted]


class FakeTimeRecordsRepo:
    def __init__(self, records: list[TimeRecord]):
        self._records = {(r.user_id, r.date): r for r in records}
        self.calls: list[dict] = []
        self.updated: list[TimeRecord] = []

    def list_for_employee_in_range(self, *, employee_id, start_date: date, end_date: date):
        self.calls.append({"employee_id": employee_id, "start_date": start_date, "end_date": end_date})
        return [
            r
            for (uid, d), r in sorted(self._records.items(), key=lambda kv: kv[0][1])
            if uid == str(employee_id) and start_date <= d <= end_date
        ]

    def get_for_employee_and_date(self, *, employee_id, work_date: date):
        return self._records.get((str(employee_id), work_date))

    def update_record(self, record: TimeRecord) -> bool:
        key = (record.user_id, record.date)
        if key not in self._records:
            return False
        self._records[key] = record
        self.updated.append(record)
        return True


class FakeEditRequestsRepo:
    def __init__(self):
        self._next_id = 1
        self._items: dict[str, EditRequest] = {}

    def create(self, request: NewEditRequest) -> str:
        rid = str(self._next_id)
        self._next_id += 1
        self._items[rid] = EditRequest(
            request_id=rid,
            employee_id=request.employee_id,
            work_date=request.work_date,
            field=request.field,
            old_value=request.old_value,
            new_value=request.new_value,
            reason=request.reason,
            status=EditRequestStatus.PENDING,
            created_at=datetime(2026, 2, 1, 10, 0, 0),
            location=request.location,
        )
        return rid

    def get(self, *, request_id):
        return self._items.get(str(request_id))

    def list_requests(self, *, status=None, employee_id=None, limit=200):
        items = [
            r
            for r in self._items.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ]
        return items[:limit]

    def decide(self, *, request_id, status, reviewed_by, reviewed_at):
        req = self._items.get(str(request_id))
        if not req or req.status != EditRequestStatus.PENDING:
            return False
        self._items[str(request_id)] = replace(req, status=status, reviewed_by=reviewed_by, reviewed_at=reviewed_at)
        return True
