from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeStatus, Role
from ..database.mysql_base import MySQLRepository, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT_EMPLOYEE = """
    SELECT p.id, p.name, p.email, p.hourly_rate, p.overtime_rate, p.role, p.status,
           ws.daily_hours
    FROM profiles p
    LEFT JOIN employee_work_schedules ws ON ws.id = (
        SELECT s.id FROM employee_work_schedules s
        WHERE s.employee_id = p.id AND s.is_active = 1
        ORDER BY s.updated_at DESC, s.id DESC
        LIMIT 1
    )
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    overtime_rate = row.get("overtime_rate")
    daily_hours = row.get("daily_hours")
    status = row.get("status")
    return Employee(
        id=str(row["id"]),
        name=row["name"],
        email=row.get("email") or "",
        hourly_rate=float(row.get("hourly_rate") or 0),
        overtime_rate=float(overtime_rate) if overtime_rate is not None else None,
        role=Role(row.get("role") or Role.USER.value),
        status=EmployeeStatus(status) if status else None,
        daily_hours=float(daily_hours) if daily_hours is not None else None,
    )


class MySQLEmployeeRepository(MySQLRepository, EmployeeRepository):
    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._run(self._get_by_id, employee_id)

    def _get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_EMPLOYEE + " WHERE p.id=%s", (str(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_employees(self, *, ids: Optional[Sequence[str]] = None) -> Sequence[Employee]:
        return self._run(self._list_employees, ids)

    def _list_employees(self, ids: Optional[Sequence[str]]) -> Sequence[Employee]:
        sql = _SELECT_EMPLOYEE
        params: list[object] = []
        if ids is not None:
            if not ids:
                return []
            placeholders = ",".join(["%s"] * len(ids))
            sql += f" WHERE p.id IN ({placeholders})"
            params.extend(str(i) for i in ids)
        sql += " ORDER BY p.name ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_employee(r) for r in fetchall(cur)]
