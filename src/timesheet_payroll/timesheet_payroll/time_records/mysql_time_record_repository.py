from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.mysql_base import MySQLRepository, db_cursor, fetchall, fetchone, mysql_time_to_hhmm
from .model import TimeRecord
from .repository import TimeRecordRepository

_SELECT_RECORD = """
    SELECT id, user_id, date, clock_in, lunch_start, lunch_end, clock_out,
           total_hours, normal_hours, overtime_hours, normal_pay, overtime_pay, total_pay,
           status, locations
    FROM time_records
"""


def _load_locations(value: Any) -> Dict[str, Any]:
    if not value:
        return {}
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return {}
    return value if isinstance(value, dict) else {}


def _to_record(r: Dict[str, Any]) -> TimeRecord:
    return TimeRecord(
        id=str(r["id"]),
        user_id=str(r["user_id"]),
        date=r["date"],
        clock_in=mysql_time_to_hhmm(r.get("clock_in")),
        lunch_start=mysql_time_to_hhmm(r.get("lunch_start")),
        lunch_end=mysql_time_to_hhmm(r.get("lunch_end")),
        clock_out=mysql_time_to_hhmm(r.get("clock_out")),
        total_hours=float(r.get("total_hours") or 0),
        normal_hours=float(r.get("normal_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        normal_pay=float(r.get("normal_pay") or 0),
        overtime_pay=float(r.get("overtime_pay") or 0),
        total_pay=float(r.get("total_pay") or 0),
        status=r.get("status") or "active",
        locations=_load_locations(r.get("locations")),
    )


class MySQLTimeRecordRepository(MySQLRepository, TimeRecordRepository):
    def list_for_employee_in_range(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[TimeRecord]:
        return self._run(self._list_for_employee_in_range, str(employee_id), start_date, end_date)

    def _list_for_employee_in_range(self, employee_id: str, start_date: date, end_date: date) -> Sequence[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_RECORD
                + """
                WHERE user_id=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (employee_id, start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, *, employee_id: str, work_date: date) -> Optional[TimeRecord]:
        return self._run(self._get_for_employee_and_date, str(employee_id), work_date)

    def _get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RECORD + " WHERE user_id=%s AND date=%s", (employee_id, work_date))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def update_record(self, record: TimeRecord) -> bool:
        return self._run(self._update_record, record)

    def _update_record(self, record: TimeRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_records
                SET clock_in=%s, lunch_start=%s, lunch_end=%s, clock_out=%s,
                    total_hours=%s, normal_hours=%s, overtime_hours=%s,
                    normal_pay=%s, overtime_pay=%s, total_pay=%s,
                    updated_at=NOW()
                WHERE id=%s
                """,
                (
                    record.clock_in,
                    record.lunch_start,
                    record.lunch_end,
                    record.clock_out,
                    record.total_hours,
                    record.normal_hours,
                    record.overtime_hours,
                    record.normal_pay,
                    record.overtime_pay,
                    record.total_pay,
                    record.id,
                ),
            )
            return cur.rowcount > 0
