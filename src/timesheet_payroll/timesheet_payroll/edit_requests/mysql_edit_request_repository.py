from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EditRequestStatus, TimeField
from ..database.mysql_base import MySQLRepository, db_cursor, fetchall, fetchone
from ..locations.model import location_to_dict, normalize_location_details
from .model import EditRequest, NewEditRequest
from .repository import EditRequestRepository

_SELECT_REQUEST = """
    SELECT id, employee_id, date, field, old_value, new_value, reason, status,
           location, reviewed_by, reviewed_at, created_at
    FROM edit_requests
"""


def _load_location(value: Any):
    if not value:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            # Oldest rows hold the address as plain text.
            pass
    return normalize_location_details(value)


def _to_request(r: Dict[str, Any]) -> EditRequest:
    return EditRequest(
        request_id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["date"],
        field=TimeField(r["field"]),
        old_value=r.get("old_value"),
        new_value=r["new_value"],
        reason=r.get("reason") or "",
        status=EditRequestStatus(r["status"]),
        created_at=r["created_at"],
        location=_load_location(r.get("location")),
        reviewed_by=str(r["reviewed_by"]) if r.get("reviewed_by") is not None else None,
        reviewed_at=r.get("reviewed_at"),
    )


class MySQLEditRequestRepository(MySQLRepository, EditRequestRepository):
    def create(self, request: NewEditRequest) -> str:
        return self._run(self._create, request)

    def _create(self, request: NewEditRequest) -> str:
        location = location_to_dict(request.location)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO edit_requests(employee_id, date, field, old_value, new_value, reason, status, location)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.employee_id,
                    request.work_date,
                    request.field.value,
                    request.old_value,
                    request.new_value,
                    request.reason,
                    EditRequestStatus.PENDING.value,
                    json.dumps(location) if location else None,
                ),
            )
            return str(cur.lastrowid)

    def get(self, *, request_id: str) -> Optional[EditRequest]:
        return self._run(self._get, str(request_id))

    def _get(self, request_id: str) -> Optional[EditRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_REQUEST + " WHERE id=%s", (request_id,))
            row = fetchone(cur)
            return _to_request(row) if row else None

    def list_requests(
        self,
        *,
        status: Optional[EditRequestStatus] = None,
        employee_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[EditRequest]:
        return self._run(self._list_requests, status, employee_id, int(limit))

    def _list_requests(
        self,
        status: Optional[EditRequestStatus],
        employee_id: Optional[str],
        limit: int,
    ) -> Sequence[EditRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(limit)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_REQUEST + where + " ORDER BY created_at DESC LIMIT %s", tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: str,
        status: EditRequestStatus,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> bool:
        return self._run(self._decide, str(request_id), status, str(reviewed_by), reviewed_at)

    def _decide(self, request_id: str, status: EditRequestStatus, reviewed_by: str, reviewed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE edit_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, reviewed_by, reviewed_at, request_id, EditRequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
