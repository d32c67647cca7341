from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import Role
from .model import Employee


def get_active_employees(employees: Iterable[Employee]) -> list[Employee]:
    """Payroll-eligible employees: non-admin profiles that are active or have no status yet."""

    return [e for e in employees if e.role == Role.USER and e.is_active]


def select_employees(employees: Iterable[Employee], employee_id: Optional[str] = None) -> list[Employee]:
    """All employees, or only the one matching ``employee_id`` (``None`` / ``"all"`` keeps everyone).

    Each id is kept once (first occurrence), so one employee never yields two payroll lines.
    """

    items: list[Employee] = []
    seen: set[str] = set()
    for e in employees:
        key = str(e.id)
        if key in seen:
            continue
        seen.add(key)
        items.append(e)

    if employee_id is None or str(employee_id) == "all":
        return items
    return [e for e in items if str(e.id) == str(employee_id)]
