from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Profile role; only USER profiles are paid through payroll."""

    ADMIN = "admin"
    USER = "user"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class TimeField(str, Enum):
    """The four clock events of a workday, named as stored in time_records."""

    CLOCK_IN = "clock_in"
    LUNCH_START = "lunch_start"
    LUNCH_END = "lunch_end"
    CLOCK_OUT = "clock_out"


class EditRequestStatus(str, Enum):
    """Approval state of an employee's edit request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
