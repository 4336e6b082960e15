"""
Attendance Domain Models (``workforce_modules.attendance.models``).

Frozen value objects for daily check-in / check-out records.  A day has
at most one record per employee.  ``total_minutes`` is stamped at
check-out time and is meaningless while ``check_out`` is unset.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class AttendanceStatus(Enum):
    """Attendance record states."""
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee's shift on one calendar day."""
    employee_id: str
    work_date: date
    check_in: datetime | None = None
    check_out: datetime | None = None
    total_minutes: int = 0
    check_in_latitude: float | None = None
    check_in_longitude: float | None = None
    check_out_latitude: float | None = None
    check_out_longitude: float | None = None
    id: UUID | None = None

    @property
    def status(self) -> AttendanceStatus:
        if self.check_out is None:
            return AttendanceStatus.CHECKED_IN
        return AttendanceStatus.CHECKED_OUT

    @property
    def is_complete(self) -> bool:
        return self.check_out is not None
