"""
Time Aggregation Engine (``workforce_engines.timekeeping``).

Responsibility
--------------
Pure functions turning attendance records into worked minutes and hours,
and counting working days and approved absence days in a payroll period.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads.  All timestamps and periods are passed in.

Invariants enforced
-------------------
* A record without ``check_out`` contributes 0 minutes, whatever its
  stored ``total_minutes`` says.  Incomplete shifts are never estimated.
* Hours are ``Decimal`` and are not rounded here.
* Deterministic: same inputs, same outputs.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import Decimal

from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.payroll.models import PayrollPeriod
from workforce_modules.requests.models import LeaveRequest

MINUTES_PER_HOUR = Decimal("60")

# Monday..Friday as returned by date.weekday()
WORKING_WEEKDAYS = frozenset(range(5))


def shift_minutes(check_in: datetime | None, check_out: datetime | None) -> int:
    """Minutes between check-in and check-out, rounded to the nearest minute.

    Returns 0 when either timestamp is missing or check-out precedes
    check-in.
    """
    if check_in is None or check_out is None:
        return 0
    seconds = (check_out - check_in).total_seconds()
    if seconds <= 0:
        return 0
    # Round half up like the check-out stamp always has
    return int(Decimal(str(seconds)) / 60 + Decimal("0.5"))


def record_minutes(record: AttendanceRecord) -> int:
    """Worked minutes a record contributes to payroll."""
    if record.check_out is None:
        return 0
    return record.total_minutes


def total_worked_minutes(records: Iterable[AttendanceRecord]) -> int:
    return sum(record_minutes(r) for r in records)


def minutes_to_hours(minutes: int) -> Decimal:
    return Decimal(minutes) / MINUTES_PER_HOUR


def days_worked(records: Iterable[AttendanceRecord]) -> int:
    """Distinct days with a completed, non-zero shift."""
    return len({r.work_date for r in records if record_minutes(r) > 0})


def records_in_period(
    records: Iterable[AttendanceRecord],
    employee_id: str,
    period: PayrollPeriod,
) -> list[AttendanceRecord]:
    """Records of one employee whose ``work_date`` falls inside the period."""
    return [
        r for r in records
        if r.employee_id == employee_id and period.contains(r.work_date)
    ]


def working_days_in_period(period: PayrollPeriod) -> int:
    """Number of Monday-to-Friday days in the period."""
    day = period.start
    count = 0
    while day <= period.end:
        if day.weekday() in WORKING_WEEKDAYS:
            count += 1
        day += timedelta(days=1)
    return count


def approved_absence_days(
    requests: Iterable[LeaveRequest],
    employee_id: str,
    period: PayrollPeriod,
) -> int:
    """Working days covered by approved leave or sick requests in the period.

    Overlapping requests count each day once.
    """
    days: set[date] = set()
    for request in requests:
        if request.employee_id != employee_id or not request.is_approved_absence:
            continue
        days.update(
            d for d in request.covered_dates(period.start, period.end)
            if d.weekday() in WORKING_WEEKDAYS
        )
    return len(days)
