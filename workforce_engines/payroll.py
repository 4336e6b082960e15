"""
Payroll Calculation Engine (``workforce_engines.payroll``).

Responsibility
--------------
Turns an employee's compensation profile, attendance and approved claims
for one calendar month into a ``PayrollLineItem``.  Two models exist and
are never mixed; the caller picks one through configuration:

* ``compute_payroll`` -- monthly aggregate.  Full-time employees receive
  their monthly salary as-is (attendance is informational); part-time
  employees receive worked hours times their hourly rate.  Approved
  claims are added on top.
* ``compute_prorated_payroll`` -- payable minutes (worked minus approved
  leave) against expected minutes for the month.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads, ZERO configuration reads.

Invariants enforced
-------------------
* ``net_pay == base_salary + approved_claims`` on every line item.
* Full-time base pay is independent of attendance (aggregate model).
* Part-time base pay is ``minutes * rate / 60``.
* Incomplete shifts contribute zero minutes.
* All money is ``Decimal``.

Failure modes
-------------
* None for missing or zero pay figures: they degrade to zero pay.
  Validating the profile and period is the caller's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from workforce_engines.claims import sum_claim_amounts
from workforce_engines.timekeeping import (
    MINUTES_PER_HOUR,
    approved_absence_days,
    days_worked,
    minutes_to_hours,
    total_worked_minutes,
    working_days_in_period,
)
from workforce_engines.tracer import traced_engine
from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.payroll.models import (
    EmploymentProfile,
    EmploymentType,
    PayrollLineItem,
    PayrollPeriod,
    ProratedPayrollBreakdown,
)
from workforce_modules.requests.models import LeaveRequest

DEFAULT_WORKING_MINUTES_PER_DAY = 480

_ZERO = Decimal("0")


def _hourly_pay(minutes: int, hourly_rate: Decimal) -> Decimal:
    return Decimal(minutes) * hourly_rate / MINUTES_PER_HOUR


@traced_engine("payroll", "1.0", fingerprint_fields=("profile", "period"))
def compute_payroll(
    profile: EmploymentProfile,
    attendance_records: Iterable[AttendanceRecord],
    approved_claims: Iterable[LeaveRequest],
    period: PayrollPeriod,
) -> PayrollLineItem:
    """Compute the monthly-aggregate line item for one employee.

    Args:
        profile: Compensation profile of the employee.
        attendance_records: The employee's records dated inside ``period``.
        approved_claims: The employee's approved claims dated inside ``period``.
        period: Payroll month.  Records are expected to be pre-filtered
            to it; the calculator does not re-check dates.

    Returns:
        PayrollLineItem with resolved base pay, hours, claims and net pay.
    """
    minutes = total_worked_minutes(attendance_records)
    hours = minutes_to_hours(minutes)

    match profile.employment_type:
        case EmploymentType.FULL_TIME:
            base = profile.monthly_salary
        case EmploymentType.PART_TIME:
            base = _hourly_pay(minutes, profile.effective_hourly_rate)
        case _:
            raise ValueError(f"Unknown employment type: {profile.employment_type}")

    claims_total = sum_claim_amounts(approved_claims)

    return PayrollLineItem(
        employee_id=profile.employee_id,
        name=profile.name,
        employment_type=profile.employment_type,
        base_salary=base,
        total_attendance_hours=hours,
        approved_claims=claims_total,
        net_pay=base + claims_total,
    )


@traced_engine(
    "prorated_payroll", "1.0",
    fingerprint_fields=("profile", "period", "working_minutes_per_day"),
)
def compute_prorated_payroll(
    profile: EmploymentProfile,
    attendance_records: Iterable[AttendanceRecord],
    leave_requests: Iterable[LeaveRequest],
    approved_claims: Iterable[LeaveRequest],
    period: PayrollPeriod,
    working_minutes_per_day: int = DEFAULT_WORKING_MINUTES_PER_DAY,
) -> ProratedPayrollBreakdown:
    """Compute pay from payable minutes against expected minutes.

    payable = max(0, worked - approved leave minutes)
    full-time pay = base_salary * payable / expected
    part-time pay = payable / 60 * hourly_rate

    Approved leave minutes are the working days (Mon-Fri) covered by
    approved ``leave``/``sick`` requests times ``working_minutes_per_day``.

    Raises:
        ValueError: if ``working_minutes_per_day`` is not positive.
    """
    if working_minutes_per_day <= 0:
        raise ValueError("working_minutes_per_day must be positive")

    records = list(attendance_records)
    worked = total_worked_minutes(records)
    working_days = working_days_in_period(period)
    expected = working_days * working_minutes_per_day
    leave_days = approved_absence_days(leave_requests, profile.employee_id, period)
    leave_minutes = leave_days * working_minutes_per_day
    payable = max(0, worked - leave_minutes)

    match profile.employment_type:
        case EmploymentType.FULL_TIME:
            if expected:
                regular = profile.monthly_salary * Decimal(payable) / Decimal(expected)
            else:
                regular = _ZERO
        case EmploymentType.PART_TIME:
            regular = _hourly_pay(payable, profile.effective_hourly_rate)
        case _:
            raise ValueError(f"Unknown employment type: {profile.employment_type}")

    claims_total = sum_claim_amounts(approved_claims)
    line_item = PayrollLineItem(
        employee_id=profile.employee_id,
        name=profile.name,
        employment_type=profile.employment_type,
        base_salary=regular,
        total_attendance_hours=minutes_to_hours(worked),
        approved_claims=claims_total,
        net_pay=regular + claims_total,
    )

    return ProratedPayrollBreakdown(
        employee_id=profile.employee_id,
        period=period,
        working_days=working_days,
        working_minutes_per_day=working_minutes_per_day,
        total_minutes_worked=worked,
        total_days_worked=days_worked(records),
        approved_leave_days=leave_days,
        approved_leave_minutes=leave_minutes,
        expected_minutes=expected,
        payable_minutes=payable,
        regular_pay_amount=regular,
        line_item=line_item,
    )
