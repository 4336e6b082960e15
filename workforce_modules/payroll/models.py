"""
Payroll Domain Models (``workforce_modules.payroll.models``).

Responsibility
--------------
Frozen dataclass value objects for payroll: employment profiles, the
monthly payroll period, the per-employee line item, the payroll run and
the breakdown produced by the prorated model.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``workforce_engines.payroll`` and ``PayrollService``.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Only one of ``base_salary`` / ``hourly_rate`` is authoritative per
  employee; the inactive figure reads as zero.

Failure modes
-------------
* Construction with an unknown employment type raises ``ValueError``.
* ``PayrollPeriod`` with a month outside 1..12 raises ``ValueError``.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from workforce_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.models")

ZERO = Decimal("0")


class EmploymentType(Enum):
    """Compensation model of an employee."""
    FULL_TIME = "full_time"
    PART_TIME = "part_time"


class PayrollModel(Enum):
    """Which payroll computation a run uses."""
    MONTHLY_AGGREGATE = "monthly_aggregate"
    PRORATED_ATTENDANCE = "prorated_attendance"


def _to_decimal(value) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class EmploymentProfile:
    """Compensation profile of one employee, fixed for a payroll run."""
    employee_id: str
    name: str
    employment_type: EmploymentType
    base_salary: Decimal | None = None  # monthly, full-time only
    hourly_rate: Decimal | None = None  # part-time only
    is_active: bool = True

    def __post_init__(self):
        object.__setattr__(self, "employment_type", EmploymentType(self.employment_type))
        object.__setattr__(self, "base_salary", _to_decimal(self.base_salary))
        object.__setattr__(self, "hourly_rate", _to_decimal(self.hourly_rate))

        # Missing pay figures degrade to zero pay, they never reject the profile
        active_figure = (
            self.base_salary
            if self.employment_type is EmploymentType.FULL_TIME
            else self.hourly_rate
        )
        if not active_figure:
            logger.warning(
                "employment_profile_missing_pay",
                extra={
                    "employee_id": self.employee_id,
                    "employment_type": self.employment_type.value,
                },
            )

    @property
    def monthly_salary(self) -> Decimal:
        """Authoritative monthly salary; zero unless full-time."""
        if self.employment_type is EmploymentType.FULL_TIME:
            return self.base_salary or ZERO
        return ZERO

    @property
    def effective_hourly_rate(self) -> Decimal:
        """Authoritative hourly rate; zero unless part-time."""
        if self.employment_type is EmploymentType.PART_TIME:
            return self.hourly_rate or ZERO
        return ZERO


@dataclass(frozen=True, order=True)
class PayrollPeriod:
    """A calendar month, the aggregation window for attendance and claims."""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if self.year < 1:
            raise ValueError(f"year must be positive, got {self.year}")

    @classmethod
    def parse(cls, label: str) -> "PayrollPeriod":
        """Parse a ``YYYY-MM`` label."""
        year, sep, month = label.strip().partition("-")
        if not sep or not year.isdigit() or not month.isdigit():
            raise ValueError(f"Expected YYYY-MM, got {label!r}")
        return cls(int(year), int(month))

    @classmethod
    def containing(cls, day: date) -> "PayrollPeriod":
        return cls(day.year, day.month)

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class PayrollLineItem:
    """Payable amount for one employee in one period."""
    employee_id: str
    name: str
    employment_type: EmploymentType
    base_salary: Decimal  # resolved pay before claims
    total_attendance_hours: Decimal
    approved_claims: Decimal
    net_pay: Decimal


@dataclass(frozen=True)
class ProratedPayrollBreakdown:
    """Intermediate figures of the prorated-attendance model."""
    employee_id: str
    period: PayrollPeriod
    working_days: int
    working_minutes_per_day: int
    total_minutes_worked: int
    total_days_worked: int
    approved_leave_days: int
    approved_leave_minutes: int
    expected_minutes: int
    payable_minutes: int
    regular_pay_amount: Decimal
    line_item: PayrollLineItem

    @property
    def payable_ratio(self) -> Decimal:
        if self.expected_minutes == 0:
            return ZERO
        return Decimal(self.payable_minutes) / Decimal(self.expected_minutes)


@dataclass(frozen=True)
class PayrollRun:
    """All line items produced for one period."""
    run_id: UUID
    period: PayrollPeriod
    model: PayrollModel
    generated_at: datetime
    line_items: tuple[PayrollLineItem, ...] = field(default_factory=tuple)

    @property
    def total_payout(self) -> Decimal:
        return sum((item.net_pay for item in self.line_items), ZERO)

    @property
    def employee_count(self) -> int:
        return len(self.line_items)

    def line_item_for(self, employee_id: str) -> PayrollLineItem | None:
        return next(
            (item for item in self.line_items if item.employee_id == employee_id),
            None,
        )
