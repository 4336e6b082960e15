"""
Tests for the prorated-attendance payroll engine (``compute_prorated_payroll``).

January 2024 has 23 working days, so the expected minutes at the default
480-minute day are 11,040.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from workforce_engines.payroll import compute_payroll, compute_prorated_payroll
from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.payroll.models import EmploymentProfile, EmploymentType, PayrollPeriod
from workforce_modules.requests.models import LeaveRequest, RequestStatus, RequestType

JAN_2024 = PayrollPeriod(2024, 1)


def _profile(employment_type=EmploymentType.FULL_TIME, figure="5520000"):
    if employment_type is EmploymentType.FULL_TIME:
        return EmploymentProfile("EMP-001", "Siti", employment_type, base_salary=Decimal(figure))
    return EmploymentProfile("EMP-001", "Siti", employment_type, hourly_rate=Decimal(figure))


def _worked_days(days: int, minutes: int = 480) -> list[AttendanceRecord]:
    records = []
    for i in range(days):
        work_date = date(2024, 1, 2) + timedelta(days=i)
        check_in = datetime(work_date.year, work_date.month, work_date.day, 8, tzinfo=timezone.utc)
        records.append(AttendanceRecord(
            employee_id="EMP-001",
            work_date=work_date,
            check_in=check_in,
            check_out=check_in + timedelta(minutes=minutes),
            total_minutes=minutes,
        ))
    return records


def _leave(start: date, end: date, request_type=RequestType.LEAVE, status=RequestStatus.APPROVED):
    return LeaveRequest(
        request_id=uuid4(),
        employee_id="EMP-001",
        request_type=request_type,
        status=status,
        start_date=start,
        end_date=end,
    )


# Mon 2024-01-22 .. Tue 2024-01-23
TWO_DAY_LEAVE = _leave(date(2024, 1, 22), date(2024, 1, 23))


class TestProratedFullTime:

    def test_breakdown_figures(self):
        result = compute_prorated_payroll(_profile(), _worked_days(10), [TWO_DAY_LEAVE], [], JAN_2024)

        assert result.working_days == 23
        assert result.expected_minutes == 11040
        assert result.total_minutes_worked == 4800
        assert result.total_days_worked == 10
        assert result.approved_leave_days == 2
        assert result.approved_leave_minutes == 960
        assert result.payable_minutes == 3840
        assert result.regular_pay_amount == Decimal("1920000")

    def test_line_item_consistent(self):
        result = compute_prorated_payroll(_profile(), _worked_days(10), [TWO_DAY_LEAVE], [], JAN_2024)
        item = result.line_item
        assert item.base_salary == result.regular_pay_amount
        assert item.total_attendance_hours == Decimal("80")
        assert item.net_pay == item.base_salary + item.approved_claims

    def test_full_attendance_earns_full_salary(self):
        result = compute_prorated_payroll(_profile(), _worked_days(23), [], [], JAN_2024)
        assert result.payable_minutes == result.expected_minutes
        assert result.regular_pay_amount == Decimal("5520000")
        assert result.payable_ratio == Decimal("1")

    def test_leave_beyond_worked_floors_at_zero(self):
        leave = _leave(date(2024, 1, 1), date(2024, 1, 31))
        result = compute_prorated_payroll(_profile(), _worked_days(2), [leave], [], JAN_2024)
        assert result.payable_minutes == 0
        assert result.regular_pay_amount == Decimal("0")

    def test_pending_leave_ignored(self):
        pending = _leave(date(2024, 1, 22), date(2024, 1, 23), status=RequestStatus.PENDING)
        result = compute_prorated_payroll(_profile(), _worked_days(10), [pending], [], JAN_2024)
        assert result.approved_leave_minutes == 0
        assert result.payable_minutes == 4800

    def test_sick_days_count_as_absence(self):
        sick = _leave(date(2024, 1, 22), date(2024, 1, 22), RequestType.SICK)
        result = compute_prorated_payroll(_profile(), _worked_days(10), [sick], [], JAN_2024)
        assert result.approved_leave_days == 1

    def test_claims_added(self):
        claim = LeaveRequest(
            request_id=uuid4(),
            employee_id="EMP-001",
            request_type=RequestType.CLAIM,
            status=RequestStatus.APPROVED,
            start_date=date(2024, 1, 5),
            amount=Decimal("150000"),
        )
        result = compute_prorated_payroll(_profile(), _worked_days(23), [], [claim], JAN_2024)
        assert result.line_item.net_pay == Decimal("5670000")


class TestProratedPartTime:

    def test_pay_from_payable_minutes(self):
        result = compute_prorated_payroll(
            _profile(EmploymentType.PART_TIME, "60000"),
            _worked_days(10),
            [TWO_DAY_LEAVE],
            [],
            JAN_2024,
        )
        assert result.regular_pay_amount == Decimal("3840000")

    def test_custom_day_length(self):
        result = compute_prorated_payroll(
            _profile(EmploymentType.PART_TIME, "60000"),
            _worked_days(10),
            [TWO_DAY_LEAVE],
            [],
            JAN_2024,
            working_minutes_per_day=420,
        )
        assert result.expected_minutes == 23 * 420
        assert result.approved_leave_minutes == 840
        assert result.payable_minutes == 3960


class TestProratedEdgeCases:

    @pytest.mark.parametrize("minutes", [0, -1])
    def test_non_positive_day_length_rejected(self, minutes):
        with pytest.raises(ValueError):
            compute_prorated_payroll(
                _profile(), [], [], [], JAN_2024, working_minutes_per_day=minutes,
            )

    def test_models_differ_for_partial_attendance(self):
        records = _worked_days(10)
        aggregate = compute_payroll(_profile(), records, [], JAN_2024)
        prorated = compute_prorated_payroll(_profile(), records, [], [], JAN_2024)
        assert aggregate.base_salary == Decimal("5520000")
        assert prorated.regular_pay_amount < aggregate.base_salary
