"""
Tests for the monthly-aggregate payroll engine (``compute_payroll``).

Covers:
- Full-time pay independent of attendance
- Part-time pay as minutes * rate / 60
- Claims added on top; net = base + claims
- Incomplete shifts contribute zero
- Missing pay figures degrade to zero instead of raising
- Engine trace logging
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from workforce_engines.payroll import compute_payroll
from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.payroll.models import EmploymentProfile, EmploymentType, PayrollPeriod
from workforce_modules.requests.models import LeaveRequest, RequestStatus, RequestType

JAN_2024 = PayrollPeriod(2024, 1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _full_time(salary="5000000", employee_id="EMP-001") -> EmploymentProfile:
    return EmploymentProfile(
        employee_id=employee_id,
        name="Siti Rahma",
        employment_type=EmploymentType.FULL_TIME,
        base_salary=Decimal(salary) if salary is not None else None,
    )


def _part_time(rate="50000", employee_id="EMP-002") -> EmploymentProfile:
    return EmploymentProfile(
        employee_id=employee_id,
        name="Budi Santoso",
        employment_type=EmploymentType.PART_TIME,
        hourly_rate=Decimal(rate) if rate is not None else None,
    )


def _record(
    minutes: int,
    work_date: date = date(2024, 1, 2),
    employee_id: str = "EMP-001",
    complete: bool = True,
) -> AttendanceRecord:
    check_in = datetime(work_date.year, work_date.month, work_date.day, 8, 0, tzinfo=timezone.utc)
    return AttendanceRecord(
        employee_id=employee_id,
        work_date=work_date,
        check_in=check_in,
        check_out=check_in + timedelta(minutes=minutes) if complete else None,
        total_minutes=minutes,
    )


def _claim(amount: str, employee_id: str = "EMP-001") -> LeaveRequest:
    return LeaveRequest(
        request_id=uuid4(),
        employee_id=employee_id,
        request_type=RequestType.CLAIM,
        status=RequestStatus.APPROVED,
        start_date=date(2024, 1, 10),
        amount=Decimal(amount),
    )


# ===========================================================================
# Worked examples
# ===========================================================================


class TestWorkedExamples:

    def test_full_time_with_attendance_and_claim(self):
        records = [_record(480, date(2024, 1, 2)), _record(480, date(2024, 1, 3))]

        item = compute_payroll(_full_time(), records, [_claim("100000")], JAN_2024)

        assert item.base_salary == Decimal("5000000")
        assert item.total_attendance_hours == Decimal("16")
        assert item.approved_claims == Decimal("100000")
        assert item.net_pay == Decimal("5100000")

    def test_part_time_nine_hours(self):
        records = [
            _record(300, date(2024, 1, 2), "EMP-002"),
            _record(240, date(2024, 1, 3), "EMP-002"),
        ]

        item = compute_payroll(_part_time(), records, [], JAN_2024)

        assert item.total_attendance_hours == Decimal("9")
        assert item.base_salary == Decimal("450000")
        assert item.net_pay == Decimal("450000")

    def test_full_time_without_attendance_or_claims(self):
        item = compute_payroll(_full_time(), [], [], JAN_2024)

        assert item.net_pay == Decimal("5000000")
        assert item.total_attendance_hours == Decimal("0")
        assert item.approved_claims == Decimal("0")


# ===========================================================================
# Compensation rules
# ===========================================================================


class TestCompensation:

    def test_full_time_ignores_attendance(self):
        few = compute_payroll(_full_time(), [_record(60)], [], JAN_2024)
        many = compute_payroll(
            _full_time(),
            [_record(600, date(2024, 1, d)) for d in range(1, 29)],
            [],
            JAN_2024,
        )
        assert few.base_salary == many.base_salary == Decimal("5000000")

    def test_part_time_fractional_hours_exact(self):
        item = compute_payroll(_part_time("60000"), [_record(100, employee_id="EMP-002")], [], JAN_2024)
        # 100 minutes at 60,000/hour
        assert item.base_salary == Decimal("100000")
        assert item.total_attendance_hours == Decimal(100) / Decimal(60)

    def test_part_time_salary_field_ignored(self):
        profile = EmploymentProfile(
            employee_id="EMP-002",
            name="Budi",
            employment_type=EmploymentType.PART_TIME,
            base_salary=Decimal("9000000"),
            hourly_rate=Decimal("50000"),
        )
        item = compute_payroll(profile, [_record(60, employee_id="EMP-002")], [], JAN_2024)
        assert item.base_salary == Decimal("50000")

    def test_full_time_hourly_rate_ignored(self):
        profile = EmploymentProfile(
            employee_id="EMP-001",
            name="Siti",
            employment_type="full_time",
            base_salary=Decimal("4000000"),
            hourly_rate=Decimal("99999"),
        )
        item = compute_payroll(profile, [_record(600)], [], JAN_2024)
        assert item.base_salary == Decimal("4000000")

    def test_line_item_carries_profile_identity(self):
        item = compute_payroll(_full_time(), [], [], JAN_2024)
        assert item.employee_id == "EMP-001"
        assert item.name == "Siti Rahma"
        assert item.employment_type is EmploymentType.FULL_TIME


# ===========================================================================
# Degraded data
# ===========================================================================


class TestDegradedData:

    def test_incomplete_shift_contributes_zero(self):
        records = [_record(480), _record(480, date(2024, 1, 3), complete=False)]
        item = compute_payroll(_part_time(employee_id="EMP-001"), records, [], JAN_2024)
        assert item.total_attendance_hours == Decimal("8")
        assert item.base_salary == Decimal("400000")

    def test_missing_salary_is_zero(self):
        item = compute_payroll(_full_time(salary=None), [_record(480)], [_claim("25000")], JAN_2024)
        assert item.base_salary == Decimal("0")
        assert item.net_pay == Decimal("25000")

    def test_missing_hourly_rate_is_zero(self):
        item = compute_payroll(_part_time(rate=None), [_record(480, employee_id="EMP-002")], [], JAN_2024)
        assert item.base_salary == Decimal("0")
        assert item.total_attendance_hours == Decimal("8")

    def test_claim_without_amount_adds_zero(self):
        claim = LeaveRequest(
            request_id=uuid4(),
            employee_id="EMP-001",
            request_type=RequestType.CLAIM,
            status=RequestStatus.APPROVED,
            start_date=date(2024, 1, 5),
        )
        item = compute_payroll(_full_time(), [], [claim, _claim("10")], JAN_2024)
        assert item.approved_claims == Decimal("10")


# ===========================================================================
# Tracing
# ===========================================================================


class TestEngineTrace:

    def test_trace_record_emitted(self, captured_logs):
        compute_payroll(_full_time(), [], [], JAN_2024)

        traces = [r for r in captured_logs() if r["message"] == "WORKFORCE_ENGINE_TRACE"]
        assert len(traces) == 1
        assert traces[0]["engine_name"] == "payroll"
        assert traces[0]["engine_version"] == "1.0"
        assert len(traces[0]["input_fingerprint"]) == 16

    def test_fingerprint_stable_for_same_inputs(self, captured_logs):
        compute_payroll(_full_time(), [_record(60)], [], JAN_2024)
        compute_payroll(_full_time(), [_record(120)], [], JAN_2024)
        compute_payroll(_full_time("1"), [], [], JAN_2024)

        fps = [
            r["input_fingerprint"]
            for r in captured_logs()
            if r["message"] == "WORKFORCE_ENGINE_TRACE"
        ]
        # Fingerprint covers profile and period only
        assert fps[0] == fps[1]
        assert fps[0] != fps[2]

    @pytest.mark.parametrize("month", [1, 2, 12])
    def test_period_changes_fingerprint(self, captured_logs, month):
        compute_payroll(_full_time(), [], [], PayrollPeriod(2024, month))
        compute_payroll(_full_time(), [], [], PayrollPeriod(2025, month))

        fps = [
            r["input_fingerprint"]
            for r in captured_logs()
            if r["message"] == "WORKFORCE_ENGINE_TRACE"
        ]
        assert fps[0] != fps[1]
