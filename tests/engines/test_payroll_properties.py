"""
Property-based tests for the payroll and claims engines.

Invariants checked with generated inputs:
- Full-time pay does not depend on attendance
- Part-time pay equals minutes / 60 * rate
- Claim totals are additive and order-independent
- net_pay == base_salary + approved_claims
- Incomplete shifts never change the result
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from hypothesis import given, settings
from hypothesis import strategies as st

from workforce_engines.claims import sum_claim_amounts
from workforce_engines.payroll import compute_payroll
from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.payroll.models import EmploymentProfile, EmploymentType, PayrollPeriod
from workforce_modules.requests.models import LeaveRequest, RequestStatus, RequestType

PERIOD = PayrollPeriod(2024, 3)

amounts = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("100000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
minutes_lists = st.lists(st.integers(min_value=0, max_value=1440), max_size=31)


def _records(minutes: list[int], complete: bool = True) -> list[AttendanceRecord]:
    records = []
    for i, m in enumerate(minutes):
        work_date = date(2024, 3, 1) + timedelta(days=i % 31)
        check_in = datetime(2024, 3, 1, 8, tzinfo=timezone.utc) + timedelta(days=i % 31)
        records.append(AttendanceRecord(
            employee_id="EMP-P",
            work_date=work_date,
            check_in=check_in,
            check_out=check_in + timedelta(minutes=m) if complete else None,
            total_minutes=m,
        ))
    return records


def _claims(values: list[Decimal]) -> list[LeaveRequest]:
    return [
        LeaveRequest(
            request_id=uuid4(),
            employee_id="EMP-P",
            request_type=RequestType.CLAIM,
            status=RequestStatus.APPROVED,
            start_date=date(2024, 3, 15),
            amount=v,
        )
        for v in values
    ]


def _profile(employment_type: EmploymentType, figure: Decimal) -> EmploymentProfile:
    if employment_type is EmploymentType.FULL_TIME:
        return EmploymentProfile("EMP-P", "Prop", employment_type, base_salary=figure)
    return EmploymentProfile("EMP-P", "Prop", employment_type, hourly_rate=figure)


class TestPayrollProperties:

    @given(salary=amounts, a=minutes_lists, b=minutes_lists)
    @settings(max_examples=50, deadline=None)
    def test_full_time_attendance_independent(self, salary, a, b):
        profile = _profile(EmploymentType.FULL_TIME, salary)
        first = compute_payroll(profile, _records(a), [], PERIOD)
        second = compute_payroll(profile, _records(b), [], PERIOD)
        assert first.base_salary == second.base_salary == salary

    @given(rate=amounts, minutes=minutes_lists)
    @settings(max_examples=50, deadline=None)
    def test_part_time_pay_is_minutes_times_rate(self, rate, minutes):
        item = compute_payroll(_profile(EmploymentType.PART_TIME, rate), _records(minutes), [], PERIOD)
        assert item.base_salary == Decimal(sum(minutes)) * rate / Decimal(60)
        assert item.total_attendance_hours == Decimal(sum(minutes)) / Decimal(60)

    @given(
        employment_type=st.sampled_from(list(EmploymentType)),
        figure=amounts,
        minutes=minutes_lists,
        claims=st.lists(amounts, max_size=10),
    )
    @settings(max_examples=50, deadline=None)
    def test_net_is_base_plus_claims(self, employment_type, figure, minutes, claims):
        item = compute_payroll(_profile(employment_type, figure), _records(minutes), _claims(claims), PERIOD)
        assert item.net_pay == item.base_salary + item.approved_claims

    @given(employment_type=st.sampled_from(list(EmploymentType)), figure=amounts, minutes=minutes_lists)
    @settings(max_examples=50, deadline=None)
    def test_incomplete_shifts_do_not_count(self, employment_type, figure, minutes):
        profile = _profile(employment_type, figure)
        without = compute_payroll(profile, [], [], PERIOD)
        with_open = compute_payroll(profile, _records(minutes, complete=False), [], PERIOD)
        assert with_open == without


class TestClaimProperties:

    @given(values=st.lists(amounts, max_size=20))
    @settings(max_examples=50, deadline=None)
    def test_order_independent(self, values):
        claims = _claims(values)
        assert sum_claim_amounts(claims) == sum_claim_amounts(list(reversed(claims)))

    @given(a=st.lists(amounts, max_size=10), b=st.lists(amounts, max_size=10))
    @settings(max_examples=50, deadline=None)
    def test_additive(self, a, b):
        assert sum_claim_amounts(_claims(a + b)) == (
            sum_claim_amounts(_claims(a)) + sum_claim_amounts(_claims(b))
        )

    def test_empty_is_zero(self):
        assert sum_claim_amounts([]) == Decimal("0")
