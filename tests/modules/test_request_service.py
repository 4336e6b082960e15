"""
Tests for RequestService.

Covers:
- Submission validation (claims need a positive numeric amount, other types none)
- Sick auto-approval limit per month
- Approve / reject only from pending
- Period queries and per-status summary
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from workforce_kernel.exceptions import (
    InvalidRequestError,
    InvalidRequestTransitionError,
    RequestNotFoundError,
)
from workforce_modules.payroll.models import PayrollPeriod
from workforce_modules.requests.models import RequestStatus, RequestType
from workforce_modules.requests.service import RequestService


@pytest.fixture
def service(session, workforce_config, deterministic_clock):
    return RequestService(session, workforce_config, clock=deterministic_clock)


# ===========================================================================
# Submission
# ===========================================================================


class TestSubmit:

    def test_leave_is_pending(self, service):
        request = service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 8), date(2024, 1, 10), reason="Family")

        assert request.status is RequestStatus.PENDING
        assert request.days == 3
        assert request.reason == "Family"
        assert service.get(request.request_id) == request

    def test_type_accepted_as_string(self, service):
        request = service.submit("EMP-001", "claim", date(2024, 1, 8), amount=Decimal("25000"))
        assert request.request_type is RequestType.CLAIM

    def test_unknown_type_rejected(self, service):
        with pytest.raises(InvalidRequestError) as exc_info:
            service.submit("EMP-001", "vacation", date(2024, 1, 8))
        assert exc_info.value.code == "INVALID_REQUEST"

    @pytest.mark.parametrize("amount", [None, Decimal("0"), Decimal("-5")])
    def test_claim_requires_positive_amount(self, service, amount):
        with pytest.raises(InvalidRequestError) as exc_info:
            service.submit("EMP-001", RequestType.CLAIM, date(2024, 1, 8), amount=amount)
        assert exc_info.value.request_type == "claim"

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity"])
    def test_claim_amount_must_be_numeric(self, service, amount):
        with pytest.raises(InvalidRequestError) as exc_info:
            service.submit("EMP-001", "claim", date(2024, 1, 2), amount=amount)
        assert exc_info.value.code == "INVALID_REQUEST"
        assert service.summary("EMP-001") == {"approved": 0, "pending": 0, "rejected": 0}

    def test_claim_amount_from_string(self, service):
        request = service.submit("EMP-001", "claim", date(2024, 1, 2), amount="12500.50")
        assert request.amount == Decimal("12500.50")

    @pytest.mark.parametrize("request_type", [RequestType.LEAVE, RequestType.SICK])
    def test_amount_only_on_claims(self, service, request_type):
        with pytest.raises(InvalidRequestError) as exc_info:
            service.submit("EMP-001", request_type, date(2024, 1, 2), amount=Decimal("100"))
        assert exc_info.value.request_type == request_type.value
        assert service.summary("EMP-001") == {"approved": 0, "pending": 0, "rejected": 0}

    def test_end_before_start_rejected(self, service):
        with pytest.raises(InvalidRequestError):
            service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 10), date(2024, 1, 9))

    def test_submission_logged(self, service, captured_logs):
        service.submit("EMP-001", RequestType.CLAIM, date(2024, 1, 8), amount=Decimal("25000"))

        records = [r for r in captured_logs() if r["message"] == "request_submitted"]
        assert records[0]["employee_id"] == "EMP-001"
        assert records[0]["amount"] == "25000"


# ===========================================================================
# Sick auto-approval
# ===========================================================================


class TestSickAutoApproval:

    def test_single_sick_day_auto_approved(self, service):
        request = service.submit("EMP-001", RequestType.SICK, date(2024, 1, 2))

        assert request.status is RequestStatus.APPROVED
        assert request.auto_approved
        assert request.decided_by is None

    def test_limit_per_month(self, service):
        first = service.submit("EMP-001", RequestType.SICK, date(2024, 1, 2))
        second = service.submit("EMP-001", RequestType.SICK, date(2024, 1, 3), date(2024, 1, 4))
        # Three approved sick days already taken this month
        third = service.submit("EMP-001", RequestType.SICK, date(2024, 1, 10))

        assert first.auto_approved and second.auto_approved
        assert third.status is RequestStatus.PENDING
        assert not third.auto_approved

    def test_new_month_resets_limit(self, service):
        service.submit("EMP-001", RequestType.SICK, date(2024, 1, 2), date(2024, 1, 4))
        request = service.submit("EMP-001", RequestType.SICK, date(2024, 2, 1))
        assert request.auto_approved

    def test_pending_and_other_employees_not_counted(self, service):
        service.submit("EMP-002", RequestType.SICK, date(2024, 1, 1), date(2024, 1, 5))
        service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 1), date(2024, 1, 5))
        request = service.submit("EMP-001", RequestType.SICK, date(2024, 1, 8))
        assert request.auto_approved

    def test_zero_limit_disables_auto_approval(self, session, workforce_config, deterministic_clock):
        config = replace(
            workforce_config,
            requests=replace(workforce_config.requests, sick_auto_approve_max_days=0),
        )
        service = RequestService(session, config, clock=deterministic_clock)
        assert service.submit("EMP-001", RequestType.SICK, date(2024, 1, 2)).status is RequestStatus.PENDING

    def test_leave_never_auto_approved(self, service):
        assert service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 2)).status is RequestStatus.PENDING


# ===========================================================================
# Decisions
# ===========================================================================


class TestDecisions:

    def test_approve(self, service, test_actor_id, deterministic_clock):
        request = service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 8))
        approved = service.approve(request.request_id, test_actor_id)

        assert approved.status is RequestStatus.APPROVED
        assert approved.decided_by == test_actor_id
        assert approved.decided_at == deterministic_clock.now()
        assert not approved.auto_approved
        assert service.get(request.request_id).status is RequestStatus.APPROVED

    def test_reject_with_reason(self, service, test_actor_id):
        request = service.submit("EMP-001", RequestType.CLAIM, date(2024, 1, 8), amount=Decimal("10"))
        rejected = service.reject(request.request_id, test_actor_id, "No receipt")

        assert rejected.status is RequestStatus.REJECTED
        assert service.get(request.request_id).rejection_reason == "No receipt"

    def test_decided_request_cannot_change(self, service, test_actor_id):
        request = service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 8))
        service.reject(request.request_id, test_actor_id, "Busy week")

        with pytest.raises(InvalidRequestTransitionError):
            service.approve(request.request_id, test_actor_id)
        assert service.get(request.request_id).status is RequestStatus.REJECTED

    def test_auto_approved_sick_cannot_be_rejected(self, service, test_actor_id):
        request = service.submit("EMP-001", RequestType.SICK, date(2024, 1, 2))
        with pytest.raises(InvalidRequestTransitionError):
            service.reject(request.request_id, test_actor_id)

    def test_unknown_request(self, service, test_actor_id):
        with pytest.raises(RequestNotFoundError):
            service.approve(uuid4(), test_actor_id)

    def test_decision_logged(self, service, test_actor_id, captured_logs):
        request = service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 8))
        service.approve(request.request_id, test_actor_id)

        assert any(
            r["message"] == "request_approved" and r["request_id"] == str(request.request_id)
            for r in captured_logs()
        )


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:

    def test_requests_for_period_by_overlap(self, service):
        spanning = service.submit("EMP-001", RequestType.LEAVE, date(2023, 12, 28), date(2024, 1, 2))
        inside = service.submit("EMP-001", RequestType.CLAIM, date(2024, 1, 20), amount=Decimal("5"))
        service.submit("EMP-001", RequestType.LEAVE, date(2024, 2, 1))
        service.submit("EMP-002", RequestType.LEAVE, date(2024, 1, 10))

        found = service.requests_for_period("EMP-001", PayrollPeriod(2024, 1))
        assert [r.request_id for r in found] == [spanning.request_id, inside.request_id]

    def test_summary(self, service, test_actor_id):
        service.submit("EMP-001", RequestType.SICK, date(2024, 1, 2))
        pending = service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 8))
        rejected = service.submit("EMP-001", RequestType.LEAVE, date(2024, 1, 9))
        service.reject(rejected.request_id, test_actor_id)

        assert service.summary("EMP-001") == {"approved": 1, "pending": 1, "rejected": 1}
        assert pending.status is RequestStatus.PENDING

    def test_summary_empty(self, service):
        assert service.summary("EMP-404") == {"approved": 0, "pending": 0, "rejected": 0}
