"""
Request Module Service (``workforce_modules.requests.service``).

Responsibility
--------------
Submission and approval of leave, sick and expense-claim requests.
Approved claims feed payroll as additions; approved leave and sick days
feed the prorated payroll model as absence.

Invariants enforced
-------------------
* Claims carry a positive amount; other request types carry none.
* Only pending requests can be approved or rejected
  (``LeaveRequest.transition``).
* A sick request is auto-approved while the employee's already approved
  sick days in the request's month stay below
  ``requests.sick_auto_approve_max_days``.
* Each mutating method commits on success and rolls back on failure.

Failure modes
-------------
* ``InvalidRequestError`` -- malformed submission.
* ``RequestNotFoundError`` -- unknown request id.
* ``InvalidRequestTransitionError`` -- request already decided.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from workforce_config.schema import WorkforceConfiguration
from workforce_kernel.domain.clock import Clock, SystemClock
from workforce_kernel.exceptions import InvalidRequestError, RequestNotFoundError
from workforce_kernel.logging_config import LogContext, get_logger
from workforce_modules._service_helpers import employee_actor_id
from workforce_modules.payroll.models import PayrollPeriod
from workforce_modules.requests.models import LeaveRequest, RequestStatus, RequestType
from workforce_modules.requests.orm import LeaveRequestModel

logger = get_logger("modules.requests.service")


class RequestService:
    """Submits and decides employee requests."""

    def __init__(
        self,
        session: Session,
        config: WorkforceConfiguration,
        clock: Clock | None = None,
    ):
        self._session = session
        self._config = config
        self._clock = clock or SystemClock()

    # =========================================================================
    # Submission
    # =========================================================================

    def submit(
        self,
        employee_id: str,
        request_type: RequestType | str,
        start_date: date,
        end_date: date | None = None,
        amount: Decimal | None = None,
        reason: str | None = None,
    ) -> LeaveRequest:
        """
        Create a pending request, auto-approving eligible sick requests.

        Raises:
            InvalidRequestError: Unknown type, claim without a positive
                numeric amount, an amount on a leave or sick request, or
                ``end_date`` before ``start_date``.
        """
        try:
            request_type = RequestType(request_type)
        except ValueError:
            raise InvalidRequestError(str(request_type), "unknown request type") from None

        if request_type is RequestType.CLAIM:
            if amount is None:
                raise InvalidRequestError(request_type.value, "claim amount must be positive")
            try:
                amount = Decimal(str(amount))
            except InvalidOperation:
                raise InvalidRequestError(request_type.value, "claim amount must be a number") from None
            if not amount.is_finite() or amount <= 0:
                raise InvalidRequestError(request_type.value, "claim amount must be positive")
        elif amount is not None:
            raise InvalidRequestError(request_type.value, "only claims carry an amount")
        if end_date is not None and end_date < start_date:
            raise InvalidRequestError(request_type.value, "end_date precedes start_date")

        now = self._clock.now()
        request = LeaveRequest(
            request_id=uuid4(),
            employee_id=employee_id,
            request_type=request_type,
            status=RequestStatus.PENDING,
            start_date=start_date,
            end_date=end_date,
            amount=amount,
            reason=reason,
        )

        with LogContext.bind(employee_id=employee_id):
            try:
                if request_type is RequestType.SICK and self._sick_auto_approvable(request):
                    request = request.transition(
                        RequestStatus.APPROVED, actor_id=None, at=now, auto_approved=True,
                    )

                self._session.add(
                    LeaveRequestModel.from_dto(request, employee_actor_id(employee_id))
                )
                self._session.commit()

                logger.info("request_submitted", extra={
                    "request_id": str(request.request_id),
                    "request_type": request_type.value,
                    "status": request.status.value,
                    "auto_approved": request.auto_approved,
                    "days": request.days,
                    "amount": str(request.amount) if request.amount is not None else None,
                })
                return request
            except Exception:
                self._session.rollback()
                raise

    def _sick_auto_approvable(self, request: LeaveRequest) -> bool:
        period = PayrollPeriod.containing(request.start_date)
        taken: set[date] = set()
        for row in self._query_overlapping(request.employee_id, period):
            if row.request_type == RequestType.SICK.value and row.status == RequestStatus.APPROVED.value:
                taken.update(row.to_dto().covered_dates(period.start, period.end))
        return len(taken) < self._config.requests.sick_auto_approve_max_days

    # =========================================================================
    # Decisions
    # =========================================================================

    def approve(self, request_id: UUID, actor_id: UUID) -> LeaveRequest:
        """
        Approve a pending request.

        Raises:
            RequestNotFoundError: Unknown id.
            InvalidRequestTransitionError: Request already decided.
        """
        return self._decide(request_id, RequestStatus.APPROVED, actor_id)

    def reject(self, request_id: UUID, actor_id: UUID, reason: str | None = None) -> LeaveRequest:
        """
        Reject a pending request.

        Raises:
            RequestNotFoundError: Unknown id.
            InvalidRequestTransitionError: Request already decided.
        """
        return self._decide(request_id, RequestStatus.REJECTED, actor_id, reason)

    def _decide(
        self,
        request_id: UUID,
        to_status: RequestStatus,
        actor_id: UUID,
        rejection_reason: str | None = None,
    ) -> LeaveRequest:
        try:
            orm_request = self._session.get(LeaveRequestModel, request_id)
            if orm_request is None:
                raise RequestNotFoundError(str(request_id))

            decided = orm_request.to_dto().transition(
                to_status,
                actor_id=actor_id,
                at=self._clock.now(),
                rejection_reason=rejection_reason,
            )
            orm_request.apply_decision(decided, actor_id)
            self._session.commit()

            logger.info(f"request_{to_status.value}", extra={
                "request_id": str(request_id),
                "employee_id": decided.employee_id,
                "request_type": decided.request_type.value,
                "actor_id": str(actor_id),
            })
            return decided
        except Exception:
            self._session.rollback()
            raise

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, request_id: UUID) -> LeaveRequest:
        orm_request = self._session.get(LeaveRequestModel, request_id)
        if orm_request is None:
            raise RequestNotFoundError(str(request_id))
        return orm_request.to_dto()

    def requests_for_period(
        self,
        employee_id: str,
        period: PayrollPeriod,
    ) -> list[LeaveRequest]:
        """Requests of one employee overlapping the period, oldest first."""
        return [row.to_dto() for row in self._query_overlapping(employee_id, period)]

    def summary(self, employee_id: str) -> dict[str, int]:
        """Request counts per status, e.g. ``{"approved": 2, "pending": 1, "rejected": 0}``."""
        counts = {status.value: 0 for status in RequestStatus}
        rows = (
            self._session.query(LeaveRequestModel.status)
            .filter(LeaveRequestModel.employee_id == employee_id)
            .all()
        )
        for (status,) in rows:
            counts[status] += 1
        return counts

    def _query_overlapping(self, employee_id: str, period: PayrollPeriod) -> list[LeaveRequestModel]:
        return (
            self._session.query(LeaveRequestModel)
            .filter(
                LeaveRequestModel.employee_id == employee_id,
                LeaveRequestModel.start_date <= period.end,
                LeaveRequestModel.end_date >= period.start,
            )
            .order_by(LeaveRequestModel.start_date, LeaveRequestModel.created_at)
            .all()
        )
