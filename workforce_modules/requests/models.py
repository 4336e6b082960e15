"""
Request Domain Models (``workforce_modules.requests.models``).

Responsibility
--------------
Leave, sick and expense-claim requests and their approval lifecycle.

Invariants enforced
-------------------
* ``pending -> approved`` and ``pending -> rejected`` are the only
  transitions; both targets are terminal.
* ``end_date`` defaults to ``start_date`` and never precedes it.
* Claim amounts are ``Decimal``.

Failure modes
-------------
* Any other transition raises ``InvalidRequestTransitionError``.
* ``end_date < start_date`` raises ``ValueError``.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from uuid import UUID

from workforce_kernel.exceptions import InvalidRequestTransitionError


class RequestType(Enum):
    """Kinds of employee request."""
    LEAVE = "leave"
    SICK = "sick"
    CLAIM = "claim"


class RequestStatus(Enum):
    """Request lifecycle states."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}

# Request types that represent time away from work
ABSENCE_TYPES = frozenset({RequestType.LEAVE, RequestType.SICK})


@dataclass(frozen=True)
class LeaveRequest:
    """A leave, sick or claim request over an inclusive day range."""
    request_id: UUID
    employee_id: str
    request_type: RequestType
    status: RequestStatus
    start_date: date
    end_date: date | None = None
    amount: Decimal | None = None  # claims only
    reason: str | None = None
    auto_approved: bool = False
    decided_by: UUID | None = None
    decided_at: datetime | None = None
    rejection_reason: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "request_type", RequestType(self.request_type))
        object.__setattr__(self, "status", RequestStatus(self.status))
        if self.end_date is None:
            object.__setattr__(self, "end_date", self.start_date)
        if self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} precedes start_date {self.start_date}"
            )
        if self.amount is not None and not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

    @property
    def is_approved(self) -> bool:
        return self.status is RequestStatus.APPROVED

    @property
    def is_approved_claim(self) -> bool:
        return self.is_approved and self.request_type is RequestType.CLAIM

    @property
    def is_approved_absence(self) -> bool:
        return self.is_approved and self.request_type in ABSENCE_TYPES

    @property
    def days(self) -> int:
        """Inclusive number of calendar days covered."""
        return (self.end_date - self.start_date).days + 1

    def covered_dates(self, start: date, end: date) -> list[date]:
        """Calendar days of this request falling inside ``[start, end]``."""
        first = max(self.start_date, start)
        last = min(self.end_date, end)
        if last < first:
            return []
        return [first + timedelta(days=i) for i in range((last - first).days + 1)]

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def transition(
        self,
        to_status: RequestStatus,
        *,
        actor_id: UUID | None,
        at: datetime,
        rejection_reason: str | None = None,
        auto_approved: bool = False,
    ) -> "LeaveRequest":
        """Return a copy moved to ``to_status``.

        Raises:
            InvalidRequestTransitionError: unless the request is pending.
        """
        if to_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidRequestTransitionError(
                str(self.request_id), self.status.value, to_status.value,
            )
        return replace(
            self,
            status=to_status,
            decided_by=actor_id,
            decided_at=at,
            rejection_reason=rejection_reason,
            auto_approved=auto_approved,
        )
