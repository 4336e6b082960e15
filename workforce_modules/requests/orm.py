"""
Request ORM Persistence Models (``workforce_modules.requests.orm``).

Responsibility:
    SQLAlchemy model for ``LeaveRequest`` with ``to_dto()`` /
    ``from_dto()`` conversion.  Status changes go through
    ``RequestService`` so the pending -> approved/rejected rule of
    ``LeaveRequest.transition`` is always applied before persisting.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workforce_kernel.db.base import TrackedBase, to_column_scale


class LeaveRequestModel(TrackedBase):
    """ORM model for ``LeaveRequest`` (leave, sick or claim)."""

    __tablename__ = "employee_requests"

    employee_id: Mapped[str] = mapped_column(String(100), nullable=False)
    request_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal | None] = mapped_column(nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    auto_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    decided_by: Mapped[UUID | None] = mapped_column(nullable=True)
    decided_at: Mapped[datetime | None] = mapped_column(nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_request_employee_type_status", "employee_id", "request_type", "status"),
        Index("idx_request_start_date", "start_date"),
    )

    def to_dto(self):
        from workforce_modules.requests.models import LeaveRequest, RequestStatus, RequestType
        decided_at = self.decided_at
        if decided_at is not None and decided_at.tzinfo is None:
            decided_at = decided_at.replace(tzinfo=timezone.utc)
        return LeaveRequest(
            request_id=self.id,
            employee_id=self.employee_id,
            request_type=RequestType(self.request_type),
            status=RequestStatus(self.status),
            start_date=self.start_date,
            end_date=self.end_date,
            amount=self.amount,
            reason=self.reason,
            auto_approved=self.auto_approved,
            decided_by=self.decided_by,
            decided_at=decided_at,
            rejection_reason=self.rejection_reason,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "LeaveRequestModel":
        return cls(
            id=dto.request_id,
            employee_id=dto.employee_id,
            request_type=dto.request_type.value,
            status=dto.status.value,
            start_date=dto.start_date,
            end_date=dto.end_date,
            amount=to_column_scale(dto.amount),
            reason=dto.reason,
            auto_approved=dto.auto_approved,
            decided_by=dto.decided_by,
            decided_at=dto.decided_at,
            rejection_reason=dto.rejection_reason,
            created_by_id=created_by_id,
        )

    def apply_decision(self, dto, actor_id: UUID | None) -> None:
        """Copy the decision fields of a transitioned DTO onto this row."""
        self.status = dto.status.value
        self.auto_approved = dto.auto_approved
        self.decided_by = dto.decided_by
        self.decided_at = dto.decided_at
        self.rejection_reason = dto.rejection_reason
        self.updated_by_id = actor_id

    def __repr__(self) -> str:
        return (
            f"<LeaveRequestModel {self.employee_id} {self.request_type} "
            f"{self.start_date}..{self.end_date} ({self.status})>"
        )
