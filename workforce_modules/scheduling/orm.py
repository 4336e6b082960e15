"""
Scheduling ORM Persistence Models (``workforce_modules.scheduling.orm``).

Responsibility:
    SQLAlchemy model for ``Shift`` with ``to_dto()`` / ``from_dto()``
    conversion.

Invariants enforced:
    - One shift per employee per day (uq_shift_employee_date).
    - ``start_time`` / ``end_time`` are always stored; type defaults are
      resolved on the DTO before insert.
"""

from datetime import date, time
from uuid import UUID

from sqlalchemy import Boolean, Date, Index, String, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from workforce_kernel.db.base import TrackedBase


class ShiftModel(TrackedBase):
    """ORM model for ``Shift``."""

    __tablename__ = "shifts"

    employee_id: Mapped[str] = mapped_column(String(100), nullable=False)
    shift_date: Mapped[date] = mapped_column(Date, nullable=False)
    shift_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "shift_date", name="uq_shift_employee_date"),
        Index("idx_shift_date", "shift_date"),
    )

    def to_dto(self):
        from workforce_modules.scheduling.models import Shift, ShiftType
        return Shift(
            id=self.id,
            employee_id=self.employee_id,
            shift_date=self.shift_date,
            shift_type=ShiftType(self.shift_type),
            start_time=self.start_time,
            end_time=self.end_time,
            is_published=self.is_published,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "ShiftModel":
        kwargs = {"id": dto.id} if dto.id is not None else {}
        return cls(
            **kwargs,
            employee_id=dto.employee_id,
            shift_date=dto.shift_date,
            shift_type=dto.shift_type.value,
            start_time=dto.start_time,
            end_time=dto.end_time,
            is_published=dto.is_published,
            created_by_id=created_by_id,
        )

    def __repr__(self) -> str:
        return (
            f"<ShiftModel {self.employee_id} {self.shift_date} "
            f"{self.shift_type} {self.start_time}-{self.end_time}>"
        )
