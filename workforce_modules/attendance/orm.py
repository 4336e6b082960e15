"""
Attendance ORM Persistence Models (``workforce_modules.attendance.orm``).

Responsibility:
    SQLAlchemy model for ``AttendanceRecord`` with ``to_dto()`` /
    ``from_dto()`` conversion.

Invariants enforced:
    - One record per employee per day (uq_attendance_employee_date).
    - ``total_minutes`` is 0 until check-out stamps it.
    - Timestamps are returned timezone-aware (UTC) even on backends that
      drop tzinfo, so shift arithmetic never mixes naive and aware values.
"""

from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import Date, Float, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from workforce_kernel.db.base import TrackedBase


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class AttendanceRecordModel(TrackedBase):
    """ORM model for ``AttendanceRecord``."""

    __tablename__ = "attendance_records"

    employee_id: Mapped[str] = mapped_column(String(100), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_in: Mapped[datetime | None] = mapped_column(nullable=True)
    check_out: Mapped[datetime | None] = mapped_column(nullable=True)
    total_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    check_in_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    check_in_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    check_out_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    check_out_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "work_date", name="uq_attendance_employee_date"),
        Index("idx_attendance_work_date", "work_date"),
    )

    def to_dto(self):
        from workforce_modules.attendance.models import AttendanceRecord
        return AttendanceRecord(
            id=self.id,
            employee_id=self.employee_id,
            work_date=self.work_date,
            check_in=_as_utc(self.check_in),
            check_out=_as_utc(self.check_out),
            total_minutes=self.total_minutes,
            check_in_latitude=self.check_in_latitude,
            check_in_longitude=self.check_in_longitude,
            check_out_latitude=self.check_out_latitude,
            check_out_longitude=self.check_out_longitude,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "AttendanceRecordModel":
        kwargs = {"id": dto.id} if dto.id is not None else {}
        return cls(
            **kwargs,
            employee_id=dto.employee_id,
            work_date=dto.work_date,
            check_in=dto.check_in,
            check_out=dto.check_out,
            total_minutes=dto.total_minutes,
            check_in_latitude=dto.check_in_latitude,
            check_in_longitude=dto.check_in_longitude,
            check_out_latitude=dto.check_out_latitude,
            check_out_longitude=dto.check_out_longitude,
            created_by_id=created_by_id,
        )

    def __repr__(self) -> str:
        return (
            f"<AttendanceRecordModel {self.employee_id} {self.work_date} "
            f"minutes={self.total_minutes}>"
        )
