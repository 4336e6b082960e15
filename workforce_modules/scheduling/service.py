"""
Scheduling Module Service (``workforce_modules.scheduling.service``).

Responsibility
--------------
Creating and editing planned shifts, and the per-employee and per-day
views of the schedule.

Invariants enforced
-------------------
* At most one shift per employee per day.
* A shift ends after it starts; type defaults come from ``SHIFT_TIMES``.
* Changing a shift's type without giving times resets them to the new
  type's standard hours.
* Each mutating method commits on success and rolls back on failure.

Failure modes
-------------
* ``InvalidShiftError`` -- times out of order or an unknown field.
* ``ShiftConflictError`` -- the employee already has a shift that day.
* ``ShiftNotFoundError`` -- unknown shift id.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from workforce_kernel.domain.clock import Clock, SystemClock
from workforce_kernel.exceptions import (
    InvalidShiftError,
    ShiftConflictError,
    ShiftNotFoundError,
)
from workforce_kernel.logging_config import LogContext, get_logger
from workforce_modules.scheduling.models import Shift, ShiftType
from workforce_modules.scheduling.orm import ShiftModel

logger = get_logger("modules.scheduling.service")

_UPDATABLE_FIELDS = frozenset({
    "shift_date", "shift_type", "start_time", "end_time", "is_published",
})


class SchedulingService:
    """Plans shifts for employees."""

    def __init__(self, session: Session, clock: Clock | None = None):
        self._session = session
        self._clock = clock or SystemClock()

    # =========================================================================
    # Queries
    # =========================================================================

    def employee_shifts(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
    ) -> list[Shift]:
        """Shifts of one employee between two dates inclusive, by date."""
        rows = (
            self._session.query(ShiftModel)
            .filter(
                ShiftModel.employee_id == employee_id,
                ShiftModel.shift_date >= start_date,
                ShiftModel.shift_date <= end_date,
            )
            .order_by(ShiftModel.shift_date)
            .all()
        )
        return [row.to_dto() for row in rows]

    def today_shift(self, employee_id: str) -> Shift | None:
        row = self._find(employee_id, self._clock.now().date())
        return row.to_dto() if row is not None else None

    def shifts_by_date(self, shift_date: date) -> list[Shift]:
        """Everyone's shifts on one day, earliest start first."""
        rows = (
            self._session.query(ShiftModel)
            .filter(ShiftModel.shift_date == shift_date)
            .order_by(ShiftModel.start_time, ShiftModel.employee_id)
            .all()
        )
        return [row.to_dto() for row in rows]

    def get(self, shift_id: UUID) -> Shift:
        return self._get_model(shift_id).to_dto()

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_shift(
        self,
        employee_id: str,
        shift_date: date,
        shift_type: ShiftType | str,
        actor_id: UUID,
        start_time=None,
        end_time=None,
        is_published: bool = False,
    ) -> Shift:
        """
        Plan a shift.

        Raises:
            InvalidShiftError: Unknown type or times out of order.
            ShiftConflictError: A shift already exists for that day.
        """
        shift = self._build(
            employee_id=employee_id,
            shift_date=shift_date,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            is_published=is_published,
        )

        with LogContext.bind(employee_id=employee_id):
            try:
                if self._find(employee_id, shift_date) is not None:
                    raise ShiftConflictError(employee_id, shift_date.isoformat())

                orm_shift = ShiftModel.from_dto(shift, actor_id)
                self._session.add(orm_shift)
                self._session.commit()

                logger.info("shift_created", extra={
                    "shift_id": str(orm_shift.id),
                    "shift_date": shift_date.isoformat(),
                    "shift_type": shift.shift_type.value,
                })
                return orm_shift.to_dto()
            except Exception:
                self._session.rollback()
                raise

    def update_shift(self, shift_id: UUID, actor_id: UUID, **changes: Any) -> Shift:
        """
        Apply ``changes`` to a shift.

        Raises:
            ShiftNotFoundError: Unknown id.
            InvalidShiftError: Unknown field or resulting times out of order.
            ShiftConflictError: Moving onto a day that already has a shift.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise InvalidShiftError(f"cannot update {', '.join(sorted(unknown))}")

        try:
            orm_shift = self._get_model(shift_id)
            current = orm_shift.to_dto()

            if "shift_type" in changes:
                try:
                    new_type = ShiftType(changes["shift_type"])
                except ValueError:
                    raise InvalidShiftError(f"unknown shift type {changes['shift_type']!r}") from None
                if new_type is not current.shift_type:
                    changes.setdefault("start_time", None)
                    changes.setdefault("end_time", None)
            updated = self._build(**{
                "employee_id": current.employee_id,
                "shift_date": current.shift_date,
                "shift_type": current.shift_type,
                "start_time": current.start_time,
                "end_time": current.end_time,
                "is_published": current.is_published,
                **changes,
            })

            with LogContext.bind(employee_id=current.employee_id):
                if updated.shift_date != current.shift_date:
                    if self._find(updated.employee_id, updated.shift_date) is not None:
                        raise ShiftConflictError(
                            updated.employee_id, updated.shift_date.isoformat(),
                        )

                orm_shift.shift_date = updated.shift_date
                orm_shift.shift_type = updated.shift_type.value
                orm_shift.start_time = updated.start_time
                orm_shift.end_time = updated.end_time
                orm_shift.is_published = updated.is_published
                orm_shift.updated_by_id = actor_id
                self._session.commit()

                logger.info("shift_updated", extra={
                    "shift_id": str(shift_id),
                    "fields": sorted(changes),
                })
            return replace(updated, id=shift_id)
        except Exception:
            self._session.rollback()
            raise

    # =========================================================================
    # Internals
    # =========================================================================

    @staticmethod
    def _build(**fields: Any) -> Shift:
        try:
            return Shift(**fields)
        except ValueError as exc:
            raise InvalidShiftError(str(exc)) from None

    def _get_model(self, shift_id: UUID) -> ShiftModel:
        row = self._session.get(ShiftModel, shift_id)
        if row is None:
            raise ShiftNotFoundError(str(shift_id))
        return row

    def _find(self, employee_id: str, shift_date: date) -> ShiftModel | None:
        return (
            self._session.query(ShiftModel)
            .filter_by(employee_id=employee_id, shift_date=shift_date)
            .first()
        )
