"""
Attendance Module Service (``workforce_modules.attendance.service``).

Responsibility
--------------
Daily check-in / check-out gated by the configured geofences, and the
period queries payroll reads.  Distance math lives in
``workforce_engines.geofence``; shift length in
``workforce_engines.timekeeping``.

Invariants enforced
-------------------
* At most one attendance record per employee per day.
* Check-in beyond the ``check_in`` fence is rejected, never adjusted.
* ``total_minutes`` is stamped once, at check-out, from the clock.
* Each mutating method commits on success and rolls back on failure.

Failure modes
-------------
* ``OutsideGeofenceError`` -- position outside the fence radius.
* ``AlreadyCheckedInError`` -- a record for today already exists.
* ``NotCheckedInError`` -- no open record for today at check-out.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from workforce_config.bridges import build_geofence
from workforce_config.schema import WorkforceConfiguration
from workforce_engines.geofence import check_geofence
from workforce_engines.timekeeping import minutes_to_hours, shift_minutes, total_worked_minutes
from workforce_kernel.domain.clock import Clock, SystemClock
from workforce_kernel.exceptions import (
    AlreadyCheckedInError,
    NotCheckedInError,
    OutsideGeofenceError,
)
from workforce_kernel.logging_config import LogContext, get_logger
from workforce_modules._service_helpers import employee_actor_id
from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.attendance.orm import AttendanceRecordModel
from workforce_modules.payroll.models import PayrollPeriod

logger = get_logger("modules.attendance.service")

CHECK_IN_FENCE = "check_in"
WORKPLACE_FENCE = "workplace"


class AttendanceService:
    """Records daily shifts for employees."""

    def __init__(
        self,
        session: Session,
        config: WorkforceConfiguration,
        clock: Clock | None = None,
    ):
        self._session = session
        self._config = config
        self._clock = clock or SystemClock()

    def is_within_workplace(self, latitude: float, longitude: float) -> bool:
        """Whether a position lies inside the wider ``workplace`` fence."""
        fence = build_geofence(self._config, WORKPLACE_FENCE)
        return check_geofence(fence, latitude, longitude).within

    def check_in(
        self,
        employee_id: str,
        latitude: float,
        longitude: float,
        geofence: str = CHECK_IN_FENCE,
    ) -> AttendanceRecord:
        """
        Open today's attendance record at the current clock time.

        Raises:
            OutsideGeofenceError: Position beyond the fence radius.
            AlreadyCheckedInError: A record for today already exists.
        """
        now = self._clock.now()
        work_date = now.date()

        with LogContext.bind(employee_id=employee_id):
            check = check_geofence(
                build_geofence(self._config, geofence), latitude, longitude,
            )
            if not check.within:
                logger.warning("check_in_outside_geofence", extra={
                    "geofence": geofence,
                    "distance_meters": round(check.distance_meters, 1),
                    "radius_meters": check.geofence.radius_meters,
                })
                raise OutsideGeofenceError(
                    geofence, check.distance_meters, check.geofence.radius_meters,
                )

            try:
                if self._find(employee_id, work_date) is not None:
                    raise AlreadyCheckedInError(employee_id, work_date.isoformat())

                record = AttendanceRecord(
                    employee_id=employee_id,
                    work_date=work_date,
                    check_in=now,
                    check_in_latitude=latitude,
                    check_in_longitude=longitude,
                )
                orm_record = AttendanceRecordModel.from_dto(record, employee_actor_id(employee_id))
                self._session.add(orm_record)
                self._session.commit()

                logger.info("checked_in", extra={
                    "work_date": work_date.isoformat(),
                    "distance_meters": round(check.distance_meters, 1),
                })
                return orm_record.to_dto()
            except Exception:
                self._session.rollback()
                raise

    def check_out(
        self,
        employee_id: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> AttendanceRecord:
        """
        Close today's record and stamp its worked minutes.

        Raises:
            NotCheckedInError: No open record exists for today.
        """
        now = self._clock.now()
        work_date = now.date()

        with LogContext.bind(employee_id=employee_id):
            try:
                orm_record = self._find(employee_id, work_date)
                if orm_record is None or orm_record.check_out is not None:
                    raise NotCheckedInError(employee_id, work_date.isoformat())

                minutes = shift_minutes(orm_record.to_dto().check_in, now)
                orm_record.check_out = now
                orm_record.total_minutes = minutes
                orm_record.check_out_latitude = latitude
                orm_record.check_out_longitude = longitude
                self._session.commit()

                logger.info("checked_out", extra={
                    "work_date": work_date.isoformat(),
                    "total_minutes": minutes,
                })
                return orm_record.to_dto()
            except Exception:
                self._session.rollback()
                raise

    def records_for_period(
        self,
        employee_id: str,
        period: PayrollPeriod,
    ) -> list[AttendanceRecord]:
        rows = (
            self._session.query(AttendanceRecordModel)
            .filter(
                AttendanceRecordModel.employee_id == employee_id,
                AttendanceRecordModel.work_date >= period.start,
                AttendanceRecordModel.work_date <= period.end,
            )
            .order_by(AttendanceRecordModel.work_date)
            .all()
        )
        return [row.to_dto() for row in rows]

    def monthly_hours(self, employee_id: str, period: PayrollPeriod) -> Decimal:
        """Worked hours in the period; open shifts count zero."""
        return minutes_to_hours(
            total_worked_minutes(self.records_for_period(employee_id, period))
        )

    def _find(self, employee_id: str, work_date: date) -> AttendanceRecordModel | None:
        return (
            self._session.query(AttendanceRecordModel)
            .filter_by(employee_id=employee_id, work_date=work_date)
            .first()
        )
