"""
Payroll Module Service (``workforce_modules.payroll.service``).

Responsibility
--------------
Orchestrates monthly payroll: selects each employee's attendance and
approved claims for the period, delegates the computation to
``workforce_engines.payroll`` under the configured model, assembles the
``PayrollRun``, exports it as CSV and persists it.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``PayrollService`` is the sole public
entry point for payroll operations.  It composes the pure engines
(``compute_payroll``, ``compute_prorated_payroll``), the pure CSV helper
and the payroll ORM models.

Invariants enforced
-------------------
* Each persisting method owns the transaction boundary
  (``commit`` on success, ``rollback`` and re-raise on exception).
* Exactly one payroll model runs per ``PayrollRun``; it comes from
  configuration, never from the caller.
* Line items are ordered by ``employee_id``.
* Missing pay figures or incomplete shifts never abort a run; they
  degrade to zero for the affected employee only.

Failure modes
-------------
* Unknown run id on ``load_run`` -> ``PayrollRunNotFoundError``.
* Unexpected exception during persistence -> session rolled back,
  exception re-raised.

Audit relevance
---------------
Structured log events at run start and completion carry the run id,
period, model, employee count and total payout.

Usage::

    service = PayrollService(session, get_active_config(), clock=clock)
    run = service.generate_monthly_payroll(PayrollPeriod(2024, 1), actor_id)
    csv_text = service.export_csv(run)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from workforce_config.bridges import payroll_model
from workforce_config.schema import WorkforceConfiguration
from workforce_engines.claims import select_approved_claims
from workforce_engines.payroll import compute_payroll, compute_prorated_payroll
from workforce_engines.timekeeping import records_in_period
from workforce_kernel.db.base import to_column_scale
from workforce_kernel.domain.clock import Clock, SystemClock
from workforce_kernel.exceptions import PayrollRunNotFoundError
from workforce_kernel.logging_config import LogContext, get_logger
from workforce_modules.attendance.models import AttendanceRecord
from workforce_modules.attendance.orm import AttendanceRecordModel
from workforce_modules.payroll.helpers import export_payroll_csv
from workforce_modules.payroll.models import (
    EmploymentProfile,
    PayrollLineItem,
    PayrollModel,
    PayrollPeriod,
    PayrollRun,
    ProratedPayrollBreakdown,
)
from workforce_modules.payroll.orm import EmploymentProfileModel, PayrollRunModel
from workforce_modules.requests.models import LeaveRequest
from workforce_modules.requests.orm import LeaveRequestModel

logger = get_logger("modules.payroll.service")


class PayrollService:
    """
    Computes, exports and persists monthly payroll runs.

    Contract
    --------
    * ``run_payroll``, ``prorated_breakdown`` and ``export_csv`` are pure
      with respect to the database: they read nothing and write nothing.
    * ``save_run``, ``save_profile`` and ``generate_monthly_payroll``
      commit on success and roll back on failure.

    Non-goals
    ---------
    * Does NOT mutate employment profiles during a run.
    * Does NOT convert currencies; amounts are summed verbatim.
    """

    def __init__(
        self,
        session: Session,
        config: WorkforceConfiguration,
        clock: Clock | None = None,
    ):
        self._session = session
        self._config = config
        self._clock = clock or SystemClock()

    @property
    def model(self) -> PayrollModel:
        return payroll_model(self._config)

    # =========================================================================
    # Computation (pure)
    # =========================================================================

    def run_payroll(
        self,
        period: PayrollPeriod,
        profiles: Iterable[EmploymentProfile],
        attendance: Sequence[AttendanceRecord],
        requests: Sequence[LeaveRequest],
    ) -> PayrollRun:
        """
        Compute one line item per profile for ``period``.

        ``attendance`` and ``requests`` may span several employees and
        months; each employee only sees their own records inside the
        period.
        """
        run_id = uuid4()
        model = self.model

        with LogContext.bind(payroll_run_id=str(run_id)):
            logger.info("payroll_run_started", extra={
                "period": period.label,
                "payroll_model": model.value,
            })

            line_items: list[PayrollLineItem] = []
            for profile in sorted(profiles, key=lambda p: p.employee_id):
                line_items.append(
                    self._line_item(model, profile, period, attendance, requests)
                )

            run = PayrollRun(
                run_id=run_id,
                period=period,
                model=model,
                generated_at=self._clock.now(),
                line_items=tuple(line_items),
            )

            logger.info("payroll_run_completed", extra={
                "period": period.label,
                "payroll_model": model.value,
                "employee_count": run.employee_count,
                "total_payout": str(run.total_payout),
            })

        return run

    def _line_item(
        self,
        model: PayrollModel,
        profile: EmploymentProfile,
        period: PayrollPeriod,
        attendance: Sequence[AttendanceRecord],
        requests: Sequence[LeaveRequest],
    ) -> PayrollLineItem:
        match model:
            case PayrollModel.MONTHLY_AGGREGATE:
                return compute_payroll(
                    profile,
                    records_in_period(attendance, profile.employee_id, period),
                    select_approved_claims(requests, profile.employee_id, period),
                    period,
                )
            case PayrollModel.PRORATED_ATTENDANCE:
                return self.prorated_breakdown(
                    profile, period, attendance, requests,
                ).line_item
            case _:
                raise ValueError(f"Unknown payroll model: {model}")

    def prorated_breakdown(
        self,
        profile: EmploymentProfile,
        period: PayrollPeriod,
        attendance: Sequence[AttendanceRecord],
        requests: Sequence[LeaveRequest],
    ) -> ProratedPayrollBreakdown:
        """Intermediate figures of the prorated-attendance model for one employee."""
        own_requests = [r for r in requests if r.employee_id == profile.employee_id]
        return compute_prorated_payroll(
            profile,
            records_in_period(attendance, profile.employee_id, period),
            own_requests,
            select_approved_claims(own_requests, profile.employee_id, period),
            period,
            working_minutes_per_day=self._config.payroll.working_minutes_per_day,
        )

    def export_csv(self, run: PayrollRun) -> str:
        csv_text = export_payroll_csv(run.line_items)
        logger.info("payroll_csv_exported", extra={
            "payroll_run_id": str(run.run_id),
            "rows": run.employee_count,
        })
        return csv_text

    # =========================================================================
    # Persistence
    # =========================================================================

    def save_profile(self, profile: EmploymentProfile, actor_id: UUID) -> None:
        """Insert or update the employment profile of ``profile.employee_id``."""
        try:
            orm_profile = (
                self._session.query(EmploymentProfileModel)
                .filter_by(employee_id=profile.employee_id)
                .first()
            )
            created = orm_profile is None
            if created:
                self._session.add(EmploymentProfileModel.from_dto(profile, actor_id))
            else:
                orm_profile.name = profile.name
                orm_profile.employment_type = profile.employment_type.value
                orm_profile.base_salary = to_column_scale(profile.base_salary)
                orm_profile.hourly_rate = to_column_scale(profile.hourly_rate)
                orm_profile.is_active = profile.is_active
                orm_profile.updated_by_id = actor_id
            self._session.commit()

            logger.info("employment_profile_saved", extra={
                "employee_id": profile.employee_id,
                "employment_type": profile.employment_type.value,
                "profile_created": created,
            })
        except Exception:
            self._session.rollback()
            raise

    def save_run(self, run: PayrollRun, actor_id: UUID) -> None:
        try:
            self._session.add(PayrollRunModel.from_dto(run, actor_id))
            self._session.commit()

            logger.info("payroll_run_saved", extra={
                "payroll_run_id": str(run.run_id),
                "period": run.period.label,
                "employee_count": run.employee_count,
            })
        except Exception:
            self._session.rollback()
            raise

    def load_run(self, run_id: UUID) -> PayrollRun:
        """
        Load a saved run.

        Raises:
            PayrollRunNotFoundError: If no run has that id.
        """
        orm_run = self._session.get(PayrollRunModel, run_id)
        if orm_run is None:
            raise PayrollRunNotFoundError(str(run_id))
        return orm_run.to_dto()

    def generate_monthly_payroll(
        self,
        period: PayrollPeriod,
        actor_id: UUID,
    ) -> PayrollRun:
        """
        Run payroll for every active stored profile and save the result.

        Attendance is selected by ``work_date`` inside the period; requests
        by any overlap with it.
        """
        try:
            profiles = [
                row.to_dto()
                for row in self._session.query(EmploymentProfileModel)
                .filter_by(is_active=True)
                .all()
            ]
            attendance = [
                row.to_dto()
                for row in self._session.query(AttendanceRecordModel)
                .filter(
                    AttendanceRecordModel.work_date >= period.start,
                    AttendanceRecordModel.work_date <= period.end,
                )
                .all()
            ]
            requests = [
                row.to_dto()
                for row in self._session.query(LeaveRequestModel)
                .filter(
                    LeaveRequestModel.start_date <= period.end,
                    LeaveRequestModel.end_date >= period.start,
                )
                .all()
            ]
        except Exception:
            self._session.rollback()
            raise

        run = self.run_payroll(period, profiles, attendance, requests)
        self.save_run(run, actor_id)
        return run
