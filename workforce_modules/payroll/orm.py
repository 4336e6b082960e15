"""
Payroll ORM Persistence Models (``workforce_modules.payroll.orm``).

Responsibility:
    SQLAlchemy models persisting the frozen DTOs of
    ``workforce_modules.payroll.models``.  Each class provides
    ``to_dto()`` / ``from_dto()`` round-trip conversion.

Architecture position:
    **Modules layer** -- persistence companions to the pure DTO models.
    Inherits ``TrackedBase`` (id, created_at, updated_at, created_by_id,
    updated_by_id).  The payroll engines never see these classes.

Invariants enforced:
    - Monetary fields and hours use Decimal (Numeric(38, 9)), rounded half
      up to nine places on the way in.
    - Enum fields are stored as String(50) holding the enum .value.
    - One line item per employee per run (uq_payroll_line_item_run_employee).
    - One profile per employee id (uq_employment_profile_employee).
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from workforce_kernel.db.base import TrackedBase, to_column_scale

# ---------------------------------------------------------------------------
# EmploymentProfileModel
# ---------------------------------------------------------------------------


class EmploymentProfileModel(TrackedBase):
    """
    ORM model for ``EmploymentProfile``.

    Mutated only by administrative edit; a payroll run reads a snapshot.
    """

    __tablename__ = "employment_profiles"

    employee_id: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    employment_type: Mapped[str] = mapped_column(String(50), nullable=False)
    base_salary: Mapped[Decimal | None] = mapped_column(nullable=True)
    hourly_rate: Mapped[Decimal | None] = mapped_column(nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", name="uq_employment_profile_employee"),
        Index("idx_employment_profile_active", "is_active"),
    )

    def to_dto(self):
        from workforce_modules.payroll.models import EmploymentProfile, EmploymentType
        return EmploymentProfile(
            employee_id=self.employee_id,
            name=self.name,
            employment_type=EmploymentType(self.employment_type),
            base_salary=self.base_salary,
            hourly_rate=self.hourly_rate,
            is_active=self.is_active,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "EmploymentProfileModel":
        return cls(
            employee_id=dto.employee_id,
            name=dto.name,
            employment_type=dto.employment_type.value,
            base_salary=to_column_scale(dto.base_salary),
            hourly_rate=to_column_scale(dto.hourly_rate),
            is_active=dto.is_active,
            created_by_id=created_by_id,
        )

    def __repr__(self) -> str:
        return (
            f"<EmploymentProfileModel {self.employee_id}: "
            f"{self.name} ({self.employment_type})>"
        )


# ---------------------------------------------------------------------------
# PayrollRunModel
# ---------------------------------------------------------------------------


class PayrollRunModel(TrackedBase):
    """
    ORM model for ``PayrollRun``.

    ``total_payout`` is stored for reporting; it always equals the sum of
    the line items' ``net_pay``.
    """

    __tablename__ = "payroll_runs"

    period_year: Mapped[int] = mapped_column(Integer, nullable=False)
    period_month: Mapped[int] = mapped_column(Integer, nullable=False)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    generated_at: Mapped[datetime] = mapped_column(nullable=False)
    total_payout: Mapped[Decimal] = mapped_column(nullable=False)

    line_items: Mapped[list["PayrollLineItemModel"]] = relationship(
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="PayrollLineItemModel.employee_id",
    )

    __table_args__ = (
        Index("idx_payroll_run_period", "period_year", "period_month"),
    )

    def to_dto(self):
        from workforce_modules.payroll.models import (
            PayrollModel,
            PayrollPeriod,
            PayrollRun,
        )
        generated_at = self.generated_at
        if generated_at.tzinfo is None:
            generated_at = generated_at.replace(tzinfo=timezone.utc)
        return PayrollRun(
            run_id=self.id,
            period=PayrollPeriod(self.period_year, self.period_month),
            model=PayrollModel(self.model),
            generated_at=generated_at,
            line_items=tuple(item.to_dto() for item in self.line_items),
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "PayrollRunModel":
        line_items = [
            PayrollLineItemModel.from_dto(item, created_by_id)
            for item in dto.line_items
        ]
        return cls(
            id=dto.run_id,
            period_year=dto.period.year,
            period_month=dto.period.month,
            model=dto.model.value,
            generated_at=dto.generated_at,
            total_payout=sum((item.net_pay for item in line_items), Decimal("0")),
            created_by_id=created_by_id,
            line_items=line_items,
        )

    def __repr__(self) -> str:
        return (
            f"<PayrollRunModel {self.period_year}-{self.period_month:02d} "
            f"({self.model}) total={self.total_payout}>"
        )


# ---------------------------------------------------------------------------
# PayrollLineItemModel
# ---------------------------------------------------------------------------


class PayrollLineItemModel(TrackedBase):
    """ORM model for ``PayrollLineItem`` -- one employee in one run."""

    __tablename__ = "payroll_line_items"

    run_id: Mapped[UUID] = mapped_column(ForeignKey("payroll_runs.id"), nullable=False)
    employee_id: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    employment_type: Mapped[str] = mapped_column(String(50), nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(nullable=False)
    total_attendance_hours: Mapped[Decimal] = mapped_column(nullable=False)
    approved_claims: Mapped[Decimal] = mapped_column(nullable=False)
    net_pay: Mapped[Decimal] = mapped_column(nullable=False)

    run: Mapped[PayrollRunModel] = relationship(back_populates="line_items")

    __table_args__ = (
        UniqueConstraint("run_id", "employee_id", name="uq_payroll_line_item_run_employee"),
        Index("idx_payroll_line_item_employee", "employee_id"),
    )

    def to_dto(self):
        from workforce_modules.payroll.models import EmploymentType, PayrollLineItem
        return PayrollLineItem(
            employee_id=self.employee_id,
            name=self.name,
            employment_type=EmploymentType(self.employment_type),
            base_salary=self.base_salary,
            total_attendance_hours=self.total_attendance_hours,
            approved_claims=self.approved_claims,
            net_pay=self.net_pay,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "PayrollLineItemModel":
        return cls(
            employee_id=dto.employee_id,
            name=dto.name,
            employment_type=dto.employment_type.value,
            base_salary=to_column_scale(dto.base_salary),
            total_attendance_hours=to_column_scale(dto.total_attendance_hours),
            approved_claims=to_column_scale(dto.approved_claims),
            net_pay=to_column_scale(dto.net_pay),
            created_by_id=created_by_id,
        )

    def __repr__(self) -> str:
        return f"<PayrollLineItemModel {self.employee_id}: net={self.net_pay}>"
