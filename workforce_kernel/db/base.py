"""
Module: workforce_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.
    Provides the UUID primary key convention, the type annotation map for
    consistent column types, and ``TrackedBase`` for audit timestamps.
Architecture position: Kernel > DB.  Lowest-level import target for every
    ``orm.py`` in ``workforce_modules``.  MUST NOT import from modules,
    engines or config.

Invariants enforced:
    - UUID primary keys stored as String(36) so SQLite and PostgreSQL
      behave the same.
    - Decimal maps to Numeric(38, 9).  NEVER use float for money.
    - ORM ``from_dto`` methods round money half up to the column scale
      (``to_column_scale``), so a stored row reads back equal to what was
      written.
    - TrackedBase records created_at, updated_at, created_by_id and
      updated_by_id on every row.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import Date, DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


DECIMAL_SCALE = 9
_SCALE_QUANTUM = Decimal(1).scaleb(-DECIMAL_SCALE)


def to_column_scale(value: Decimal | None) -> Decimal | None:
    """Round ``value`` half up to the scale of a Numeric(38, 9) column."""
    if value is None:
        return None
    return value.quantize(_SCALE_QUANTUM, rounding=ROUND_HALF_UP)


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Converts UUID -> str on bind and str -> UUID on load.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return PyUUID(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - id is always a uuid4-generated UUID stored as String(36).
        - Decimal maps to Numeric(38, 9).
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, DECIMAL_SCALE),
        datetime: DateTime(timezone=True),
        date: Date,
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )


class TrackedBase(Base):
    """
    Abstract base with audit timestamp and actor tracking.

    Guarantees:
        - created_at is set to server NOW() on INSERT.
        - updated_at is set on INSERT and refreshed on every UPDATE.
        - created_by_id is required -- every record has a creator.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    created_by_id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        nullable=False,
    )

    updated_by_id: Mapped[PyUUID | None] = mapped_column(
        UUIDString(),
        nullable=True,
    )
