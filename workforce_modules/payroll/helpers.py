"""
Payroll Helpers (``workforce_modules.payroll.helpers``).

Responsibility
--------------
Pure formatting of payroll runs for export.  No I/O, no session, no
clock.  Called by ``PayrollService.export_csv`` or from tests.

Invariants enforced
-------------------
* Numeric fields are never quoted; names are quoted only when they
  contain a delimiter or quote character.
* Hours are written with exactly two decimals.
* Lines are joined with ``\\n``; there is no trailing newline.

Failure modes
-------------
* Empty line-item list -> header line only.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from decimal import Decimal

from workforce_modules.payroll.models import PayrollLineItem

CSV_HEADER = (
    "Employee ID",
    "Name",
    "Type",
    "Base Salary",
    "Work Hours",
    "Claims",
    "Net Pay",
)


def format_amount(value: Decimal) -> str:
    """Plain decimal text: ``5000000`` rather than ``5E+6`` or ``5000000.000``."""
    if value == value.to_integral_value():
        return f"{value:.0f}"
    return format(value.normalize(), "f")


def format_hours(value: Decimal) -> str:
    return f"{value:.2f}"


def payroll_csv_row(item: PayrollLineItem) -> list[str]:
    return [
        item.employee_id,
        item.name,
        item.employment_type.value,
        format_amount(item.base_salary),
        format_hours(item.total_attendance_hours),
        format_amount(item.approved_claims),
        format_amount(item.net_pay),
    ]


def export_payroll_csv(line_items: Iterable[PayrollLineItem]) -> str:
    """
    Render line items as CSV text.

    Preconditions:
        - Every item carries Decimal amounts and hours.
    Postconditions:
        - First line is the header; one line per item follows in input order.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in line_items:
        writer.writerow(payroll_csv_row(item))
    return buffer.getvalue().rstrip("\n")
