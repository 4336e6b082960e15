"""
Claims Summation Engine (``workforce_engines.claims``).

Pure helpers selecting approved expense claims for a payroll period and
summing their amounts.  Amounts are added verbatim: no conversion, no
rounding beyond the input precision.  A claim with no amount adds zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from workforce_modules.payroll.models import PayrollPeriod
from workforce_modules.requests.models import LeaveRequest


def select_approved_claims(
    requests: Iterable[LeaveRequest],
    employee_id: str,
    period: PayrollPeriod,
) -> list[LeaveRequest]:
    """Approved claims of one employee dated inside the period."""
    return [
        r for r in requests
        if r.employee_id == employee_id
        and r.is_approved_claim
        and period.contains(r.start_date)
    ]


def sum_claim_amounts(claims: Iterable[LeaveRequest]) -> Decimal:
    return sum((c.amount or Decimal("0") for c in claims), Decimal("0"))
