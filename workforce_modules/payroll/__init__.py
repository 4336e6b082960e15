"""
Payroll Module (``workforce_modules.payroll``).

Monthly payroll for full-time and part-time employees.  Computation is
delegated to ``workforce_engines.payroll``; ``PayrollService``
(``workforce_modules.payroll.service``) assembles, exports and persists
runs.
"""

from workforce_modules.payroll.models import (
    EmploymentProfile,
    EmploymentType,
    PayrollLineItem,
    PayrollModel,
    PayrollPeriod,
    PayrollRun,
    ProratedPayrollBreakdown,
)

__all__ = [
    "EmploymentProfile",
    "EmploymentType",
    "PayrollLineItem",
    "PayrollModel",
    "PayrollPeriod",
    "PayrollRun",
    "ProratedPayrollBreakdown",
]
