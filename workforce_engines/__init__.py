"""
Module: workforce_engines
Responsibility:
    Re-exports the public symbols of the pure calculation engines.  This
    is the import surface for ``workforce_modules`` services.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  May import kernel
    logging and the frozen model types of ``workforce_modules``; MUST
    NOT import services, ORM models or ``workforce_config``.

Invariants enforced:
    - Purity: engines never call ``datetime.now()`` or ``date.today()``.
    - Decimal-only arithmetic for money.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from workforce_engines import compute_payroll, haversine_distance_meters
"""

from workforce_engines.claims import select_approved_claims, sum_claim_amounts
from workforce_engines.geofence import (
    EARTH_RADIUS_METERS,
    Geofence,
    GeofenceCheck,
    check_geofence,
    haversine_distance_meters,
)
from workforce_engines.payroll import (
    DEFAULT_WORKING_MINUTES_PER_DAY,
    compute_payroll,
    compute_prorated_payroll,
)
from workforce_engines.timekeeping import (
    approved_absence_days,
    days_worked,
    minutes_to_hours,
    record_minutes,
    records_in_period,
    shift_minutes,
    total_worked_minutes,
    working_days_in_period,
)
from workforce_engines.tracer import traced_engine

__all__ = [
    # Claims
    "select_approved_claims",
    "sum_claim_amounts",
    # Geofence
    "EARTH_RADIUS_METERS",
    "Geofence",
    "GeofenceCheck",
    "check_geofence",
    "haversine_distance_meters",
    # Payroll
    "DEFAULT_WORKING_MINUTES_PER_DAY",
    "compute_payroll",
    "compute_prorated_payroll",
    # Timekeeping
    "approved_absence_days",
    "days_worked",
    "minutes_to_hours",
    "record_minutes",
    "records_in_period",
    "shift_minutes",
    "total_worked_minutes",
    "working_days_in_period",
    # Tracing
    "traced_engine",
]
