"""
Workforce configuration schema.

Frozen dataclasses the YAML loader produces.  This is the reviewable
source artifact: office fences, the payroll model selection and request
policy.  Runtime code receives it through ``get_active_config()``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeofenceDef:
    """A named circle around an office coordinate."""

    name: str
    latitude: float
    longitude: float
    radius_meters: float


@dataclass(frozen=True)
class PayrollPolicyDef:
    """Which payroll model runs and its parameters."""

    model: str = "monthly_aggregate"  # or prorated_attendance
    working_minutes_per_day: int = 480


@dataclass(frozen=True)
class RequestPolicyDef:
    """Leave/sick/claim request rules."""

    sick_auto_approve_max_days: int = 3


@dataclass(frozen=True)
class WorkforceConfiguration:
    """Complete configuration for one deployment."""

    currency: str
    geofences: tuple[GeofenceDef, ...]
    payroll: PayrollPolicyDef
    requests: RequestPolicyDef
    checksum: str = ""

    def geofence(self, name: str) -> GeofenceDef:
        """Look up a fence by name.

        Raises:
            KeyError: if no fence has that name.
        """
        for fence in self.geofences:
            if fence.name == name:
                return fence
        raise KeyError(f"No geofence named {name!r}")
