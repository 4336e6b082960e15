"""
Config -> Engine Bridges.

Convert configuration definitions into the values engines and services
consume.  They live here because engines must never import
``workforce_config``.

Usage:
    from workforce_config.bridges import build_geofence, payroll_model

    config = get_active_config()
    fence = build_geofence(config, "check_in")
"""

from __future__ import annotations

from workforce_config.schema import WorkforceConfiguration
from workforce_engines.geofence import Geofence
from workforce_modules.payroll.models import PayrollModel


def build_geofence(config: WorkforceConfiguration, name: str) -> Geofence:
    """Build an engine ``Geofence`` from the named fence definition.

    Raises:
        KeyError: if the configuration has no fence with that name.
    """
    defn = config.geofence(name)
    return Geofence(
        name=defn.name,
        latitude=defn.latitude,
        longitude=defn.longitude,
        radius_meters=defn.radius_meters,
    )


def payroll_model(config: WorkforceConfiguration) -> PayrollModel:
    return PayrollModel(config.payroll.model)
