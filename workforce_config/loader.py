"""
Configuration Loader (``workforce_config.loader``).

Responsibility
--------------
Loads a YAML file and parses it into the frozen dataclasses of
``workforce_config.schema``.  Runtime callers go through
``workforce_config.get_active_config()`` instead of calling this.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Non-numeric coordinates or radii  -> ``ValueError`` / ``TypeError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from workforce_config.schema import (
    GeofenceDef,
    PayrollPolicyDef,
    RequestPolicyDef,
    WorkforceConfiguration,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_geofence(name: str, data: dict[str, Any]) -> GeofenceDef:
    return GeofenceDef(
        name=name,
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
        radius_meters=float(data["radius_meters"]),
    )


def parse_payroll_policy(data: dict[str, Any]) -> PayrollPolicyDef:
    return PayrollPolicyDef(
        model=str(data.get("model", "monthly_aggregate")),
        working_minutes_per_day=int(data.get("working_minutes_per_day", 480)),
    )


def parse_request_policy(data: dict[str, Any]) -> RequestPolicyDef:
    return RequestPolicyDef(
        sick_auto_approve_max_days=int(data.get("sick_auto_approve_max_days", 3)),
    )


def parse_configuration(data: dict[str, Any]) -> WorkforceConfiguration:
    """
    Parse a full configuration dict.

    ``geofences`` is required; ``payroll`` and ``requests`` sections fall
    back to their documented defaults when absent.

    Raises:
        KeyError: if ``geofences`` or a fence field is missing.
    """
    geofences = tuple(
        parse_geofence(name, fence)
        for name, fence in sorted(data["geofences"].items())
    )
    return WorkforceConfiguration(
        currency=str(data.get("currency", "IDR")),
        geofences=geofences,
        payroll=parse_payroll_policy(data.get("payroll") or {}),
        requests=parse_request_policy(data.get("requests") or {}),
        checksum=compute_checksum(data),
    )


def load_configuration(path: Path) -> WorkforceConfiguration:
    return parse_configuration(load_yaml_file(path))
