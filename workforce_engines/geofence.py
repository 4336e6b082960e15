"""
Geofence Engine (``workforce_engines.geofence``).

Responsibility
--------------
Great-circle (haversine) distance between two coordinates and the
radius check used to gate check-in.

Architecture position
---------------------
**Engines layer** -- pure, stateless.  Fences are explicit values handed
in by the caller (see ``workforce_config.bridges.build_geofence``); there
is no module-level office location, so several offices and test fences
can coexist.

Invariants enforced
-------------------
* Inputs in degrees, output in meters, always >= 0.
* Identical points are exactly 0 m apart.
* A position is inside a fence when ``distance <= radius``; anything
  farther is rejected by the caller, never adjusted.

Distances are physical measurements, not money, so they are ``float``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_METERS = 6371000.0


def haversine_distance_meters(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Great-circle distance in meters between two points given in degrees.

        a = sin^2(dphi/2) + cos(phi1) * cos(phi2) * sin^2(dlambda/2)
        c = 2 * atan2(sqrt(a), sqrt(1 - a))
        d = R * c
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Float noise can push a a hair outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


@dataclass(frozen=True)
class Geofence:
    """A circle around a fixed coordinate."""
    name: str
    latitude: float
    longitude: float
    radius_meters: float

    def distance_to(self, latitude: float, longitude: float) -> float:
        return haversine_distance_meters(
            latitude, longitude, self.latitude, self.longitude,
        )


@dataclass(frozen=True)
class GeofenceCheck:
    """Outcome of checking one position against one fence."""
    geofence: Geofence
    distance_meters: float

    @property
    def within(self) -> bool:
        return self.distance_meters <= self.geofence.radius_meters


def check_geofence(fence: Geofence, latitude: float, longitude: float) -> GeofenceCheck:
    return GeofenceCheck(geofence=fence, distance_meters=fence.distance_to(latitude, longitude))
