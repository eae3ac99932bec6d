"""Great-circle distance and the fixed-degree search window."""

from __future__ import annotations

import math
from dataclasses import dataclass

from aeroguard.domain.coordinates import Coordinate

EARTH_RADIUS_KM = 6371.0
DEFAULT_BOX_DELTA = 0.5


@dataclass(frozen=True)
class BoundingBox:
    lat_min: float
    lng_min: float
    lat_max: float
    lng_max: float

    def as_latlng(self) -> str:
        """Render as the ``latMin,lngMin,latMax,lngMax`` string WAQI expects."""
        return f"{self.lat_min},{self.lng_min},{self.lat_max},{self.lng_max}"


def bounding_box(center: Coordinate, delta: float = DEFAULT_BOX_DELTA) -> BoundingBox:
    """Square window of +/- ``delta`` degrees around ``center``.

    Degrees of longitude shrink toward the poles, so the window is narrower
    in kilometres at high latitudes. Bounds are not clamped to the valid
    coordinate ranges.
    """
    if delta <= 0:
        raise ValueError("delta must be positive")
    return BoundingBox(
        lat_min=center.latitude - delta,
        lng_min=center.longitude - delta,
        lat_max=center.latitude + delta,
        lng_max=center.longitude + delta,
    )


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates in kilometres."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c
