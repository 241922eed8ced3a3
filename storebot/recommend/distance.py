"""Engine layer: great-circle distance between two coordinates."""

from __future__ import annotations

import math

from storebot.recommend.models import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres; exactly 0.0 for identical points."""
    if a.lat == b.lat and a.lng == b.lng:
        return 0.0
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.lng - a.lng)
    x = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # Rounding can push x a hair outside [0, 1] for antipodal points.
    x = min(1.0, max(0.0, x))
    c = 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))
    return EARTH_RADIUS_KM * c
