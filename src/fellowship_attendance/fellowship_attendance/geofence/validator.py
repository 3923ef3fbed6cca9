from __future__ import annotations

import math

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS, EARTH_RADIUS_METERS


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters between two (lat, lng) points in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_within_radius(
    user_lat: float,
    user_lng: float,
    ref_lat: float,
    ref_lng: float,
    radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS,
) -> bool:
    """Whether the user position lies within radius_meters of the reference point.

    Non-finite input (NaN, inf) is treated as outside the radius.
    """
    values = (user_lat, user_lng, ref_lat, ref_lng, radius_meters)
    try:
        if not all(math.isfinite(float(v)) for v in values):
            return False
    except (TypeError, ValueError):
        return False

    distance = haversine_distance(float(user_lat), float(user_lng), float(ref_lat), float(ref_lng))
    if not math.isfinite(distance):
        return False
    return distance <= float(radius_meters)
