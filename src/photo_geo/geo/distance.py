"""Great-circle distance between GeoPoints.

All distances are computed in meters. Kilometer values are produced only by
the conversion helpers below, at the boundary where a caller asks for them.
"""

import math

from ..exceptions import MissingCoordinatesError
from ..models.geo_point import GeoPoint


EARTH_RADIUS_M = 6371e3


def meters_to_km(meters: float) -> float:
    return meters / 1000.0


def km_to_meters(km: float) -> float:
    return km * 1000.0


def haversine_m(p1: GeoPoint, p2: GeoPoint) -> float:
    """
    Haversine distance in meters.

    Args:
        p1: First point.
        p2: Second point.

    Returns:
        Distance in meters; exactly 0.0 for identical points.

    Raises:
        MissingCoordinatesError: If either point is absent.
    """
    if not p1.is_present or not p2.is_present:
        raise MissingCoordinatesError("distance")

    phi1 = math.radians(p1.lat)
    phi2 = math.radians(p2.lat)
    d_phi = math.radians(p2.lat - p1.lat)
    d_lambda = math.radians(p2.lon - p1.lon)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Float error can push a marginally above 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_km(p1: GeoPoint, p2: GeoPoint) -> float:
    """Haversine distance in kilometers."""
    return meters_to_km(haversine_m(p1, p2))
