"""Distance, grouping, search and route algorithms over located items."""

from .distance import EARTH_RADIUS_M, haversine_m, distance_km, meters_to_km, km_to_meters
from .duplicates import find_duplicates, duplicate_ids
from .nearby import find_nearby, annotate_nearby_counts
from .route import (
    RouteStats,
    build_route,
    build_sequential,
    build_nearest_neighbor,
    format_distance,
)

__all__ = [
    "EARTH_RADIUS_M",
    "haversine_m",
    "distance_km",
    "meters_to_km",
    "km_to_meters",
    "find_duplicates",
    "duplicate_ids",
    "find_nearby",
    "annotate_nearby_counts",
    "RouteStats",
    "build_route",
    "build_sequential",
    "build_nearest_neighbor",
    "format_distance",
]
