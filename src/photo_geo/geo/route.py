"""Route ordering strategies and route statistics."""

from dataclasses import dataclass, field
from typing import Optional

from .distance import haversine_m
from ..exceptions import MissingCoordinatesError
from ..logging import GeoLogger
from ..models.enums import RouteStrategy, TravelMode
from ..models.located_item import LocatedItem
from ..models.route import Route, RouteSegment


logger = GeoLogger(__name__)

LONG_SEGMENT_M = 1000.0


def _segments(points: list[LocatedItem]) -> list[RouteSegment]:
    return [
        RouteSegment(start=a, end=b, distance_m=haversine_m(a.point, b.point))
        for a, b in zip(points, points[1:])
    ]


def _finish(strategy: RouteStrategy, points: list[LocatedItem]) -> Route:
    route = Route(strategy=strategy, points=points, segments=_segments(points))
    logger.route_built(
        strategy=strategy.value, points=len(points), total_m=route.total_distance_m
    )
    return route


def build_sequential(items: list[LocatedItem]) -> Route:
    """
    Order located items by id (upload order).

    The sort is stable, so items sharing an id keep their input order.
    """
    located = [item for item in items if item.has_coordinates]
    return _finish(RouteStrategy.SEQUENTIAL, sorted(located, key=lambda item: item.id))


def build_nearest_neighbor(
    items: list[LocatedItem], start: Optional[LocatedItem] = None
) -> Route:
    """
    Greedy nearest-neighbor ordering.

    Starting from ``start`` (or the first located item), repeatedly step to
    the closest unvisited item. On equal distances the earlier item in the
    input wins. This is a heuristic and the path is not guaranteed shortest.

    Raises:
        MissingCoordinatesError: If ``start`` is given without coordinates.
    """
    located = [item for item in items if item.has_coordinates]
    if start is not None and not start.has_coordinates:
        raise MissingCoordinatesError("build_route", item_id=start.id)
    if not located:
        return _finish(RouteStrategy.NEAREST, [])

    if start is None:
        current = located[0]
    else:
        current = next((item for item in located if item.id == start.id), start)

    path = [current]
    unvisited = [item for item in located if item is not current and item.id != current.id]

    while unvisited:
        nearest_index = 0
        nearest_m = haversine_m(current.point, unvisited[0].point)
        for index in range(1, len(unvisited)):
            meters = haversine_m(current.point, unvisited[index].point)
            if meters < nearest_m:
                nearest_index, nearest_m = index, meters
        current = unvisited.pop(nearest_index)
        path.append(current)

    return _finish(RouteStrategy.NEAREST, path)


def build_route(
    items: list[LocatedItem],
    strategy: RouteStrategy = RouteStrategy.SEQUENTIAL,
    start: Optional[LocatedItem] = None,
) -> Route:
    """Build a route with the given strategy. ``start`` applies to NEAREST only."""
    if strategy == RouteStrategy.NEAREST:
        return build_nearest_neighbor(items, start)
    return build_sequential(items)


def format_distance(meters: float) -> str:
    """
    Human-readable distance.

    Example: 850.4 -> '850 m', 1234.5 -> '1.23 km'
    """
    if meters < 1000:
        return f"{meters:.0f} m"
    return f"{meters / 1000:.2f} km"


@dataclass
class RouteStats:
    """Summary statistics for a built route."""

    total_m: float = 0.0
    segment_count: int = 0
    min_segment_m: Optional[float] = None
    max_segment_m: Optional[float] = None
    avg_segment_m: Optional[float] = None
    long_segments: list[RouteSegment] = field(default_factory=list)

    @classmethod
    def from_route(cls, route: Route, long_segment_m: float = LONG_SEGMENT_M) -> "RouteStats":
        distances = [segment.distance_m for segment in route.segments]
        if not distances:
            return cls()
        return cls(
            total_m=sum(distances),
            segment_count=len(distances),
            min_segment_m=min(distances),
            max_segment_m=max(distances),
            avg_segment_m=sum(distances) / len(distances),
            long_segments=[s for s in route.segments if s.distance_m > long_segment_m],
        )

    def travel_time_hours(self, mode: TravelMode) -> float:
        return (self.total_m / 1000.0) / mode.speed_kmh

    def travel_times(self) -> dict[str, float]:
        """Estimated hours per travel mode."""
        return {mode.value: self.travel_time_hours(mode) for mode in TravelMode}

    def to_dict(self) -> dict:
        return {
            "total_distance_m": self.total_m,
            "total_distance": format_distance(self.total_m),
            "segments": self.segment_count,
            "min_segment_m": self.min_segment_m,
            "max_segment_m": self.max_segment_m,
            "avg_segment_m": self.avg_segment_m,
            "long_segments": [
                {"from": s.start.id, "to": s.end.id, "distance_m": s.distance_m}
                for s in self.long_segments
            ],
            "travel_time_hours": self.travel_times(),
        }
