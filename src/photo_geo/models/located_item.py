"""Pydantic model for photos and waypoints that may carry a location."""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import LocationSource
from .geo_point import GeoPoint


class LocatedItem(BaseModel):
    """A photo or manually entered waypoint with an optional location.

    ``point`` is set once by the locating pipeline and replaced only through
    ``relocate``. The derived fields (``distance``, ``is_very_close``,
    ``nearby_objects_count``) are annotations written by the grouping and
    search functions and may change between calls.
    """

    id: int
    name: str
    point: GeoPoint = Field(default_factory=GeoPoint.absent)
    source: Optional[LocationSource] = None

    # Derived annotations
    distance: Optional[float] = None  # kilometers from the last reference
    is_very_close: bool = False
    nearby_objects_count: Optional[int] = None

    # Extraction diagnostics
    rule: Optional[str] = None
    confidence: float = 0.0
    warnings: list[str] = Field(default_factory=list)

    @property
    def lat(self) -> Optional[float]:
        return self.point.lat

    @property
    def lon(self) -> Optional[float]:
        return self.point.lon

    @property
    def has_coordinates(self) -> bool:
        return self.point.is_present

    def relocate(
        self, point: GeoPoint, source: Optional[LocationSource] = LocationSource.MANUAL
    ) -> "LocatedItem":
        """Return a copy at a new location with derived annotations cleared."""
        return self.model_copy(update={
            "point": point,
            "source": source if point.is_present else None,
            "distance": None,
            "is_very_close": False,
            "nearby_objects_count": None,
            "rule": None,
            "confidence": 1.0 if point.is_present else 0.0,
            "warnings": [],
        })

    def to_flat_dict(self) -> dict:
        """Convert to a flat dictionary for JSON/CSV style output."""
        return {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "source": self.source.value if self.source else None,
            "distance_km": self.distance,
            "is_very_close": self.is_very_close,
            "nearby_objects_count": self.nearby_objects_count,
            "rule": self.rule,
            "confidence": self.confidence,
            "warnings": "; ".join(self.warnings) if self.warnings else None,
        }


def with_coordinates(items: list[LocatedItem]) -> list[LocatedItem]:
    """Filter to the items that have a location, preserving order."""
    return [item for item in items if item.has_coordinates]
