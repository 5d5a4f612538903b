"""Derived route and grouping structures."""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .enums import RouteStrategy
from .located_item import LocatedItem


class RouteSegment(BaseModel):
    """Two consecutive route points and the great-circle distance between them."""

    start: LocatedItem
    end: LocatedItem
    distance_m: float

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0


class Route(BaseModel):
    """An ordered path through located items."""

    strategy: RouteStrategy
    points: list[LocatedItem] = Field(default_factory=list)
    segments: list[RouteSegment] = Field(default_factory=list)

    @computed_field
    @property
    def total_distance_m(self) -> float:
        return sum(segment.distance_m for segment in self.segments)

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / 1000.0

    @property
    def ids(self) -> list[int]:
        return [point.id for point in self.points]

    def __len__(self) -> int:
        return len(self.points)


class DuplicateGroup(BaseModel):
    """Two or more items within the duplicate threshold of the first (seed) item.

    Recomputed from scratch whenever the working set changes.
    """

    members: list[LocatedItem] = Field(min_length=2)

    @property
    def base(self) -> LocatedItem:
        """The seed item that every other member was measured against."""
        return self.members[0]

    @property
    def others(self) -> list[LocatedItem]:
        return self.members[1:]

    @property
    def ids(self) -> list[int]:
        return [member.id for member in self.members]

    def max_distance_km(self) -> Optional[float]:
        distances = [m.distance for m in self.others if m.distance is not None]
        return max(distances) if distances else None

    def __len__(self) -> int:
        return len(self.members)

