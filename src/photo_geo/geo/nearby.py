"""Radius search around a reference item."""

from .distance import distance_km, haversine_m, km_to_meters
from ..models.located_item import LocatedItem


def find_nearby(
    items: list[LocatedItem],
    reference: LocatedItem,
    radius_km: float = 1.0,
) -> list[LocatedItem]:
    """
    Find items within ``radius_km`` of the reference, nearest first.

    Side effect: ``distance`` (km from the reference) is written on every
    located candidate, including those that end up outside the radius.

    Args:
        items: Candidate items. The reference (matched by id) and items
            without coordinates are skipped.
        reference: Item to search around.
        radius_km: Inclusive search radius in kilometers.

    Returns:
        Matching items sorted by ascending distance. Empty when the
        reference itself has no coordinates.
    """
    if not reference.has_coordinates:
        return []

    matches: list[LocatedItem] = []
    for item in items:
        if item.id == reference.id or not item.has_coordinates:
            continue
        item.distance = distance_km(reference.point, item.point)
        if item.distance <= radius_km:
            matches.append(item)

    # sorted() is stable: equal distances keep input order
    return sorted(matches, key=lambda item: item.distance)


def annotate_nearby_counts(items: list[LocatedItem], radius_km: float = 1.0) -> list[LocatedItem]:
    """
    Set ``nearby_objects_count`` on every located item.

    The count is the number of other located items within ``radius_km``.
    Items without coordinates get None. ``distance`` is left untouched.
    """
    radius_m = km_to_meters(radius_km)
    located = [item for item in items if item.has_coordinates]

    for item in items:
        if not item.has_coordinates:
            item.nearby_objects_count = None
            continue
        item.nearby_objects_count = sum(
            1
            for other in located
            if other.id != item.id and haversine_m(item.point, other.point) <= radius_m
        )
    return items
