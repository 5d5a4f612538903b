"""Seed-relative duplicate grouping.

Membership is measured against the group's seed only. If A is near B and B is
near C but A is not near C, C does not join A's group. This is not
transitive clustering.
"""

from typing import Optional

from .distance import haversine_m, meters_to_km
from ..logging import GeoLogger
from ..models.located_item import LocatedItem
from ..models.route import DuplicateGroup


logger = GeoLogger(__name__)

DUPLICATE_THRESHOLD_M = 10.0
VERY_CLOSE_THRESHOLD_M = 25.0


def find_duplicates(
    items: list[LocatedItem],
    threshold_m: float = DUPLICATE_THRESHOLD_M,
    very_close_m: Optional[float] = VERY_CLOSE_THRESHOLD_M,
) -> list[DuplicateGroup]:
    """
    Group items lying within ``threshold_m`` of an earlier seed item.

    Single left-to-right scan: each unprocessed item seeds a candidate group
    of every later unprocessed item within the threshold of it. Groups of one
    are dropped but their seed is still marked processed.

    Members of emitted groups are annotated in place: ``distance`` is set to
    the kilometers from the seed (0.0 for the seed itself) and
    ``is_very_close`` to whether that distance is under ``very_close_m``.
    The flag is cleared on every located input first, so it always reflects
    the latest grouping.

    Args:
        items: Items in scan order. Items without coordinates are ignored.
        threshold_m: Grouping radius in meters.
        very_close_m: Flag radius in meters, or None to skip flagging.

    Returns:
        Groups of two or more items, seed first, in scan order.
    """
    located = [item for item in items if item.has_coordinates]
    # Flags from a previous run must not survive regrouping
    for item in located:
        item.is_very_close = False
    processed: set[int] = set()
    groups: list[DuplicateGroup] = []

    for i, seed in enumerate(located):
        if i in processed:
            continue
        processed.add(i)

        members: list[tuple[LocatedItem, float]] = [(seed, 0.0)]
        for j in range(i + 1, len(located)):
            if j in processed:
                continue
            meters = haversine_m(seed.point, located[j].point)
            if meters <= threshold_m:
                members.append((located[j], meters))
                processed.add(j)

        if len(members) < 2:
            continue

        for member, meters in members:
            member.distance = meters_to_km(meters)
            if very_close_m is not None:
                member.is_very_close = meters < very_close_m
        groups.append(DuplicateGroup(members=[member for member, _ in members]))

    if groups:
        logger.duplicates_found(
            groups=len(groups), items=sum(len(group) for group in groups)
        )
    return groups


def duplicate_ids(groups: list[DuplicateGroup]) -> set[int]:
    """Ids of every item that belongs to some group."""
    return {item_id for group in groups for item_id in group.ids}
