"""GeoJSON route export."""

import json
from datetime import datetime
from typing import Optional

from .base import RouteLike, RouteWriter, iso_timestamp, route_points
from ..formats.formatter import CoordinateFormatter
from ..models.enums import CoordinateFormat


class GeoJSONWriter(RouteWriter):
    """
    Writes a FeatureCollection: one Point feature per photo, then the route
    as a LineString feature with ``properties.type == "route"``.

    Positions are ``[lon, lat]`` as GeoJSON requires.
    """

    format_name = "geojson"
    extension = "geojson"
    media_type = "application/geo+json"

    def __init__(self, include_metadata: bool = True, pretty: bool = True):
        super().__init__(include_metadata)
        self.pretty = pretty

    def to_dict(
        self, route: RouteLike, name: str = "route", timestamp: Optional[datetime] = None
    ) -> dict:
        """Build the FeatureCollection as plain data."""
        points = route_points(route)
        time_text = iso_timestamp(timestamp)

        features = []
        for item in points:
            properties = {
                "name": item.name,
                "id": item.id,
                "coordinates": CoordinateFormatter.format(item.point, CoordinateFormat.DMS),
            }
            if self.include_metadata:
                properties["timestamp"] = time_text
            features.append({
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": list(item.point.as_lon_lat())},
                "properties": properties,
            })

        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [list(item.point.as_lon_lat()) for item in points],
            },
            "properties": {"name": name, "type": "route"},
        })

        return {"type": "FeatureCollection", "features": features}

    def to_string(
        self, route: RouteLike, name: str = "route", timestamp: Optional[datetime] = None
    ) -> str:
        return json.dumps(
            self.to_dict(route, name, timestamp),
            ensure_ascii=False,
            indent=2 if self.pretty else None,
        )
