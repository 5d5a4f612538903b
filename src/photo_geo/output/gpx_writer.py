"""GPX 1.1 route export."""

from datetime import datetime
from typing import Optional
import xml.etree.ElementTree as ET

from .base import RouteLike, RouteWriter, iso_timestamp, route_points, xml_prettify


GPX_NS = "http://www.topografix.com/GPX/1/1"
CREATOR = "photo-geo"


class GPXWriter(RouteWriter):
    """
    Writes a route as one GPX track plus a waypoint per photo.

    GPX keeps attribute order ``lat`` then ``lon``; the KML and GeoJSON
    writers use lon-first tuples instead.
    """

    format_name = "gpx"
    extension = "gpx"
    media_type = "application/gpx+xml"

    def _point(self, parent: ET.Element, tag: str, item, time_text: str) -> None:
        element = ET.SubElement(parent, tag)
        element.set("lat", f"{item.lat:.6f}")
        element.set("lon", f"{item.lon:.6f}")
        ET.SubElement(element, "name").text = item.name
        if self.include_metadata:
            ET.SubElement(element, "time").text = time_text

    def to_string(
        self, route: RouteLike, name: str = "route", timestamp: Optional[datetime] = None
    ) -> str:
        points = route_points(route)
        time_text = iso_timestamp(timestamp)

        root = ET.Element("gpx")
        root.set("xmlns", GPX_NS)
        root.set("version", "1.1")
        root.set("creator", CREATOR)

        metadata = ET.SubElement(root, "metadata")
        ET.SubElement(metadata, "name").text = name
        ET.SubElement(metadata, "time").text = time_text

        # GPX 1.1 requires waypoints before tracks
        for item in points:
            self._point(root, "wpt", item, time_text)

        trk = ET.SubElement(root, "trk")
        ET.SubElement(trk, "name").text = name
        trkseg = ET.SubElement(trk, "trkseg")
        for item in points:
            self._point(trkseg, "trkpt", item, time_text)

        return xml_prettify(root)
