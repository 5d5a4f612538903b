"""KML 2.2 route export."""

from datetime import datetime
from typing import Optional
import xml.etree.ElementTree as ET

from .base import RouteLike, RouteWriter, route_points, xml_prettify


KML_NS = "http://www.opengis.net/kml/2.2"


def _coordinates(item) -> str:
    # KML tuples are lon,lat,alt
    return f"{item.lon:.6f},{item.lat:.6f},0"


class KMLWriter(RouteWriter):
    """Writes a route as a LineString placemark followed by one point placemark per photo."""

    format_name = "kml"
    extension = "kml"
    media_type = "application/vnd.google-earth.kml+xml"

    ROUTE_STYLE = "routeStyle"
    WAYPOINT_STYLE = "waypointStyle"

    def to_string(
        self, route: RouteLike, name: str = "route", timestamp: Optional[datetime] = None
    ) -> str:
        points = route_points(route)

        root = ET.Element("kml")
        root.set("xmlns", KML_NS)
        document = ET.SubElement(root, "Document")
        ET.SubElement(document, "name").text = name

        route_style = ET.SubElement(document, "Style", id=self.ROUTE_STYLE)
        line_style = ET.SubElement(route_style, "LineStyle")
        ET.SubElement(line_style, "color").text = "ff0000ff"
        ET.SubElement(line_style, "width").text = "4"
        ET.SubElement(document, "Style", id=self.WAYPOINT_STYLE)

        if len(points) > 1:
            placemark = ET.SubElement(document, "Placemark")
            ET.SubElement(placemark, "name").text = name
            ET.SubElement(placemark, "styleUrl").text = f"#{self.ROUTE_STYLE}"
            line = ET.SubElement(placemark, "LineString")
            ET.SubElement(line, "tessellate").text = "1"
            ET.SubElement(line, "coordinates").text = " ".join(
                _coordinates(item) for item in points
            )

        for item in points:
            placemark = ET.SubElement(document, "Placemark")
            ET.SubElement(placemark, "name").text = item.name
            ET.SubElement(placemark, "styleUrl").text = f"#{self.WAYPOINT_STYLE}"
            point = ET.SubElement(placemark, "Point")
            ET.SubElement(point, "coordinates").text = _coordinates(item)
            if self.include_metadata:
                extended = ET.SubElement(placemark, "ExtendedData")
                data = ET.SubElement(extended, "Data", name="id")
                ET.SubElement(data, "value").text = str(item.id)

        return xml_prettify(root)
