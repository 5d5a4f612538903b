"""Shared plumbing for route export writers."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
import xml.etree.ElementTree as ET
from xml.dom import minidom

from ..exceptions import FileWriteError
from ..logging import GeoLogger
from ..models.located_item import LocatedItem
from ..models.route import Route


logger = GeoLogger(__name__)

RouteLike = Union[Route, list[LocatedItem]]


def route_points(route: RouteLike) -> list[LocatedItem]:
    """Ordered items with coordinates; unlocated items are never exported."""
    points = route.points if isinstance(route, Route) else route
    return [item for item in points if item.has_coordinates]


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def xml_prettify(root: ET.Element) -> str:
    rough = ET.tostring(root, encoding="unicode")
    return minidom.parseString(rough).toprettyxml(indent="  ", encoding=None)


class RouteWriter(ABC):
    """Renders an ordered route to a text document."""

    format_name: str = ""
    extension: str = ""
    media_type: str = ""

    def __init__(self, include_metadata: bool = True):
        """
        Initialize writer.

        Args:
            include_metadata: Add timestamps (and ids where the format has
                room for them) to every point.
        """
        self.include_metadata = include_metadata

    @abstractmethod
    def to_string(
        self, route: RouteLike, name: str = "route", timestamp: Optional[datetime] = None
    ) -> str:
        """Render the route's located points in order."""
        pass

    def write(
        self,
        route: RouteLike,
        filepath: Union[str, Path],
        name: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> Path:
        """
        Write the rendered route to a file.

        Args:
            route: Route or ordered items.
            filepath: Output path.
            name: Document name; defaults to the file stem.
            timestamp: Export time; defaults to now (UTC).

        Returns:
            The path written.

        Raises:
            FileWriteError: If the file cannot be written.
        """
        filepath = Path(filepath)
        content = self.to_string(route, name or filepath.stem, timestamp)
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise FileWriteError(str(filepath), str(e))

        logger.export_written(
            path=str(filepath), format=self.format_name, points=len(route_points(route))
        )
        return filepath
