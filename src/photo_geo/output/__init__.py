"""Route export writers for GPX, KML and GeoJSON."""

from ..exceptions import UnsupportedFormatError
from .base import RouteWriter
from .gpx_writer import GPXWriter
from .kml_writer import KMLWriter
from .geojson_writer import GeoJSONWriter

WRITERS: dict[str, type[RouteWriter]] = {
    "gpx": GPXWriter,
    "kml": KMLWriter,
    "geojson": GeoJSONWriter,
}


def get_writer(format_name: str, include_metadata: bool = True) -> RouteWriter:
    """
    Get a writer by format name (case-insensitive).

    Raises:
        UnsupportedFormatError: For unknown format names.
    """
    writer_class = WRITERS.get((format_name or "").lower())
    if writer_class is None:
        raise UnsupportedFormatError(format_name, sorted(WRITERS))
    return writer_class(include_metadata=include_metadata)


__all__ = [
    "RouteWriter",
    "GPXWriter",
    "KMLWriter",
    "GeoJSONWriter",
    "WRITERS",
    "get_writer",
]
