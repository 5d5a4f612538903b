"""
Photo Geolocation Toolkit

A Python library for finding, parsing, formatting and routing photo
coordinates from EXIF metadata, OCR text and manual entry.
"""

from .locator import PhotoLocator, PhotoInput
from .identity import IdAllocator
from .models import GeoPoint, LocatedItem, Route, RouteSegment, DuplicateGroup, CoordinateFormat
from .formats import (
    CoordinateFormatDetector,
    CoordinateParser,
    CoordinateFormatter,
    detect_coordinate_format,
    parse_coordinates,
    format_coordinates,
)
from .extractors import TextCoordinateExtractor, ExifCoordinateExtractor, extract_coordinates
from .geo import (
    haversine_m,
    distance_km,
    find_duplicates,
    find_nearby,
    annotate_nearby_counts,
    build_route,
    RouteStats,
)
from .exceptions import (
    GeoException,
    InvalidInputError,
    EmptyInputError,
    JSONParseError,
    CoordinateError,
    InvalidCoordinateError,
    MissingCoordinatesError,
    OutputError,
    FileWriteError,
    UnsupportedFormatError,
    ConfigurationError,
)
from .logging import configure_logging, get_logger, GeoLogger

__version__ = "1.0.0"
__all__ = [
    "PhotoLocator",
    "PhotoInput",
    "IdAllocator",
    # Models
    "GeoPoint",
    "LocatedItem",
    "Route",
    "RouteSegment",
    "DuplicateGroup",
    "CoordinateFormat",
    # Formats
    "CoordinateFormatDetector",
    "CoordinateParser",
    "CoordinateFormatter",
    "detect_coordinate_format",
    "parse_coordinates",
    "format_coordinates",
    # Extraction
    "TextCoordinateExtractor",
    "ExifCoordinateExtractor",
    "extract_coordinates",
    # Geometry
    "haversine_m",
    "distance_km",
    "find_duplicates",
    "find_nearby",
    "annotate_nearby_counts",
    "build_route",
    "RouteStats",
    # Exceptions
    "GeoException",
    "InvalidInputError",
    "EmptyInputError",
    "JSONParseError",
    "CoordinateError",
    "InvalidCoordinateError",
    "MissingCoordinatesError",
    "OutputError",
    "FileWriteError",
    "UnsupportedFormatError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
    "GeoLogger",
]
