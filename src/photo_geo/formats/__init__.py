"""Coordinate notation detection, parsing and formatting."""

from .detector import CoordinateFormatDetector, detect_coordinate_format, is_valid_coordinate_string
from .parser import CoordinateParser, parse_coordinates
from .formatter import CoordinateFormatter, format_coordinates

__all__ = [
    "CoordinateFormatDetector",
    "CoordinateParser",
    "CoordinateFormatter",
    "detect_coordinate_format",
    "is_valid_coordinate_string",
    "parse_coordinates",
    "format_coordinates",
]
