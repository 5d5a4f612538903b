"""Coordinate extractors for OCR output and photo metadata."""

from .base import BaseExtractor, ExtractionMatch
from .text import TextCoordinateExtractor, extract_coordinates
from .exif import ExifCoordinateExtractor

__all__ = [
    "BaseExtractor",
    "ExtractionMatch",
    "TextCoordinateExtractor",
    "ExifCoordinateExtractor",
    "extract_coordinates",
]
