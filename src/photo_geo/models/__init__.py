"""Data models for coordinates, located items, routes and OCR payloads."""

from .geo_point import GeoPoint
from .located_item import LocatedItem, with_coordinates
from .route import Route, RouteSegment, DuplicateGroup
from .ocr_input import OCRPayload, ProviderResult, TextBlock
from .enums import CoordinateFormat, RouteStrategy, TravelMode, LocationSource

__all__ = [
    "GeoPoint",
    "LocatedItem",
    "with_coordinates",
    "Route",
    "RouteSegment",
    "DuplicateGroup",
    "OCRPayload",
    "ProviderResult",
    "TextBlock",
    "CoordinateFormat",
    "RouteStrategy",
    "TravelMode",
    "LocationSource",
]
