"""Pytest configuration and fixtures."""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from photo_geo.config import GeoSettings, reset_settings
from photo_geo.models.geo_point import GeoPoint
from photo_geo.models.located_item import LocatedItem


# Meters per degree of latitude on the 6371 km sphere
METERS_PER_DEGREE = 6371e3 * math.pi / 180


@pytest.fixture(autouse=True)
def clean_settings():
    """Keep global settings isolated between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return GeoSettings()


@pytest.fixture
def moscow():
    return GeoPoint(lat=55.7558, lon=37.6173)


@pytest.fixture
def saint_petersburg():
    return GeoPoint(lat=59.9343, lon=30.3351)


@pytest.fixture
def offset_point():
    """Point a given number of meters due north (or south) of a base point.

    Offsets along a meridian are exact under the haversine formula.
    """

    def _create(base: GeoPoint, north_m: float) -> GeoPoint:
        return GeoPoint(lat=base.lat + north_m / METERS_PER_DEGREE, lon=base.lon)

    return _create


@pytest.fixture
def make_item():
    """Create a LocatedItem, optionally without coordinates."""

    def _create(item_id: int, point: GeoPoint = None, name: str = None) -> LocatedItem:
        return LocatedItem(
            id=item_id,
            name=name or f"photo_{item_id}.jpg",
            point=point if point is not None else GeoPoint.absent(),
        )

    return _create


@pytest.fixture
def line_items(moscow, offset_point, make_item):
    """Create items lying on one meridian at the given north offsets (meters)."""

    def _create(offsets: list[float], start_id: int = 1) -> list[LocatedItem]:
        return [
            make_item(start_id + i, offset_point(moscow, meters))
            for i, meters in enumerate(offsets)
        ]

    return _create


@pytest.fixture
def google_ocr_payload():
    """Eden AI style OCR response with the Google provider block."""
    return {
        "google": {
            "status": "success",
            "text": "IMG_2041\nШирота: 55.7558\nДолгота: 37.6173",
            "bounding_boxes": [
                {"text": "Широта:", "left": 0.1, "top": 0.1, "width": 0.2, "height": 0.05},
                {"text": "55.7558", "left": 0.3, "top": 0.1, "width": 0.2, "height": 0.05},
            ],
        }
    }


@pytest.fixture
def gps_tags():
    """EXIF GPS IFD for 55° 45' 20.88" N, 37° 37' 2.28" E."""
    return {
        "GPSLatitudeRef": "N",
        "GPSLatitude": ((55, 1), (45, 1), (2088, 100)),
        "GPSLongitudeRef": "E",
        "GPSLongitude": ((37, 1), (37, 1), (228, 100)),
    }
