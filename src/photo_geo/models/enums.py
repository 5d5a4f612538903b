"""Enumeration types for coordinate notations and route options."""

from enum import Enum


class CoordinateFormat(Enum):
    """Recognised coordinate notations."""

    DECIMAL = "decimal"  # 55.123456, -37.123456
    DMS = "dms"  # 55° 7' 24.4416" N, 37° 7' 24.4416" W
    DM = "dm"  # 55° 7.40736' N, 37° 7.40736' W
    FORMATTED = "formatted"  # 55.123456 N, 37.123456 W
    PLUS_CODE = "plus_code"  # 8FXP24QM+9X
    UTM = "utm"  # 37N 377299.244 6110430.477
    MGRS = "mgrs"  # 37UDB7729910430

    @property
    def is_parseable(self) -> bool:
        """Whether the notation can be converted to decimal degrees."""
        return self in PARSEABLE_FORMATS

    @classmethod
    def from_name(cls, name: str) -> "CoordinateFormat | None":
        """Match a format by value or member name, case-insensitively."""
        key = name.strip().lower()
        for fmt in cls:
            if fmt.value == key or fmt.name.lower() == key:
                return fmt
        return None


PARSEABLE_FORMATS = frozenset({
    CoordinateFormat.DECIMAL,
    CoordinateFormat.DMS,
    CoordinateFormat.DM,
    CoordinateFormat.FORMATTED,
})


class RouteStrategy(Enum):
    """Point ordering strategies for route building."""

    SEQUENTIAL = "sequential"
    NEAREST = "nearest"


class TravelMode(Enum):
    """Travel modes with their average speed in km/h."""

    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    DRIVING = "driving"

    @property
    def speed_kmh(self) -> float:
        return _SPEEDS_KMH[self]


_SPEEDS_KMH = {
    TravelMode.WALKING: 4.0,
    TravelMode.RUNNING: 10.0,
    TravelMode.CYCLING: 15.0,
    TravelMode.DRIVING: 60.0,
}


class LocationSource(Enum):
    """Where an item's coordinates came from."""

    EXIF = "exif"
    OCR = "ocr"
    MANUAL = "manual"
