"""GeoPoint value object: an immutable, validated (lat, lon) pair."""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ValidationError as PydanticValidationError, model_validator

from ..exceptions import InvalidCoordinateError


LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)


def is_valid_latitude(value: Optional[float]) -> bool:
    """Check that a value is a finite latitude in [-90, 90]."""
    return value is not None and LAT_RANGE[0] <= value <= LAT_RANGE[1]


def is_valid_longitude(value: Optional[float]) -> bool:
    """Check that a value is a finite longitude in [-180, 180]."""
    return value is not None and LON_RANGE[0] <= value <= LON_RANGE[1]


class GeoPoint(BaseModel):
    """
    Immutable value object for a location in decimal degrees.

    Either both coordinates are present and in range, or both are absent.
    An absent point is the normal result of a parse or extraction that found
    nothing; use ``is_present`` before handing a point to distance code.
    """

    lat: Optional[float] = None
    lon: Optional[float] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_pair(self) -> "GeoPoint":
        if (self.lat is None) != (self.lon is None):
            raise ValueError("latitude and longitude must be both present or both absent")
        if self.lat is not None:
            # NaN fails both comparisons and is rejected here too
            if not is_valid_latitude(self.lat):
                raise ValueError(f"latitude {self.lat} outside [-90, 90]")
            if not is_valid_longitude(self.lon):
                raise ValueError(f"longitude {self.lon} outside [-180, 180]")
        return self

    @classmethod
    def of(cls, lat: float, lon: float) -> "GeoPoint":
        """
        Build a present point.

        Raises:
            InvalidCoordinateError: If either value is out of range.
        """
        try:
            return cls(lat=lat, lon=lon)
        except PydanticValidationError as e:
            first_error = e.errors()[0] if e.errors() else {"msg": str(e)}
            raise InvalidCoordinateError(lat, lon, first_error.get("msg", "validation failed"))

    @classmethod
    def try_of(cls, lat: Any, lon: Any) -> "GeoPoint":
        """
        Build a point, returning an absent point for invalid values.

        Numeric strings such as ``"55.7"`` are accepted; anything that does
        not convert to a float gives an absent point.
        """
        if lat is None or lon is None:
            return cls.absent()
        try:
            lat, lon = float(lat), float(lon)
        except (TypeError, ValueError):
            return cls.absent()
        if not (is_valid_latitude(lat) and is_valid_longitude(lon)):
            return cls.absent()
        return cls(lat=lat, lon=lon)

    @classmethod
    def absent(cls) -> "GeoPoint":
        """An empty point (no coordinates)."""
        return _ABSENT

    @property
    def is_present(self) -> bool:
        return self.lat is not None

    def as_tuple(self) -> Optional[Tuple[float, float]]:
        """(lat, lon) or None when absent."""
        if not self.is_present:
            return None
        return (self.lat, self.lon)

    def as_lon_lat(self) -> Optional[Tuple[float, float]]:
        """(lon, lat) axis order used by GeoJSON and KML."""
        if not self.is_present:
            return None
        return (self.lon, self.lat)

    def __bool__(self) -> bool:
        return self.is_present

    def __repr__(self) -> str:
        if not self.is_present:
            return "GeoPoint(absent)"
        return f"GeoPoint({self.lat}, {self.lon})"


_ABSENT = GeoPoint()
