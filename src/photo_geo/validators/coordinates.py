"""Range validation for decoded coordinate values."""

from typing import Optional, Tuple

from ..models.geo_point import GeoPoint, is_valid_latitude, is_valid_longitude


class CoordinateValidator:
    """Validates decoded (lat, lon) candidates before they become GeoPoints."""

    @staticmethod
    def is_valid_pair(lat: Optional[float], lon: Optional[float]) -> bool:
        """Both values present and within [-90, 90] / [-180, 180]."""
        return is_valid_latitude(lat) and is_valid_longitude(lon)

    @classmethod
    def to_point(cls, lat: Optional[float], lon: Optional[float]) -> GeoPoint:
        """
        Build a GeoPoint from a candidate pair.

        Out-of-range values are never clamped: the result is absent instead.
        """
        if not cls.is_valid_pair(lat, lon):
            return GeoPoint.absent()
        return GeoPoint(lat=lat, lon=lon)

    @classmethod
    def assign_axes(
        cls, first: Optional[float], second: Optional[float]
    ) -> Optional[Tuple[float, float]]:
        """
        Decide which of two unlabeled numbers is the latitude.

        The given order wins when it is valid; otherwise the swapped order is
        tried. Returns (lat, lon) or None when neither assignment fits.
        """
        if cls.is_valid_pair(first, second):
            return first, second
        if cls.is_valid_pair(second, first):
            return second, first
        return None
