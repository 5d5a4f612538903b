"""Rendering of decimal-degree points into the supported notations."""

from typing import Callable

from ..exceptions import UnsupportedFormatError
from ..models.enums import CoordinateFormat, PARSEABLE_FORMATS
from ..models.geo_point import GeoPoint
from ..normalizers.numbers import NumberNormalizer


def _lat_hemisphere(lat: float) -> str:
    return "S" if lat < 0 else "N"


def _lon_hemisphere(lon: float) -> str:
    return "W" if lon < 0 else "E"


class CoordinateFormatter:
    """
    Inverse of CoordinateParser for the four convertible notations.

    ``CoordinateParser.parse(CoordinateFormatter.format(p, f), f)`` gives
    back ``p`` to within the rounding of the rendered precision.
    """

    @staticmethod
    def to_decimal(point: GeoPoint) -> str:
        return f"{point.lat:.6f}, {point.lon:.6f}"

    @staticmethod
    def to_dms(point: GeoPoint) -> str:
        lat_d, lat_m, lat_s = NumberNormalizer.decimal_to_dms(point.lat)
        lon_d, lon_m, lon_s = NumberNormalizer.decimal_to_dms(point.lon)
        return (
            f"{lat_d}° {lat_m}' {lat_s:.4f}\" {_lat_hemisphere(point.lat)}, "
            f"{lon_d}° {lon_m}' {lon_s:.4f}\" {_lon_hemisphere(point.lon)}"
        )

    @staticmethod
    def to_dm(point: GeoPoint) -> str:
        lat_d, lat_m = NumberNormalizer.decimal_to_dm(point.lat)
        lon_d, lon_m = NumberNormalizer.decimal_to_dm(point.lon)
        return (
            f"{lat_d}° {lat_m:.5f}' {_lat_hemisphere(point.lat)}, "
            f"{lon_d}° {lon_m:.5f}' {_lon_hemisphere(point.lon)}"
        )

    @staticmethod
    def to_formatted(point: GeoPoint) -> str:
        return (
            f"{abs(point.lat):.6f} {_lat_hemisphere(point.lat)}, "
            f"{abs(point.lon):.6f} {_lon_hemisphere(point.lon)}"
        )

    FORMATTERS: dict[CoordinateFormat, Callable[[GeoPoint], str]] = {
        CoordinateFormat.DECIMAL: to_decimal.__func__,
        CoordinateFormat.DMS: to_dms.__func__,
        CoordinateFormat.DM: to_dm.__func__,
        CoordinateFormat.FORMATTED: to_formatted.__func__,
    }

    @classmethod
    def format(cls, point: GeoPoint, fmt: CoordinateFormat = CoordinateFormat.DECIMAL) -> str:
        """
        Render a point.

        Args:
            point: Point to render.
            fmt: Target notation.

        Returns:
            The rendered string, or '' for an absent point.

        Raises:
            UnsupportedFormatError: If fmt is a detect-only notation.
        """
        formatter = cls.FORMATTERS.get(fmt)
        if formatter is None:
            raise UnsupportedFormatError(
                fmt.value, sorted(f.value for f in PARSEABLE_FORMATS)
            )
        if not point.is_present:
            return ""
        return formatter(point)

    @classmethod
    def format_all(cls, point: GeoPoint) -> dict[str, str]:
        """Render a point in every convertible notation, keyed by format value."""
        return {fmt.value: cls.format(point, fmt) for fmt in cls.FORMATTERS}


def format_coordinates(point: GeoPoint, fmt: CoordinateFormat = CoordinateFormat.DECIMAL) -> str:
    return CoordinateFormatter.format(point, fmt)
