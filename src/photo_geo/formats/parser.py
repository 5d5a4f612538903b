"""Conversion of coordinate strings into validated decimal-degree points."""

import re
from typing import Callable, Optional

from ..logging import GeoLogger
from ..models.enums import CoordinateFormat
from ..models.geo_point import GeoPoint
from ..normalizers.numbers import NumberNormalizer
from ..validators.coordinates import CoordinateValidator
from .detector import CoordinateFormatDetector
from .patterns import DECIMAL_PATTERN, DMS_PATTERN, DM_PATTERN, FORMATTED_PATTERN


logger = GeoLogger(__name__)


class CoordinateParser:
    """
    Parses strings in the four convertible notations.

    Every method returns a GeoPoint; an absent point means the text was not
    in the expected notation or decoded outside the valid ranges. Nothing
    here raises for bad input.
    """

    @staticmethod
    def parse_decimal(text: str) -> GeoPoint:
        """
        Parse a decimal degree pair.

        Example: '55.7558, 37.6173' -> GeoPoint(55.7558, 37.6173)
        """
        if not DECIMAL_PATTERN.match(text):
            return GeoPoint.absent()
        parts = re.split(r"[,\s]+", text.strip())
        if len(parts) != 2:
            return GeoPoint.absent()
        lat = NumberNormalizer.parse_decimal(parts[0])
        lon = NumberNormalizer.parse_decimal(parts[1])
        return CoordinateValidator.to_point(lat, lon)

    @staticmethod
    def parse_dms(text: str) -> GeoPoint:
        """
        Parse degrees-minutes-seconds with hemisphere letters.

        Example: 55° 7' 24.4416" N, 37° 7' 24.4416" W -> GeoPoint(55.123456, -37.123456)
        """
        match = DMS_PATTERN.search(text)
        if not match:
            return GeoPoint.absent()
        lat = NumberNormalizer.dms_to_decimal(
            int(match.group(1)), int(match.group(2)), float(match.group(3)), match.group(4)
        )
        lon = NumberNormalizer.dms_to_decimal(
            int(match.group(5)), int(match.group(6)), float(match.group(7)), match.group(8)
        )
        return CoordinateValidator.to_point(lat, lon)

    @staticmethod
    def parse_dm(text: str) -> GeoPoint:
        """Parse degrees and decimal minutes with hemisphere letters."""
        match = DM_PATTERN.search(text)
        if not match:
            return GeoPoint.absent()
        lat = NumberNormalizer.dms_to_decimal(
            int(match.group(1)), float(match.group(2)), 0.0, match.group(3)
        )
        lon = NumberNormalizer.dms_to_decimal(
            int(match.group(4)), float(match.group(5)), 0.0, match.group(6)
        )
        return CoordinateValidator.to_point(lat, lon)

    @staticmethod
    def parse_formatted(text: str) -> GeoPoint:
        """Parse unsigned decimal degrees followed by hemisphere letters."""
        match = FORMATTED_PATTERN.search(text)
        if not match:
            return GeoPoint.absent()
        lat = NumberNormalizer.apply_hemisphere(float(match.group(1)), match.group(2))
        lon = NumberNormalizer.apply_hemisphere(float(match.group(3)), match.group(4))
        return CoordinateValidator.to_point(lat, lon)

    PARSERS: dict[CoordinateFormat, Callable[[str], GeoPoint]] = {
        CoordinateFormat.DECIMAL: parse_decimal.__func__,
        CoordinateFormat.DMS: parse_dms.__func__,
        CoordinateFormat.DM: parse_dm.__func__,
        CoordinateFormat.FORMATTED: parse_formatted.__func__,
    }

    @classmethod
    def parse(cls, text: Optional[str], fmt: Optional[CoordinateFormat] = None) -> GeoPoint:
        """
        Parse a coordinate string.

        Args:
            text: Coordinate string.
            fmt: Notation to parse as. Detected when omitted.

        Returns:
            The decoded GeoPoint, or an absent point when the notation is
            unrecognized, detect-only, or the values are out of range.
        """
        prepared = CoordinateFormatDetector.prepare(text)
        if not prepared:
            return GeoPoint.absent()

        if fmt is None:
            fmt = CoordinateFormatDetector.detect(prepared)
            if fmt is None:
                logger.parse_failed(text=prepared, reason="unrecognized_format")
                return GeoPoint.absent()

        parser = cls.PARSERS.get(fmt)
        if parser is None:
            logger.format_not_supported(format=fmt.value)
            return GeoPoint.absent()

        point = parser(prepared)
        if not point.is_present:
            logger.parse_failed(text=prepared, reason="invalid_value", format=fmt.value)
        return point


def parse_coordinates(text: Optional[str], fmt: Optional[CoordinateFormat] = None) -> GeoPoint:
    return CoordinateParser.parse(text, fmt)
