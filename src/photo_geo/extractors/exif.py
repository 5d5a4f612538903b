"""GPS coordinate extraction from EXIF metadata."""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import GPSTAGS

from .base import BaseExtractor, ExtractionMatch
from ..logging import GeoLogger
from ..models.geo_point import GeoPoint
from ..normalizers.numbers import NumberNormalizer
from ..validators.coordinates import CoordinateValidator


logger = GeoLogger(__name__)

# EXIF pointer to the GPS IFD
GPS_INFO_TAG = 0x8825


class ExifCoordinateExtractor(BaseExtractor):
    """Reads the GPS block of a photo's EXIF metadata."""

    CONFIDENCE = 1.0

    @staticmethod
    def _tag(tags: Mapping[Any, Any], name: str) -> Any:
        """Look a GPS tag up by name or by its numeric id."""
        if name in tags:
            return tags[name]
        for tag_id, tag_name in GPSTAGS.items():
            if tag_name == name:
                return tags.get(tag_id)
        return None

    @staticmethod
    def _ref(value: Any, default: str) -> str:
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode("ascii", errors="ignore")
        if not isinstance(value, str):
            return default
        value = value.strip("\x00 ").upper()
        return value or default

    def match(self, tags: Optional[Mapping[Any, Any]]) -> ExtractionMatch:
        """
        Convert EXIF GPS tags to a point.

        Args:
            tags: GPS IFD as a mapping keyed by tag name (``GPSLatitude``) or
                numeric tag id. Latitude/longitude are [D, M, S] rationals;
                missing hemisphere references default to N and E.

        Returns:
            ExtractionMatch with rule ``exif_gps``.
        """
        if not tags or not isinstance(tags, Mapping):
            return ExtractionMatch.none()

        latitude = self._tag(tags, "GPSLatitude")
        longitude = self._tag(tags, "GPSLongitude")
        if latitude is None or longitude is None:
            logger.extraction_failed(source="exif", reason="no_gps_tags")
            return ExtractionMatch.none()

        lat = NumberNormalizer.rationals_to_decimal(
            latitude, self._ref(self._tag(tags, "GPSLatitudeRef"), "N")
        )
        lon = NumberNormalizer.rationals_to_decimal(
            longitude, self._ref(self._tag(tags, "GPSLongitudeRef"), "E")
        )
        result = self.accept(CoordinateValidator.to_point(lat, lon), "exif_gps", self.CONFIDENCE)
        if result.found:
            logger.coordinates_extracted(
                source="exif", rule="exif_gps", lat=result.point.lat, lon=result.point.lon
            )
        else:
            logger.extraction_failed(source="exif", reason="invalid_gps_values")
        return result

    def match_file(self, path: Union[str, Path]) -> ExtractionMatch:
        """
        Read GPS tags from an image file with Pillow.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")

        try:
            with Image.open(path) as im:
                gps_ifd = im.getexif().get_ifd(GPS_INFO_TAG)
        except (UnidentifiedImageError, OSError, ValueError, TypeError) as ex:
            logger.extraction_failed(source="exif", reason="unreadable_image", error=str(ex))
            return ExtractionMatch.none()

        if not gps_ifd:
            logger.extraction_failed(source="exif", reason="no_gps_ifd", file_path=str(path))
            return ExtractionMatch.none()
        return self.match({GPSTAGS.get(tag, tag): value for tag, value in gps_ifd.items()})

    def from_file(self, path: Union[str, Path]) -> GeoPoint:
        """Read a photo's GPS location, or an absent point if it has none."""
        return self.match_file(path).point
