"""Coordinate extraction from OCR text and vendor OCR payloads."""

import re
from typing import Any, Callable

from .base import BaseExtractor, ExtractionMatch
from ..logging import GeoLogger
from ..models.geo_point import GeoPoint
from ..models.ocr_input import ProviderResult, is_array, is_mapping, iter_children
from ..normalizers.numbers import NumberNormalizer
from ..normalizers.text import TextNormalizer
from ..validators.coordinates import CoordinateValidator


logger = GeoLogger(__name__)

_DEG = r"(?:\s*°\s*|\s+)"
_HEMI_END = r"(?![^\W\d_])"


class TextCoordinateExtractor(BaseExtractor):
    """
    Finds a coordinate pair embedded in noisy OCR output.

    Text rules run from the most specific to the most speculative and the
    first rule producing an in-range pair wins:

    1. ``decimal_pair``   "55.7558, 37.6173" anywhere in the text
    2. ``labelled``       "Широта: 55.7558 ... Долгота: 37.6173" / "lat 55.7 lon 37.6"
    3. ``dms``            "55° 7' 24.44" N 37° 7' 24.44" E"
    4. ``dm``             "55° 7.407' N 37° 7.407' E"
    5. ``hemisphere``     "55.1234 N ... 37.1234 E"
    6. ``bare_numbers``   the first two numbers, as (lat, lon) or swapped

    Structured payloads (vendor JSON) are searched provider text first, then
    provider text blocks, then every other field depth-first.
    """

    SIMPLE_PAIR_PATTERN = re.compile(r"([+-]?\d+\.\d+)\s*[,;]\s*([+-]?\d+\.\d+)")

    # Whole label words only: "Latvia" or "ширина" are not labels
    LAT_LABEL_PATTERN = re.compile(
        r"\b(?:широта|шир|latitude|lat)\b\.?\s*[:=]?\s*([+-]?\d+(?:\.\d+)?)",
        re.IGNORECASE,
    )
    LON_LABEL_PATTERN = re.compile(
        r"\b(?:долгота|долг|longitude|long|lon|lng)\b\.?\s*[:=]?\s*([+-]?\d+(?:\.\d+)?)",
        re.IGNORECASE,
    )

    # Hemisphere letters may run straight into the next number ("20"N37°")
    DMS_PATTERN = re.compile(
        rf"(\d{{1,3}}){_DEG}(\d{{1,2}})\s*'\s*(\d{{1,2}}(?:\.\d+)?)\s*\"?\s*([NS]){_HEMI_END}[,;\s]*"
        rf"(\d{{1,3}}){_DEG}(\d{{1,2}})\s*'\s*(\d{{1,2}}(?:\.\d+)?)\s*\"?\s*([EW]){_HEMI_END}",
        re.IGNORECASE,
    )
    DM_PATTERN = re.compile(
        rf"(\d{{1,3}}){_DEG}(\d{{1,2}}(?:\.\d+)?)\s*'\s*([NS]){_HEMI_END}[,;\s]*"
        rf"(\d{{1,3}}){_DEG}(\d{{1,2}}(?:\.\d+)?)\s*'\s*([EW]){_HEMI_END}",
        re.IGNORECASE,
    )

    LAT_HEMISPHERE_PATTERN = re.compile(rf"(\d+\.?\d*)\s*°?\s*([NS]){_HEMI_END}", re.IGNORECASE)
    LON_HEMISPHERE_PATTERN = re.compile(rf"(\d+\.?\d*)\s*°?\s*([EW]){_HEMI_END}", re.IGNORECASE)

    BARE_NUMBER_PATTERN = re.compile(r"\d{1,3}\.?\d{1,8}")

    RULE_CONFIDENCE = {
        "decimal_pair": 0.95,
        "labelled": 0.9,
        "dms": 0.9,
        "dm": 0.85,
        "hemisphere": 0.8,
        "bare_numbers": 0.4,
    }

    # Vendor blocks searched before the generic walk
    PRIORITY_PROVIDERS = ("google",)

    def __init__(self, min_confidence: float = 0.0, max_depth: int = 32):
        """
        Initialize extractor.

        Args:
            min_confidence: Matches scoring below this are discarded.
            max_depth: Maximum nesting depth searched in structured payloads.
        """
        super().__init__(min_confidence)
        self.max_depth = max_depth
        self._rules: list[tuple[str, Callable[[str], GeoPoint]]] = [
            ("decimal_pair", self._match_decimal_pair),
            ("labelled", self._match_labelled),
            ("dms", self._match_dms),
            ("dm", self._match_dm),
            ("hemisphere", self._match_hemisphere),
            ("bare_numbers", self._match_bare_numbers),
        ]

    # =========================================================================
    # Text rules
    # =========================================================================

    def _match_decimal_pair(self, text: str) -> GeoPoint:
        for match in self.SIMPLE_PAIR_PATTERN.finditer(text):
            point = CoordinateValidator.to_point(
                NumberNormalizer.parse_decimal(match.group(1)),
                NumberNormalizer.parse_decimal(match.group(2)),
            )
            if point.is_present:
                return point
        return GeoPoint.absent()

    def _match_labelled(self, text: str) -> GeoPoint:
        lats = [NumberNormalizer.parse_decimal(m.group(1))
                for m in self.LAT_LABEL_PATTERN.finditer(text)]
        lons = [NumberNormalizer.parse_decimal(m.group(1))
                for m in self.LON_LABEL_PATTERN.finditer(text)]
        for lat in lats:
            for lon in lons:
                point = CoordinateValidator.to_point(lat, lon)
                if point.is_present:
                    return point
        return GeoPoint.absent()

    def _match_dms(self, text: str) -> GeoPoint:
        match = self.DMS_PATTERN.search(text)
        if not match:
            return GeoPoint.absent()
        g = match.groups()
        return CoordinateValidator.to_point(
            NumberNormalizer.dms_to_decimal(int(g[0]), int(g[1]), float(g[2]), g[3]),
            NumberNormalizer.dms_to_decimal(int(g[4]), int(g[5]), float(g[6]), g[7]),
        )

    def _match_dm(self, text: str) -> GeoPoint:
        match = self.DM_PATTERN.search(text)
        if not match:
            return GeoPoint.absent()
        g = match.groups()
        return CoordinateValidator.to_point(
            NumberNormalizer.dms_to_decimal(int(g[0]), float(g[1]), 0.0, g[2]),
            NumberNormalizer.dms_to_decimal(int(g[3]), float(g[4]), 0.0, g[5]),
        )

    def _match_hemisphere(self, text: str) -> GeoPoint:
        lat_match = self.LAT_HEMISPHERE_PATTERN.search(text)
        lon_match = self.LON_HEMISPHERE_PATTERN.search(text)
        if not (lat_match and lon_match):
            return GeoPoint.absent()
        lat = NumberNormalizer.parse_decimal(lat_match.group(1))
        lon = NumberNormalizer.parse_decimal(lon_match.group(1))
        if lat is None or lon is None:
            return GeoPoint.absent()
        return CoordinateValidator.to_point(
            NumberNormalizer.apply_hemisphere(lat, lat_match.group(2)),
            NumberNormalizer.apply_hemisphere(lon, lon_match.group(2)),
        )

    def _match_bare_numbers(self, text: str) -> GeoPoint:
        numbers = self.BARE_NUMBER_PATTERN.findall(text)
        if len(numbers) < 2:
            return GeoPoint.absent()
        axes = CoordinateValidator.assign_axes(
            NumberNormalizer.parse_decimal(numbers[0]),
            NumberNormalizer.parse_decimal(numbers[1]),
        )
        if axes is None:
            return GeoPoint.absent()
        return GeoPoint(lat=axes[0], lon=axes[1])

    def match_text(self, text: str) -> ExtractionMatch:
        """
        Run the text rules over one string.

        Args:
            text: Raw OCR text.

        Returns:
            The first rule match, or a not-found match.
        """
        normalized = TextNormalizer.normalize(text)
        if not normalized:
            return ExtractionMatch.none()

        for rule, finder in self._rules:
            result = self.accept(finder(normalized), rule, self.RULE_CONFIDENCE[rule])
            if result.found:
                logger.coordinates_extracted(
                    source="text", rule=rule, lat=result.point.lat, lon=result.point.lon
                )
                return result
        return ExtractionMatch.none()

    # =========================================================================
    # Structured payloads
    # =========================================================================

    def match(self, data: Any) -> ExtractionMatch:
        """
        Find coordinates in a string or a vendor OCR payload.

        Never raises for unexpected shapes: anything that is not text, a
        mapping or an array simply does not match.
        """
        result = self._match_node(data, depth=0)
        if not result.found:
            logger.extraction_failed(source="text", reason="no_coordinates")
        return result

    def _match_node(self, data: Any, depth: int) -> ExtractionMatch:
        if depth > self.max_depth:
            return ExtractionMatch.none()
        if isinstance(data, str):
            return self.match_text(data)
        if isinstance(data, (bytes, bytearray)):
            return self.match_text(bytes(data).decode("utf-8", errors="replace"))
        if is_mapping(data):
            return self._match_mapping(data, depth)
        for child in iter_children(data):
            result = self._match_node(child, depth + 1)
            if result.found:
                return result
        return ExtractionMatch.none()

    def _match_mapping(self, data: Any, depth: int) -> ExtractionMatch:
        scanned: set[int] = set()

        for provider_key in self.PRIORITY_PROVIDERS:
            provider = data.get(provider_key)
            if not is_mapping(provider):
                continue

            provider_text = provider.get("text")
            if provider_text is not None:
                scanned.add(id(provider_text))
                result = self._match_node(provider_text, depth + 2)
                if result.found:
                    return result

            blocks = self._provider_blocks(provider)
            if blocks:
                scanned.add(id(provider.get("bounding_boxes")))
                result = self._match_blocks(blocks)
                if result.found:
                    return result

        return self._walk(data, depth, scanned)

    def _provider_blocks(self, provider: Any) -> list[str]:
        result = ProviderResult.from_payload(provider)
        if result is None:
            return []
        return result.block_texts()

    def _match_blocks(self, blocks: list[str]) -> ExtractionMatch:
        # Coordinates are often split over adjacent blocks
        joined = self.match_text(" ".join(blocks))
        if joined.found:
            return joined
        for block in blocks:
            result = self.match_text(block)
            if result.found:
                return result
        return ExtractionMatch.none()

    def _walk(self, data: Any, depth: int, scanned: set[int]) -> ExtractionMatch:
        for value in data.values():
            if id(value) in scanned:
                continue
            if is_mapping(value):
                result = self._walk_child_mapping(value, depth + 1, scanned)
            elif isinstance(value, (str, bytes, bytearray)) or is_array(value):
                result = self._match_node(value, depth + 1)
            else:
                continue
            if result.found:
                return result
        return ExtractionMatch.none()

    def _walk_child_mapping(self, value: Any, depth: int, scanned: set[int]) -> ExtractionMatch:
        if depth > self.max_depth:
            return ExtractionMatch.none()
        # Priority providers were already searched; walk only their other fields
        if any(id(child) in scanned for child in value.values()):
            return self._walk(value, depth, scanned)
        return self._match_mapping(value, depth)


def extract_coordinates(data: Any) -> GeoPoint:
    """Extract coordinates from OCR text or a vendor payload with default settings."""
    return TextCoordinateExtractor().extract(data)
