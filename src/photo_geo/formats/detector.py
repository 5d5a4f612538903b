"""Classification of free-form strings into coordinate notations."""

from typing import Callable, Optional

from ..models.enums import CoordinateFormat
from ..normalizers.text import TextNormalizer
from .patterns import (
    DECIMAL_PATTERN,
    DMS_PATTERN,
    DM_PATTERN,
    FORMATTED_PATTERN,
    PLUS_CODE_PATTERN,
    UTM_PATTERN,
    MGRS_PATTERN,
)


class CoordinateFormatDetector:
    """
    Detects which notation a coordinate string is written in.

    Detectors run in a fixed priority order and the first match wins, so a
    plain decimal pair is never mistaken for one of the looser notations.
    A string with no match should be handed to the text extractor instead.
    """

    DETECTORS: list[tuple[CoordinateFormat, Callable[[str], bool]]] = [
        (CoordinateFormat.DECIMAL, lambda s: DECIMAL_PATTERN.match(s) is not None),
        (CoordinateFormat.DMS, lambda s: DMS_PATTERN.search(s) is not None),
        (CoordinateFormat.DM, lambda s: DM_PATTERN.search(s) is not None),
        (CoordinateFormat.FORMATTED, lambda s: FORMATTED_PATTERN.search(s) is not None),
        (CoordinateFormat.PLUS_CODE, lambda s: PLUS_CODE_PATTERN.match(s) is not None),
        (CoordinateFormat.UTM, lambda s: UTM_PATTERN.match(s) is not None),
        (CoordinateFormat.MGRS, lambda s: MGRS_PATTERN.match(s) is not None),
    ]

    @staticmethod
    def prepare(text: Optional[str]) -> str:
        """Trim and fold symbol look-alikes; non-strings become ''."""
        if not text or not isinstance(text, str):
            return ""
        return TextNormalizer.normalize_symbols(text).strip()

    @classmethod
    def detect(cls, text: Optional[str]) -> Optional[CoordinateFormat]:
        """
        Classify a string.

        Args:
            text: Candidate coordinate string.

        Returns:
            The first matching CoordinateFormat, or None if unrecognized.
        """
        prepared = cls.prepare(text)
        if not prepared:
            return None
        for fmt, matches in cls.DETECTORS:
            if matches(prepared):
                return fmt
        return None

    @classmethod
    def matches(cls, text: Optional[str], fmt: CoordinateFormat) -> bool:
        """Check a string against one notation's predicate."""
        prepared = cls.prepare(text)
        if not prepared:
            return False
        for candidate, predicate in cls.DETECTORS:
            if candidate is fmt:
                return predicate(prepared)
        return False

    @classmethod
    def is_valid(cls, text: Optional[str]) -> bool:
        """Whether the string is in any recognised notation."""
        return cls.detect(text) is not None

    @classmethod
    def is_parseable(cls, text: Optional[str]) -> bool:
        """Whether the string is in a notation that can be converted to decimal degrees."""
        fmt = cls.detect(text)
        return fmt is not None and fmt.is_parseable


def detect_coordinate_format(text: Optional[str]) -> Optional[CoordinateFormat]:
    return CoordinateFormatDetector.detect(text)


def is_valid_coordinate_string(text: Optional[str]) -> bool:
    return CoordinateFormatDetector.is_valid(text)
