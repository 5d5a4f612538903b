"""Number parsing and degree arithmetic."""

import math
import re
from fractions import Fraction
from typing import Any, Optional, Sequence, Tuple


class NumberNormalizer:
    """Handles parsing of numbers and degree conversions from OCR text."""

    @staticmethod
    def parse_decimal(text: Optional[str]) -> Optional[float]:
        """
        Parse a decimal number, tolerating OCR noise around it.

        Example: '+55.7558°' -> 55.7558

        Returns None if parsing fails.
        """
        if not text:
            return None

        # Remove any non-numeric characters except dot and sign
        cleaned = re.sub(r"[^\d.+\-]", "", text)
        if not cleaned:
            return None

        try:
            value = float(cleaned)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        return value

    @staticmethod
    def parse_rational(value: Any) -> Optional[float]:
        """
        Convert one EXIF rational to float.

        Accepts ``(numerator, denominator)`` pairs, ``Fraction`` and Pillow's
        ``IFDRational``, objects exposing ``numerator``/``denominator``, and
        plain numbers. Returns None for zero denominators or other shapes.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float, Fraction)):
            result = float(value)
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            numerator, denominator = value
            if not denominator:
                return None
            result = float(numerator) / float(denominator)
        elif hasattr(value, "numerator") and hasattr(value, "denominator"):
            if not value.denominator:
                return None
            result = float(value.numerator) / float(value.denominator)
        else:
            return None
        return result if math.isfinite(result) else None

    @staticmethod
    def dms_to_decimal(
        degrees: float, minutes: float = 0.0, seconds: float = 0.0, hemisphere: str = ""
    ) -> float:
        """
        Convert degrees, minutes and seconds to signed decimal degrees.

        The sign is negative for the S and W hemispheres.

        Example: (55, 7, 24.4416, 'N') -> 55.123456
        """
        value = abs(degrees) + minutes / 60.0 + seconds / 3600.0
        return NumberNormalizer.apply_hemisphere(value, hemisphere)

    @staticmethod
    def apply_hemisphere(value: float, hemisphere: str) -> float:
        """Negate a magnitude for the southern/western hemisphere letters."""
        if hemisphere and hemisphere.strip().upper() in ("S", "W"):
            return -abs(value)
        return value

    @staticmethod
    def decimal_to_dms(value: float) -> Tuple[int, int, float]:
        """
        Split the magnitude of a decimal degree into (D, M, S).

        Example: 55.123456 -> (55, 7, 24.4416)
        """
        magnitude = abs(value)
        degrees = math.floor(magnitude)
        minutes_total = (magnitude - degrees) * 60
        minutes = math.floor(minutes_total)
        seconds = (minutes_total - minutes) * 60
        return int(degrees), int(minutes), seconds

    @staticmethod
    def decimal_to_dm(value: float) -> Tuple[int, float]:
        """
        Split the magnitude of a decimal degree into (D, decimal minutes).

        Example: 55.123456 -> (55, 7.40736)
        """
        magnitude = abs(value)
        degrees = math.floor(magnitude)
        return int(degrees), (magnitude - degrees) * 60

    @classmethod
    def rationals_to_decimal(cls, values: Sequence[Any], hemisphere: str = "") -> Optional[float]:
        """
        Convert an EXIF [degrees, minutes, seconds] rational triple.

        Missing trailing components count as zero; any unreadable component
        makes the whole value unreadable.
        """
        if values is None or isinstance(values, (str, bytes)):
            return None
        try:
            parts = list(values)
        except TypeError:
            return None
        if not 1 <= len(parts) <= 3:
            return None
        numbers = [cls.parse_rational(part) for part in parts]
        if any(number is None for number in numbers):
            return None
        numbers += [0.0] * (3 - len(numbers))
        return cls.dms_to_decimal(numbers[0], numbers[1], numbers[2], hemisphere)
