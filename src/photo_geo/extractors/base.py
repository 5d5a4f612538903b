"""Base class for coordinate extractors."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..models.geo_point import GeoPoint


@dataclass(frozen=True)
class ExtractionMatch:
    """Result of an extraction attempt."""

    point: GeoPoint
    rule: Optional[str] = None
    confidence: float = 0.0

    @property
    def found(self) -> bool:
        return self.point.is_present

    @classmethod
    def none(cls) -> "ExtractionMatch":
        return _NO_MATCH


_NO_MATCH = ExtractionMatch(point=GeoPoint.absent())


class BaseExtractor(ABC):
    """Abstract base class for coordinate extractors."""

    def __init__(self, min_confidence: float = 0.0):
        """
        Initialize extractor.

        Args:
            min_confidence: Matches scoring below this are discarded.
        """
        self.min_confidence = min_confidence

    @abstractmethod
    def match(self, data: Any) -> ExtractionMatch:
        """
        Find coordinates in the given input.

        Args:
            data: Extractor-specific input.

        Returns:
            ExtractionMatch; ``found`` is False when nothing usable was found.
        """
        pass

    def extract(self, data: Any) -> GeoPoint:
        """Find coordinates and return just the point (absent on failure)."""
        return self.match(data).point

    def accept(self, point: GeoPoint, rule: str, confidence: float) -> ExtractionMatch:
        """Wrap a rule result, applying the confidence floor."""
        if not point.is_present or confidence < self.min_confidence:
            return ExtractionMatch.none()
        return ExtractionMatch(point=point, rule=rule, confidence=confidence)
