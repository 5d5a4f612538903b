"""Confidence scoring and flagging for extraction matches."""

from typing import Optional


class ConfidenceValidator:
    """Flags speculative extraction matches."""

    # Default thresholds
    LOW_CONFIDENCE_THRESHOLD = 0.7
    CRITICAL_THRESHOLD = 0.5

    def __init__(
        self,
        low_threshold: float = LOW_CONFIDENCE_THRESHOLD,
        critical_threshold: float = CRITICAL_THRESHOLD,
    ):
        """
        Initialize validator.

        Args:
            low_threshold: Threshold below which confidence is flagged as low.
            critical_threshold: Threshold below which confidence is flagged as critical.
        """
        self.low_threshold = low_threshold
        self.critical_threshold = critical_threshold

    def is_low(self, confidence: float) -> bool:
        return confidence < self.low_threshold

    def get_warning_message(
        self, rule: str, confidence: float
    ) -> Optional[str]:
        """
        Get warning message for a low confidence match.

        Args:
            rule: Name of the extraction rule that matched.
            confidence: Confidence score (0-1).

        Returns:
            Warning message if confidence is below threshold, None otherwise.
        """
        if confidence < self.critical_threshold:
            return (
                f"CRITICAL: coordinates from rule '{rule}' have very low confidence "
                f"({confidence:.0%}), verify manually"
            )
        elif confidence < self.low_threshold:
            return (
                f"WARNING: coordinates from rule '{rule}' have low confidence "
                f"({confidence:.0%})"
            )
        return None

    def get_summary(self, confidences: list[float]) -> dict:
        """
        Get summary statistics of confidence scores.

        Returns:
            Dictionary with min, max, avg, low_count and total_count.
        """
        if not confidences:
            return {
                "min": 0.0,
                "max": 0.0,
                "avg": 0.0,
                "low_count": 0,
                "total_count": 0,
            }

        return {
            "min": min(confidences),
            "max": max(confidences),
            "avg": sum(confidences) / len(confidences),
            "low_count": sum(1 for c in confidences if self.is_low(c)),
            "total_count": len(confidences),
        }
