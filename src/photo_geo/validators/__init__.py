"""Validation utilities for decoded coordinates."""

from .coordinates import CoordinateValidator
from .confidence import ConfidenceValidator

__all__ = ["CoordinateValidator", "ConfidenceValidator"]
