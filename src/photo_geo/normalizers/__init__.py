"""Text and number normalization utilities for OCR noise handling."""

from .text import TextNormalizer
from .numbers import NumberNormalizer

__all__ = ["TextNormalizer", "NumberNormalizer"]
