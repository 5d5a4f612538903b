"""Text normalization for OCR noise handling."""

import re


class TextNormalizer:
    """Folds OCR look-alike symbols onto the characters the patterns expect."""

    # Typographic and OCR variants of the degree, minute and second marks
    SYMBOL_CORRECTIONS = {
        "º": "°",
        "˚": "°",
        "’": "'",
        "‘": "'",
        "′": "'",
        "´": "'",
        "”": '"',
        "“": '"',
        "″": '"',
        "''": '"',
    }

    @classmethod
    def normalize_symbols(cls, text: str) -> str:
        """
        Replace symbol look-alikes.

        Example: '55º 7′ 24″ N' -> '55° 7\' 24" N'
        """
        for wrong, correct in cls.SYMBOL_CORRECTIONS.items():
            text = text.replace(wrong, correct)
        return text

    @staticmethod
    def normalize_whitespace(text: str) -> str:
        """
        Collapse runs of whitespace (including non-breaking spaces) to one space.

        Example: 'lat:\\u00a055.1\\n\\n lon: 37.2' -> 'lat: 55.1 lon: 37.2'
        """
        return re.sub(r"\s+", " ", text).strip()

    @classmethod
    def normalize(cls, text: str) -> str:
        """
        Apply all text normalizations.

        1. Fix symbol look-alikes
        2. Collapse whitespace
        """
        text = cls.normalize_symbols(text)
        text = cls.normalize_whitespace(text)
        return text
