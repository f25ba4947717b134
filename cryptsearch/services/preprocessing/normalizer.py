import re
import string
import unicodedata
from enum import Enum


class NormalizationMode(str, Enum):
    """Text normalization modes."""

    STRIP_WHITESPACE = "strip_whitespace"  # Drop whitespace, keep everything else
    LETTERS_ONLY = "letters_only"  # ASCII letters only, lowercase


class TextNormalizer:
    """
    Prepares raw input for the search core.

    Handles:
    - Unicode normalization (NFKC)
    - Whitespace removal before a key search
    - Letter extraction for frequency statistics
    """

    def normalize(
        self,
        text: str,
        mode: NormalizationMode = NormalizationMode.STRIP_WHITESPACE,
    ) -> str:
        """
        Normalize text for the search core.

        Args:
            text: Input text to normalize
            mode: Normalization mode

        Returns:
            Normalized text string
        """
        text = unicodedata.normalize("NFKC", text)

        if mode == NormalizationMode.LETTERS_ONLY:
            allowed = set(string.ascii_lowercase)
            return "".join(char for char in text.lower() if char in allowed)

        return self.strip_whitespace(text)

    def strip_whitespace(self, text: str) -> str:
        """Remove all whitespace from text."""
        return re.sub(r"\s+", "", text)

    def letters_only(self, text: str) -> str:
        """Lowercase ASCII letters of `text`, everything else dropped."""
        return self.normalize(text, NormalizationMode.LETTERS_ONLY)
