"""Input normalization and size limits ahead of search and statistics."""

from cryptsearch.services.preprocessing.limits import check_ciphertext_length, check_search_limits
from cryptsearch.services.preprocessing.normalizer import NormalizationMode, TextNormalizer

__all__ = [
    "NormalizationMode",
    "TextNormalizer",
    "check_ciphertext_length",
    "check_search_limits",
]
