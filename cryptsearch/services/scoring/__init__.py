"""English-likeness scoring for candidate plaintexts."""

from cryptsearch.services.scoring.scorer import EnglishScorer

__all__ = ["EnglishScorer"]
