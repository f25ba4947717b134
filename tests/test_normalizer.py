"""Tests for input normalization."""

import pytest

from cryptsearch.services.preprocessing import NormalizationMode, TextNormalizer


class TestTextNormalizer:
    """Test whitespace stripping and letter extraction."""

    @pytest.fixture
    def normalizer(self):
        return TextNormalizer()

    def test_strip_whitespace_keeps_punctuation(self, normalizer):
        assert normalizer.strip_whitespace(" ab c,\td\n") == "abc,d"

    def test_letters_only(self, normalizer):
        assert normalizer.letters_only("Hello, World! 42") == "helloworld"

    def test_nfkc_applied(self, normalizer):
        assert normalizer.normalize("ﬁne", NormalizationMode.LETTERS_ONLY) == "fine"

    def test_default_mode_strips_whitespace(self, normalizer):
        assert normalizer.normalize("a b") == "ab"
