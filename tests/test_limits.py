"""Tests for input size limits."""

import pytest

from cryptsearch.core.config import Settings
from cryptsearch.core.exceptions import CiphertextTooLongError, KeyLengthTooLargeError
from cryptsearch.models.schemas import CipherFamily, SearchConfiguration
from cryptsearch.services.preprocessing import check_ciphertext_length, check_search_limits


class TestCiphertextLength:
    """Test the shared ciphertext size check."""

    @pytest.fixture
    def settings(self):
        return Settings(max_ciphertext_length=5)

    def test_at_limit(self, settings):
        check_ciphertext_length("abcde", settings)

    def test_over_limit(self, settings):
        with pytest.raises(CiphertextTooLongError) as exc_info:
            check_ciphertext_length("abcdef", settings)
        assert exc_info.value.details == {"length": 6, "max_length": 5}


class TestSearchLimits:
    """Test the key length and period bound."""

    @pytest.fixture
    def settings(self):
        return Settings(max_search_key_length=8)

    def test_within_limit(self, settings):
        config = SearchConfiguration(cipher_family=CipherFamily.COLUMNAR, max_key_length=8, period=8)
        check_search_limits(config, settings)

    def test_max_key_length_over_limit(self, settings):
        config = SearchConfiguration(cipher_family=CipherFamily.COLUMNAR, max_key_length=10000)
        with pytest.raises(KeyLengthTooLargeError) as exc_info:
            check_search_limits(config, settings)
        assert exc_info.value.details["field"] == "max_key_length"

    def test_period_over_limit(self, settings):
        config = SearchConfiguration(cipher_family=CipherFamily.PERIODIC, period=9)
        with pytest.raises(KeyLengthTooLargeError) as exc_info:
            check_search_limits(config, settings)
        assert exc_info.value.details["field"] == "period"
