"""Tests for background searches."""

import pytest

from cryptsearch import start_search
from cryptsearch.core.exceptions import SearchAbortedError, SearchCancelledError
from cryptsearch.models.schemas import CipherFamily, SearchConfiguration
from cryptsearch.services.search import handle as handle_module


@pytest.fixture
def long_config():
    # 10! keys for the longest length; far longer than any test waits
    return SearchConfiguration(cipher_family=CipherFamily.COLUMNAR, max_key_length=10)


class TestSearchHandle:
    """Test suite for SearchHandle."""

    def test_delivers_outcome(self, short_plaintext):
        config = SearchConfiguration(cipher_family=CipherFamily.COLUMNAR, max_key_length=3)
        handle = start_search(short_plaintext, config)

        outcome = handle.wait(timeout=30)

        assert handle.done
        assert outcome.found
        assert outcome.keys_tried == 9

    def test_poll_while_running(self, long_config):
        handle = start_search("thequickbrownfoxjumps", long_config)
        try:
            assert handle.poll() is None
            assert not handle.done
        finally:
            handle.cancel()
            with pytest.raises(SearchCancelledError):
                handle.wait(timeout=30)

    def test_cancel(self, long_config):
        handle = start_search("thequickbrownfoxjumps", long_config)
        handle.cancel()

        with pytest.raises(SearchCancelledError):
            handle.wait(timeout=30)

        # The result is kept; polling again raises the same error
        with pytest.raises(SearchCancelledError):
            handle.poll()

    def test_thread_dies_without_result(self, monkeypatch, short_plaintext):
        class ExplodingOrchestrator:
            def run(self, text, config, token):
                raise RuntimeError("boom")

        monkeypatch.setattr(handle_module, "SearchOrchestrator", ExplodingOrchestrator)
        config = SearchConfiguration(cipher_family=CipherFamily.COLUMNAR, max_key_length=3)
        handle = start_search(short_plaintext, config)

        with pytest.raises(SearchAbortedError):
            handle.wait(timeout=30)
