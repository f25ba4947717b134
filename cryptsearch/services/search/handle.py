import logging
import queue
import threading

from cryptsearch.core.exceptions import SearchAbortedError, SearchError
from cryptsearch.models.schemas import SearchConfiguration
from cryptsearch.services.search.cancellation import CancellationToken
from cryptsearch.services.search.orchestrator import SearchOrchestrator, SearchOutcome

logger = logging.getLogger(__name__)


class SearchHandle:
    """
    A search running on a background thread.

    The thread posts exactly one message: either a SearchOutcome or the
    SearchError that ended the search. poll() never blocks; wait() does.
    """

    def __init__(self, text: str, config: SearchConfiguration):
        self.text = text
        self.config = config
        self.token = CancellationToken()
        self._messages: queue.Queue[SearchOutcome | SearchError] = queue.Queue(maxsize=1)
        self._result: SearchOutcome | SearchError | None = None
        self._thread = threading.Thread(
            target=self._run,
            name=f"cryptsearch-{config.cipher_family.value}",
            daemon=True,
        )

    def start(self) -> "SearchHandle":
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            message: SearchOutcome | SearchError = SearchOrchestrator().run(
                self.text, self.config, self.token
            )
        except SearchError as e:
            message = e
        except Exception:
            # Nothing is posted, so the reader sees SearchAbortedError
            logger.exception("Search thread failed")
            return
        self._messages.put(message)

    def poll(self) -> SearchOutcome | None:
        """
        Check for a finished search without blocking.

        Returns:
            The outcome, or None while the search is still running

        Raises:
            SearchCancelledError: If the search was cancelled
            SearchTimeoutError: If the search hit its deadline
            SearchAbortedError: If the thread ended without a result
        """
        if self._result is None:
            try:
                self._result = self._messages.get_nowait()
            except queue.Empty:
                if self._thread.is_alive():
                    return None
                # The thread may have posted between the two checks
                try:
                    self._result = self._messages.get_nowait()
                except queue.Empty:
                    self._result = SearchAbortedError(
                        "Search thread ended without a result",
                        {"cipher_family": self.config.cipher_family.value},
                    )
        return self._deliver()

    def wait(self, timeout: float | None = None) -> SearchOutcome | None:
        """Block until the search finishes, or until `timeout` seconds pass."""
        self._thread.join(timeout)
        return self.poll()

    def _deliver(self) -> SearchOutcome:
        if isinstance(self._result, SearchError):
            raise self._result
        return self._result

    def cancel(self) -> None:
        self.token.cancel()

    @property
    def done(self) -> bool:
        return self._result is not None or not self._thread.is_alive()


def start_search(text: str, config: SearchConfiguration) -> SearchHandle:
    """
    Start a search off the calling thread.

    Args:
        text: Ciphertext, already sanitized by the caller
        config: Search parameters

    Returns:
        Handle to poll, wait on or cancel
    """
    return SearchHandle(text, config).start()
