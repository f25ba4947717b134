import threading
import time


class CancellationToken:
    """
    Cooperative stop signal shared between a caller and search workers.

    Workers poll should_stop() between outer values and every few
    thousand keys; the caller either cancels explicitly or arms a
    deadline.
    """

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self.timeout: float | None = None
        self._deadline: float | None = None
        if timeout is not None:
            self.arm(timeout)

    def arm(self, timeout: float) -> None:
        """Start a deadline `timeout` seconds from now, unless one is set."""
        if self._deadline is None:
            self.timeout = timeout
            self._deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def should_stop(self) -> bool:
        return self.cancelled or self.expired
