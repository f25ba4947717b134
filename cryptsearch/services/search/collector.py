import heapq
import itertools
import threading
from dataclasses import dataclass

from cryptsearch.services.transforms.base import Key


@dataclass(frozen=True)
class Candidate:
    """One scored decryption attempt."""

    score: float
    plaintext: str
    key: Key


class TopKCollector:
    """
    Thread-safe bounded ranking of the best candidates seen so far.

    A min-heap of at most `capacity` entries; when full, a new candidate
    replaces the current minimum only if it scores strictly higher. The
    lock covers the check-and-evict step only, so workers score their
    candidates before contending for it.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._heap: list[tuple[float, int, Candidate]] = []
        # Insertion counter keeps heap entries comparable without touching Candidate
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    def insert(self, candidate: Candidate) -> None:
        """Offer a candidate; the lowest score is evicted past capacity."""
        with self._lock:
            entry = (candidate.score, next(self._sequence), candidate)
            if len(self._heap) < self.capacity:
                heapq.heappush(self._heap, entry)
            elif entry[0] > self._heap[0][0]:
                heapq.heapreplace(self._heap, entry)

    def extract_ranked(self) -> list[Candidate]:
        """Retained candidates, highest score first."""
        with self._lock:
            ranked = sorted(self._heap, reverse=True)
        return [candidate for _, _, candidate in ranked]

    def __len__(self) -> int:
        with self._lock:
            return len(self._heap)
