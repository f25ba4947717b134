"""
Search orchestrator - drives the key-space search.

This module implements the search loop:
1. Pick the transform and key-space strategy for the cipher family
2. Fan the outer dimension (key length or period) out over a thread pool
3. Score every decryption and keep the best in a shared top-K collector
4. Rank the survivors once every worker has finished
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum

from cryptsearch.core.config import Settings, get_settings
from cryptsearch.core.exceptions import SearchCancelledError, SearchError, SearchTimeoutError
from cryptsearch.models.schemas import CipherFamily, SearchConfiguration
from cryptsearch.services.keyspace.generator import KeySpace, build_key_space
from cryptsearch.services.scoring.scorer import EnglishScorer
from cryptsearch.services.search.cancellation import CancellationToken
from cryptsearch.services.search.collector import Candidate, TopKCollector
from cryptsearch.services.transforms.base import Transform
from cryptsearch.services.transforms.registry import TransformRegistry

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    """Orchestrator lifecycle. There is no way back to IDLE."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class NoSolution:
    """Result of a search that produced no candidate at all."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_SOLUTION"


NO_SOLUTION = NoSolution()


@dataclass
class SearchOutcome:
    """Result of one orchestrated search."""

    # Ranked best-first; empty when nothing was attempted
    candidates: list[Candidate]

    keys_tried: int
    outer_values: list[int] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def found(self) -> bool:
        return bool(self.candidates)


class SearchOrchestrator:
    """
    Runs a single search from IDLE to COMPLETED.

    Each outer value is one unit of work; a worker enumerates all keys
    for its value without further splitting, so the largest key length
    usually finishes last. The top-K collector is the only state shared
    between workers.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        scorer: EnglishScorer | None = None,
    ):
        self.settings = settings or get_settings()
        self.scorer = scorer or EnglishScorer(
            space_bonus=self.settings.score_space_bonus,
            symbol_penalty=self.settings.score_symbol_penalty,
        )
        self.registry = TransformRegistry()
        self.state = SearchState.IDLE

    def run(
        self,
        text: str,
        config: SearchConfiguration,
        cancel_token: CancellationToken | None = None,
    ) -> SearchOutcome:
        """
        Run the search to completion.

        Args:
            text: Ciphertext, already sanitized by the caller
            config: Search parameters
            cancel_token: Optional token the caller can use to stop the search

        Returns:
            SearchOutcome with ranked candidates

        Raises:
            SearchCancelledError: If the token was cancelled mid-search
            SearchTimeoutError: If the configured deadline passed mid-search
        """
        if self.state != SearchState.IDLE:
            raise SearchError("Orchestrator already used", {"state": self.state.value})

        token = cancel_token or CancellationToken()
        if config.timeout_seconds is not None:
            token.arm(config.timeout_seconds)

        transform = self.registry.get_transform(config.cipher_family)
        if transform is None:
            raise SearchError(
                f"No transform registered for '{config.cipher_family.value}'",
                {"cipher_family": config.cipher_family.value},
            )

        key_space = build_key_space(config, len(text), self.settings)
        collector = TopKCollector(self._capacity_for(config.cipher_family))
        outer = key_space.outer_values()

        self.state = SearchState.RUNNING
        started = time.monotonic()
        logger.info(
            "Starting %s search over %s (text length %d)",
            config.cipher_family.value, outer, len(text),
        )

        keys_tried = 0
        interrupted = False
        try:
            if outer:
                workers = max(1, min(self.settings.max_parallel_workers, len(outer)))
                with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cryptsearch") as executor:
                    futures = [
                        executor.submit(
                            self._explore, text, config, value, key_space, transform, collector, token
                        )
                        for value in outer
                    ]
                    try:
                        for future in as_completed(futures):
                            tried, complete = future.result()
                            keys_tried += tried
                            interrupted = interrupted or not complete
                    except Exception:
                        # Stop the remaining workers before the pool joins them
                        token.cancel()
                        raise
        finally:
            self.state = SearchState.COMPLETED

        elapsed = time.monotonic() - started

        if interrupted:
            logger.warning("Search stopped early after %d keys", keys_tried)
            if token.cancelled:
                raise SearchCancelledError(keys_tried)
            raise SearchTimeoutError(token.timeout or 0.0, keys_tried)

        candidates = collector.extract_ranked()
        logger.info(
            "Finished %s search: %d keys in %.2fs, best score %s",
            config.cipher_family.value,
            keys_tried,
            elapsed,
            f"{candidates[0].score:.1f}" if candidates else "n/a",
        )

        return SearchOutcome(
            candidates=candidates,
            keys_tried=keys_tried,
            outer_values=outer,
            elapsed_seconds=elapsed,
        )

    def _capacity_for(self, family: CipherFamily) -> int:
        if family.is_transposition:
            return self.settings.transposition_top_k
        return self.settings.polyalphabetic_top_k

    def _explore(
        self,
        text: str,
        config: SearchConfiguration,
        outer_value: int,
        key_space: KeySpace,
        transform: Transform,
        collector: TopKCollector,
        token: CancellationToken,
    ) -> tuple[int, bool]:
        """
        Try every key for one outer value.

        Returns:
            (keys tried, whether the enumeration ran to the end)
        """
        if token.should_stop():
            return 0, False

        interval = max(1, self.settings.cancel_check_interval)
        tried = 0

        for key in key_space.keys(text, outer_value):
            plaintext = transform.invert(text, key, config.transpose)
            collector.insert(Candidate(self.scorer.score(plaintext), plaintext, key))
            tried += 1

            if tried % interval == 0 and token.should_stop():
                logger.debug("Worker for %d stopped after %d keys", outer_value, tried)
                return tried, False

        logger.debug("Worker for %d tried %d keys", outer_value, tried)
        return tried, True


def run_search(
    text: str,
    config: SearchConfiguration,
    cancel_token: CancellationToken | None = None,
) -> list[Candidate] | NoSolution:
    """
    Search the key space and return the ranked candidates.

    Synchronous and potentially long-running; use start_search() to run
    it off the calling thread.

    Returns:
        Candidates best-first, or NO_SOLUTION when nothing could be tried
        (for example an empty text)
    """
    outcome = SearchOrchestrator().run(text, config, cancel_token)
    return outcome.candidates if outcome.found else NO_SOLUTION
