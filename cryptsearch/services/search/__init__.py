"""Parallel key-space search with cooperative cancellation."""

from cryptsearch.services.search.cancellation import CancellationToken
from cryptsearch.services.search.collector import Candidate, TopKCollector
from cryptsearch.services.search.handle import SearchHandle, start_search
from cryptsearch.services.search.jobs import SearchJob, SearchJobManager
from cryptsearch.services.search.orchestrator import (
    NO_SOLUTION,
    NoSolution,
    SearchOrchestrator,
    SearchOutcome,
    SearchState,
    run_search,
)

__all__ = [
    "CancellationToken",
    "Candidate",
    "TopKCollector",
    "SearchOrchestrator",
    "SearchOutcome",
    "SearchState",
    "NoSolution",
    "NO_SOLUTION",
    "run_search",
    "SearchHandle",
    "start_search",
    "SearchJob",
    "SearchJobManager",
]
