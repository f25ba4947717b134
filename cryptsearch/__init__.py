"""Key-space search for classical transposition and polyalphabetic ciphers."""

from cryptsearch.services.analysis.coincidence import estimate_period
from cryptsearch.services.keyspace.generator import count_keys
from cryptsearch.services.search.handle import start_search
from cryptsearch.services.search.orchestrator import NO_SOLUTION, run_search

__all__ = ["run_search", "estimate_period", "start_search", "count_keys", "NO_SOLUTION"]
