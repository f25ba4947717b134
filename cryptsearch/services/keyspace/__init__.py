"""Candidate key enumeration per cipher family."""

from cryptsearch.services.keyspace.generator import (
    FrequencyKeySpace,
    KeySpace,
    PermutationKeySpace,
    build_key_space,
    count_keys,
    outer_values,
)

__all__ = [
    "KeySpace",
    "PermutationKeySpace",
    "FrequencyKeySpace",
    "build_key_space",
    "count_keys",
    "outer_values",
]
