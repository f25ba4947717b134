import itertools
import logging
import math
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterator
from typing import ClassVar

from cryptsearch.core.config import Settings, get_settings
from cryptsearch.models.schemas import CipherFamily, SearchConfiguration
from cryptsearch.services.transforms.base import Key
from cryptsearch.services.transforms.grouping import modulo_groups

logger = logging.getLogger(__name__)


class KeySpace(ABC):
    """
    A stream of candidate keys, partitioned along one outer dimension.

    The outer dimension (key length or period) is what the orchestrator
    spreads across workers; each worker then walks keys() for its value.
    """

    def __init__(self, outer: list[int]):
        self.outer = outer

    def outer_values(self) -> list[int]:
        """Outer values that survived degenerate-input filtering."""
        return list(self.outer)

    @abstractmethod
    def keys(self, text: str, outer_value: int) -> Iterator[Key]:
        """Enumerate every candidate key for one outer value."""
        pass

    @abstractmethod
    def count(self, text: str, outer_value: int) -> int:
        """Number of keys keys() will yield for one outer value."""
        pass

    def total(self, text: str) -> int:
        """Number of keys across all outer values."""
        return sum(self.count(text, value) for value in self.outer)


class PermutationKeySpace(KeySpace):
    """
    Exhaustive permutations of 0..L-1 for transposition ciphers.

    L! keys per outer value, so the largest length dominates the run.
    """

    def keys(self, text: str, outer_value: int) -> Iterator[Key]:
        return itertools.permutations(range(outer_value))

    def count(self, text: str, outer_value: int) -> int:
        return math.factorial(outer_value)


class FrequencyKeySpace(KeySpace):
    """
    Shift vectors derived from per-column letter frequencies.

    For period P the ciphertext is split into P groups by index mod P.
    In each group the `top_letters` most frequent letters are assumed to
    stand for plaintext 'e', which fixes one candidate shift per letter.
    Keys are the Cartesian product of the per-group shift lists, so the
    space grows as top_letters ** P.
    """

    # Shift offset that maps a ciphertext letter onto 'e' (index 4)
    TARGET_OFFSETS: ClassVar[dict[CipherFamily, int]] = {
        CipherFamily.VIGENERE: 22,  # shift = c - 4
        CipherFamily.BEAUFORT: 4,   # shift = c + 4
    }

    def __init__(self, outer: list[int], family: CipherFamily, top_letters: int):
        super().__init__(outer)
        self.family = family
        self.top_letters = top_letters
        self.offset = self.TARGET_OFFSETS[family]

    def shift_options(self, text: str, period: int) -> list[list[int]]:
        """
        Candidate shifts for each key position.

        Args:
            text: The ciphertext
            period: Key length

        Returns:
            One list of shifts per position, best guess first
        """
        options = []
        for group in modulo_groups(text, period):
            counts = Counter(c for c in group.lower() if "a" <= c <= "z")
            ranked = sorted(counts, key=lambda letter: (-counts[letter], letter))
            top = ranked[:self.top_letters]

            if not top:
                # No letters at this position: the shift is irrelevant
                options.append([0])
                continue

            options.append([(ord(letter) - 97 + self.offset) % 26 for letter in top])

        return options

    def keys(self, text: str, outer_value: int) -> Iterator[Key]:
        return itertools.product(*self.shift_options(text, outer_value))

    def count(self, text: str, outer_value: int) -> int:
        return math.prod(len(shifts) for shifts in self.shift_options(text, outer_value))


def outer_values(config: SearchConfiguration, text_length: int) -> list[int]:
    """Key lengths (columnar) or periods to explore, minus degenerate ones."""
    if config.cipher_family == CipherFamily.COLUMNAR:
        requested = list(range(1, config.max_key_length + 1))
    elif config.check_all_periods:
        requested = list(range(config.period, config.max_key_length + 1))
    else:
        requested = [config.period]

    usable = [value for value in requested if 1 <= value <= text_length]
    skipped = sorted(set(requested) - set(usable))
    if skipped:
        logger.debug(
            "Skipping degenerate %s lengths %s for text of length %d",
            config.cipher_family.value, skipped, text_length,
        )
    return usable


def build_key_space(
    config: SearchConfiguration,
    text_length: int,
    settings: Settings | None = None,
) -> KeySpace:
    """
    Pick the key-space strategy for a search configuration.

    Args:
        config: The search configuration
        text_length: Length of the ciphertext
        settings: Settings to read top-letter counts from

    Returns:
        KeySpace for the configured cipher family
    """
    settings = settings or get_settings()
    outer = outer_values(config, text_length)

    if config.cipher_family.is_transposition:
        return PermutationKeySpace(outer)

    if config.cipher_family == CipherFamily.VIGENERE:
        top_letters = settings.vigenere_top_letters
    else:
        top_letters = settings.beaufort_top_letters
    return FrequencyKeySpace(outer, config.cipher_family, top_letters)


def count_keys(text: str, config: SearchConfiguration) -> int:
    """
    Total number of keys a search will try.

    Computed up front (sum of factorials, or product sizes for shift
    ciphers) so a caller can drive a progress indicator.
    """
    return build_key_space(config, len(text)).total(text)
