"""Shared fixtures and forward cipher helpers for the test suite."""

import pytest

ALPHABET = "abcdefghijklmnopqrstuvwxyz"

DICKENS = (
    "it was the best of times it was the worst of times it was the age of wisdom "
    "it was the age of foolishness it was the epoch of belief it was the epoch of "
    "incredulity it was the season of light it was the season of darkness it was "
    "the spring of hope it was the winter of despair we had everything before us "
    "we had nothing before us we were all going direct to heaven we were all going "
    "direct the other way in short the period was so far like the present period "
    "that some of its noisiest authorities insisted on its being received for good "
    "or for evil in the superlative degree of comparison only"
)


def columnar_encrypt(plaintext: str, key: list[int], transpose: bool = False) -> str:
    """Write rows of len(key) columns, read column `col` at step key[col]."""
    length = len(key)
    rows, long_columns = divmod(len(plaintext), length)

    if transpose:
        columns = []
        start = 0
        for col in range(length):
            size = rows + 1 if col < long_columns else rows
            columns.append(plaintext[start:start + size])
            start += size
    else:
        columns = [plaintext[col::length] for col in range(length)]

    order = sorted(range(length), key=lambda col: key[col])
    return "".join(columns[col] for col in order)


def periodic_encrypt(plaintext: str, key: list[int]) -> str:
    """Permute each complete block; a trailing partial block is left as is."""
    period = len(key)
    complete = len(plaintext) - len(plaintext) % period
    blocks = [
        "".join(plaintext[start + key[i]] for i in range(period))
        for start in range(0, complete, period)
    ]
    return "".join(blocks) + plaintext[complete:]


def vigenere_encrypt(plaintext: str, shifts: list[int]) -> str:
    """Shift letters forward; every character advances the key position."""
    result = []
    for i, char in enumerate(plaintext):
        if char.isascii() and char.isalpha():
            base = 97 if char.islower() else 65
            shift = shifts[i % len(shifts)]
            result.append(chr((ord(char) - base + shift) % 26 + base))
        else:
            result.append(char)
    return "".join(result)


def beaufort_encrypt(plaintext: str, shifts: list[int]) -> str:
    """Beaufort is its own inverse: c = (k - p) mod 26."""
    result = []
    for i, char in enumerate(plaintext):
        if char.isascii() and char.isalpha():
            base = 97 if char.islower() else 65
            shift = shifts[i % len(shifts)]
            result.append(chr((shift - (ord(char) - base)) % 26 + base))
        else:
            result.append(char)
    return "".join(result)


def keyword_shifts(keyword: str) -> list[int]:
    return [ALPHABET.index(c) for c in keyword.lower()]


@pytest.fixture
def passage() -> str:
    """475 letters of English, no spaces."""
    return DICKENS.replace(" ", "")


@pytest.fixture
def short_plaintext() -> str:
    return "defendtheeastwall"
