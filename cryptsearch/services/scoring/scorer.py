import string
from collections import Counter
from typing import ClassVar


class EnglishScorer:
    """
    Rates how much a string looks like English plaintext.

    The score is a weighted count over fixed frequency tables:
    - Trigrams and bigrams (overlapping occurrences)
    - Common words (substring occurrences, so unspaced text still scores)
    - Single letters, weighted by English letter frequency

    Optionally each space earns a bonus and each non-alphabetic,
    non-whitespace character costs a penalty, favouring properly spaced
    text over noise. Higher score = more plausible plaintext.
    """

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    # English letter frequencies (percentage), used directly as weights
    LETTER_WEIGHTS: ClassVar[dict[str, float]] = {
        "E": 12.70, "T": 9.06, "A": 8.17, "O": 7.51, "I": 6.97,
        "N": 6.75, "S": 6.33, "H": 6.09, "R": 5.99, "D": 4.25,
        "L": 4.03, "C": 2.78, "U": 2.76, "M": 2.41, "W": 2.36,
        "F": 2.23, "G": 2.02, "Y": 1.97, "P": 1.93, "B": 1.29,
        "V": 0.98, "K": 0.77, "J": 0.15, "X": 0.15, "Q": 0.10,
        "Z": 0.07,
    }

    # Most frequent bigrams, weight falls with rank
    BIGRAM_WEIGHTS: ClassVar[dict[str, float]] = {
        "TH": 30, "HE": 28, "IN": 24, "ER": 22, "AN": 20, "RE": 18,
        "ND": 16, "AT": 15, "ON": 15, "NT": 14, "HA": 13, "ES": 13,
        "ST": 13, "EN": 12, "ED": 12, "TO": 12, "IT": 11, "OU": 11,
        "EA": 11, "HI": 10, "IS": 10, "OR": 10, "TI": 9, "AS": 9,
        "TE": 9, "ET": 8, "NG": 8, "OF": 8, "AL": 8, "DE": 7,
        "SE": 7, "LE": 7, "SA": 6, "SI": 6, "AR": 6, "VE": 6,
        "RA": 6, "LD": 5, "UR": 5,
    }

    TRIGRAM_WEIGHTS: ClassVar[dict[str, float]] = {
        "THE": 60, "AND": 45, "ING": 40, "HER": 30, "ERE": 25,
        "ENT": 25, "THA": 22, "NTH": 20, "WAS": 20, "ETH": 18,
        "FOR": 18, "DTH": 16, "HAT": 16, "SHE": 15, "ION": 15,
        "INT": 14, "HIS": 14, "STH": 13, "ERS": 13, "VER": 12,
        "TER": 12, "EST": 12, "ATI": 11, "ALL": 11, "OFT": 10,
        "TIO": 10, "ITH": 10, "OUR": 9, "EAS": 8, "WIT": 8,
    }

    # Common words, weight grows with length since longer matches are rarer
    WORD_WEIGHTS: ClassVar[dict[str, float]] = {
        "THE": 20, "AND": 20, "THAT": 30, "HAVE": 30, "FOR": 15,
        "NOT": 15, "WITH": 30, "YOU": 15, "THIS": 30, "BUT": 15,
        "HIS": 15, "FROM": 30, "THEY": 30, "SAY": 15, "HER": 15,
        "SHE": 15, "WILL": 30, "ONE": 15, "ALL": 15, "WOULD": 40,
        "THERE": 40, "THEIR": 40, "WHAT": 30, "ABOUT": 40, "WHICH": 40,
        "WHEN": 30, "MAKE": 30, "CAN": 15, "LIKE": 30, "TIME": 30,
        "JUST": 30, "KNOW": 30, "TAKE": 30, "PEOPLE": 50, "INTO": 30,
        "YEAR": 30, "YOUR": 30, "GOOD": 30, "SOME": 30, "COULD": 40,
        "THEM": 30, "OTHER": 40, "THAN": 30, "THEN": 30, "NOW": 15,
        "ONLY": 30, "COME": 30, "OVER": 30, "ALSO": 30, "AFTER": 40,
        "FIRST": 40, "WELL": 30, "THESE": 40, "WHERE": 40, "BEEN": 30,
        "WERE": 30, "MORE": 30, "VERY": 30, "MUST": 30, "BECAUSE": 50,
    }

    def __init__(self, space_bonus: float = 0.0, symbol_penalty: float = 0.0):
        """
        Args:
            space_bonus: Added once per space character
            symbol_penalty: Subtracted once per non-alphabetic, non-whitespace character
        """
        self.space_bonus = space_bonus
        self.symbol_penalty = symbol_penalty

    def score(self, text: str) -> float:
        """
        Score a candidate plaintext.

        Args:
            text: Candidate plaintext (any case)

        Returns:
            Weighted occurrence count, higher is better
        """
        folded = text.upper()
        score = 0.0

        score += self._ngram_score(folded, 3, self.TRIGRAM_WEIGHTS)
        score += self._ngram_score(folded, 2, self.BIGRAM_WEIGHTS)
        score += sum(
            folded.count(word) * weight
            for word, weight in self.WORD_WEIGHTS.items()
        )

        letters = Counter(folded)
        score += sum(
            letters[letter] * weight
            for letter, weight in self.LETTER_WEIGHTS.items()
        )

        if self.space_bonus or self.symbol_penalty:
            spaces = letters[" "]
            symbols = sum(
                count for char, count in letters.items()
                if not char.isspace() and char not in self.LETTER_WEIGHTS
            )
            score += spaces * self.space_bonus - symbols * self.symbol_penalty

        return score

    def _ngram_score(self, text: str, n: int, weights: dict[str, float]) -> float:
        """Sum weights over every overlapping n-gram."""
        return sum(
            weights.get(text[i:i + n], 0.0)
            for i in range(len(text) - n + 1)
        )
