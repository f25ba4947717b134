import string
from abc import abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from cryptsearch.core.exceptions import InvalidKeyError
from cryptsearch.models.schemas import CipherFamily
from cryptsearch.services.transforms.base import Key, Transform
from cryptsearch.services.transforms.registry import TransformRegistry


class ShiftTransform(Transform):
    """
    Shared machinery for periodic shift ciphers.

    The shift for the character at global index i is key[i mod P].
    Non-letters are copied through but still consume an index, and
    letters keep their case.
    """

    ALPHABET: ClassVar[str] = string.ascii_uppercase
    ALPHABET_SIZE: ClassVar[int] = 26

    @abstractmethod
    def _combine(self, value: int, shift: int) -> int:
        """Map a ciphertext letter index to a plaintext letter index."""
        pass

    def invert(
        self,
        ciphertext: str,
        key: Sequence[int],
        transpose: bool = False,
    ) -> str:
        period = len(key)
        if period == 0:
            return ciphertext

        result = []
        for i, char in enumerate(ciphertext):
            if "a" <= char <= "z":
                base = 97
            elif "A" <= char <= "Z":
                base = 65
            else:
                result.append(char)
                continue
            value = self._combine(ord(char) - base, key[i % period])
            result.append(chr(base + value))

        return "".join(result)

    def validate_key(self, key: Sequence[int]) -> None:
        """Shifts must lie in [0, 26)."""
        if len(key) == 0:
            raise InvalidKeyError("Key must not be empty")
        bad = [k for k in key if not 0 <= k < self.ALPHABET_SIZE]
        if bad:
            raise InvalidKeyError(
                f"Shifts must be in [0, {self.ALPHABET_SIZE})",
                {"invalid": bad},
            )

    def parse_key(self, key: str | Sequence[int]) -> Key:
        """Parse a shift list ("3,1,4") or a keyword ("LEMON" -> 11,4,12,14,13)."""
        numeric = self._parse_numeric(key)
        if numeric is not None:
            return numeric

        keyword = "".join(key.split()).upper()
        if not all(c in self.ALPHABET for c in keyword):
            raise InvalidKeyError("Keyword must be alphabetic", {"key": key})
        return tuple(self.ALPHABET.index(c) for c in keyword)


@TransformRegistry.register
class VigenereTransform(ShiftTransform):
    """
    Vigenère inverse: P = (C - K) mod 26.
    """

    name = "Vigenère Cipher"
    cipher_family = CipherFamily.VIGENERE
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different "
        "amount taken from a repeating key."
    )

    def _combine(self, value: int, shift: int) -> int:
        return (value - shift) % self.ALPHABET_SIZE


@TransformRegistry.register
class BeaufortTransform(ShiftTransform):
    """
    Beaufort inverse: P = (K - C) mod 26.

    Beaufort is self-reciprocal, so this same operation also encrypts.
    """

    name = "Beaufort Cipher"
    cipher_family = CipherFamily.BEAUFORT
    description = (
        "A reciprocal cipher where C = (K - P) mod 26; "
        "the same operation encrypts and decrypts."
    )

    def _combine(self, value: int, shift: int) -> int:
        return (shift - value) % self.ALPHABET_SIZE
