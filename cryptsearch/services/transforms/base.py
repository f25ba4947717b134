from abc import ABC, abstractmethod
from collections.abc import Sequence

from cryptsearch.core.exceptions import InvalidKeyError
from cryptsearch.models.schemas import CipherFamily

Key = tuple[int, ...]


class Transform(ABC):
    """
    Abstract base class for cipher inverse transforms.

    Each cipher family provides:
    - invert(): Reconstruct plaintext from ciphertext and a candidate key
    - parse_key(): Turn user-supplied key material into a Key tuple
    - validate_key(): Reject keys that do not fit the family
    """

    # Transform metadata
    name: str
    cipher_family: CipherFamily
    description: str

    @abstractmethod
    def invert(
        self,
        ciphertext: str,
        key: Sequence[int],
        transpose: bool = False,
    ) -> str:
        """
        Decrypt ciphertext under a candidate key.

        This is called once per enumerated key, so implementations
        trust the key shape; use validate_key() for untrusted input.

        Args:
            ciphertext: The ciphertext to invert
            key: Permutation or shift vector, depending on the family
            transpose: Alternate output layout (columnar only)

        Returns:
            Candidate plaintext of the same length as the ciphertext
        """
        pass

    @abstractmethod
    def validate_key(self, key: Sequence[int]) -> None:
        """
        Validate that a key is usable for this family.

        Raises:
            InvalidKeyError: If the key is malformed
        """
        pass

    @abstractmethod
    def parse_key(self, key: str | Sequence[int]) -> Key:
        """
        Parse user-supplied key material.

        Args:
            key: A list of integers, a comma/space separated string of
                integers, or a keyword

        Returns:
            Key tuple
        """
        pass

    def _parse_numeric(self, key: str | Sequence[int]) -> Key | None:
        """Parse integer key material, or return None for a keyword."""
        if not isinstance(key, str):
            try:
                return tuple(int(k) for k in key)
            except (TypeError, ValueError) as e:
                raise InvalidKeyError(f"Key must contain integers: {key!r}") from e

        parts = key.replace(",", " ").split()
        if not parts:
            raise InvalidKeyError("Key is empty")
        if all(part.lstrip("-").isdigit() for part in parts):
            return tuple(int(part) for part in parts)
        return None
