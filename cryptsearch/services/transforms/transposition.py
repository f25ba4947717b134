from collections.abc import Sequence

from cryptsearch.core.exceptions import InvalidKeyError
from cryptsearch.models.schemas import CipherFamily
from cryptsearch.services.transforms.base import Key, Transform
from cryptsearch.services.transforms.registry import TransformRegistry


class PermutationTransform(Transform):
    """Shared key handling for transforms keyed by a permutation."""

    def validate_key(self, key: Sequence[int]) -> None:
        """A key must be a permutation of 0..L-1."""
        if len(key) == 0:
            raise InvalidKeyError("Key must not be empty")
        if sorted(key) != list(range(len(key))):
            raise InvalidKeyError(
                f"Key must be a permutation of 0..{len(key) - 1}",
                {"key": list(key)},
            )

    def parse_key(self, key: str | Sequence[int]) -> Key:
        """
        Parse a numeric ordering ("2,0,1") or a keyword ("ZEBRA").

        A keyword is converted to the rank of each of its letters, so
        "ZEBRA" becomes (4, 2, 1, 3, 0).
        """
        numeric = self._parse_numeric(key)
        if numeric is not None:
            return numeric

        keyword = "".join(key.split()).upper()
        ranked = sorted(range(len(keyword)), key=lambda i: keyword[i])
        order = [0] * len(keyword)
        for rank, position in enumerate(ranked):
            order[position] = rank
        return tuple(order)


@TransformRegistry.register
class ColumnarTransform(PermutationTransform):
    """
    Columnar transposition inverse.

    Encryption writes plaintext row by row into L columns and reads the
    columns out in key order: column `col` is read at step key[col].

    Example with key (2, 0, 1) and "DEFENDTHEEASTWALL" (n=17, 5 rows + 2):

    Key:    2 0 1
            ─────
            D E F
            E N D
            T H E
            E A S
            T W A
            L L

    Read order: column 1 "ENHAWL", column 2 "FDESA", column 0 "DETETL"

    With n = s*L + r, the first r columns hold s+1 characters and the rest
    hold s. Decryption walks the reading order, slices each column off the
    ciphertext with one advancing cursor and scatters it back.
    """

    name = "Columnar Transposition"
    cipher_family = CipherFamily.COLUMNAR
    description = (
        "Plaintext is written into a grid row by row and the columns are "
        "read out in the order given by a permutation key."
    )

    def invert(
        self,
        ciphertext: str,
        key: Sequence[int],
        transpose: bool = False,
    ) -> str:
        n = len(ciphertext)
        key_length = len(key)
        if n == 0 or key_length == 0:
            return ciphertext

        rows, long_columns = divmod(n, key_length)

        inverse = [0] * key_length
        for position, order in enumerate(key):
            inverse[order] = position

        result = [""] * n
        cursor = 0
        for idx in range(key_length):
            col = inverse[idx]
            length = rows + 1 if col < long_columns else rows
            block = ciphertext[cursor:cursor + length]
            cursor += length

            if transpose:
                # Column-major: each column lands in one contiguous run
                start = col * rows + (col if col < long_columns else long_columns)
                result[start:start + length] = block
            else:
                result[col::key_length] = block

        return "".join(result)


@TransformRegistry.register
class PeriodicTransform(PermutationTransform):
    """
    Periodic transposition inverse.

    The ciphertext is cut into consecutive blocks of the key length and
    each complete block is permuted: the character at block position i
    moves to position key[i]. A trailing partial block is returned
    unchanged, which does not undo the cipher for that tail.
    """

    name = "Periodic Transposition"
    cipher_family = CipherFamily.PERIODIC
    description = (
        "Characters are permuted within fixed-size blocks, "
        "reusing the same permutation for every block."
    )

    def invert(
        self,
        ciphertext: str,
        key: Sequence[int],
        transpose: bool = False,
    ) -> str:
        period = len(key)
        if period == 0:
            return ciphertext

        # out[key[i]] = chunk[i]  <=>  out[j] = chunk[inverse[j]]
        inverse = [0] * period
        for position, target in enumerate(key):
            inverse[target] = position

        complete = len(ciphertext) - len(ciphertext) % period
        blocks = []
        for start in range(0, complete, period):
            chunk = ciphertext[start:start + period]
            blocks.append("".join(chunk[i] for i in inverse))
        blocks.append(ciphertext[complete:])

        return "".join(blocks)
