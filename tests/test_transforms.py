"""Tests for the inverse transforms and the transform registry."""

import pytest

from cryptsearch.core.exceptions import InvalidKeyError
from cryptsearch.models.schemas import CipherFamily
from cryptsearch.services.transforms import (
    BeaufortTransform,
    ColumnarTransform,
    PeriodicTransform,
    TransformRegistry,
    VigenereTransform,
    modulo_groups,
)
from tests.conftest import (
    beaufort_encrypt,
    columnar_encrypt,
    keyword_shifts,
    periodic_encrypt,
    vigenere_encrypt,
)


class TestTransformRegistry:
    """Test the transform registry."""

    def test_all_families_registered(self):
        registered = TransformRegistry.list_registered()
        for family in CipherFamily:
            assert family in registered, f"{family} not registered"

    def test_instances_are_cached(self):
        registry = TransformRegistry()
        first = registry.get_transform(CipherFamily.COLUMNAR)
        second = registry.get_transform(CipherFamily.COLUMNAR)
        assert first is second
        assert isinstance(first, ColumnarTransform)


class TestModuloGroups:
    """Test index-mod-period grouping."""

    def test_groups_by_index(self):
        assert modulo_groups("abcdefg", 3) == ["adg", "be", "cf"]

    def test_period_longer_than_text(self):
        assert modulo_groups("ab", 4) == ["a", "b", "", ""]

    def test_non_positive_period(self):
        assert modulo_groups("abc", 0) == []


class TestColumnarTransform:
    """Test columnar transposition inverse."""

    @pytest.fixture
    def transform(self):
        return ColumnarTransform()

    def test_known_example(self, transform):
        assert transform.invert("enhawlfdesadetetl", (2, 0, 1)) == "defendtheeastwall"

    @pytest.mark.parametrize("key", [(0,), (1, 0), (2, 0, 1), (3, 1, 4, 0, 2), (5, 2, 0, 6, 1, 4, 3)])
    def test_roundtrip_default_layout(self, transform, passage, key):
        ciphertext = columnar_encrypt(passage, list(key))
        assert transform.invert(ciphertext, key) == passage

    @pytest.mark.parametrize("key", [(1, 0), (2, 0, 1), (3, 1, 4, 0, 2), (5, 2, 0, 6, 1, 4, 3)])
    def test_roundtrip_transpose_layout(self, transform, passage, key):
        ciphertext = columnar_encrypt(passage, list(key), transpose=True)
        assert transform.invert(ciphertext, key, transpose=True) == passage

    def test_layouts_differ(self, transform, short_plaintext):
        ciphertext = columnar_encrypt(short_plaintext, [2, 0, 1])
        assert transform.invert(ciphertext, (2, 0, 1), transpose=True) != short_plaintext

    def test_key_as_long_as_text_is_a_permutation(self, transform):
        # One row: every column holds a single character
        assert transform.invert("cab", (1, 2, 0)) == "abc"

    def test_empty_text(self, transform):
        assert transform.invert("", (1, 0)) == ""

    def test_parse_keyword(self, transform):
        assert transform.parse_key("ZEBRA") == (4, 2, 1, 3, 0)

    def test_parse_numeric_string(self, transform):
        assert transform.parse_key("2, 0, 1") == (2, 0, 1)

    def test_validate_rejects_non_permutation(self, transform):
        with pytest.raises(InvalidKeyError):
            transform.validate_key((0, 0, 1))

    def test_validate_rejects_empty(self, transform):
        with pytest.raises(InvalidKeyError):
            transform.validate_key(())


class TestPeriodicTransform:
    """Test periodic transposition inverse."""

    @pytest.fixture
    def transform(self):
        return PeriodicTransform()

    def test_complete_blocks(self, transform):
        # Blocks "bca" and "efd" with out[key[i]] = chunk[i]
        assert transform.invert("bcaefd", (1, 2, 0)) == "abcdef"

    def test_roundtrip(self, transform, passage):
        key = [2, 0, 3, 1]
        ciphertext = periodic_encrypt(passage, key)
        assert transform.invert(ciphertext, tuple(key)) == passage

    def test_tail_passes_through(self, transform):
        # 8 characters with period 3 leave a 2 character tail
        result = transform.invert("bcaefdgh", (1, 2, 0))
        assert result.endswith("gh")
        assert len(result) == 8


class TestShiftTransforms:
    """Test Vigenere and Beaufort inverses."""

    @pytest.fixture
    def vigenere(self):
        return VigenereTransform()

    @pytest.fixture
    def beaufort(self):
        return BeaufortTransform()

    def test_vigenere_known_example(self, vigenere):
        key = vigenere.parse_key("LEMON")
        assert vigenere.invert("LXFOPVEFRNHR", key) == "ATTACKATDAWN"

    def test_vigenere_roundtrip(self, vigenere, passage):
        shifts = keyword_shifts("cipher")
        ciphertext = vigenere_encrypt(passage, shifts)
        assert vigenere.invert(ciphertext, tuple(shifts)) == passage

    def test_beaufort_roundtrip(self, beaufort, passage):
        shifts = keyword_shifts("fortify")
        ciphertext = beaufort_encrypt(passage, shifts)
        assert beaufort.invert(ciphertext, tuple(shifts)) == passage

    def test_beaufort_self_reciprocal(self, beaufort):
        key = (3, 17, 8)
        text = "Attack At Dawn"
        assert beaufort.invert(beaufort.invert(text, key), key) == text

    def test_case_preserved(self, vigenere):
        assert vigenere.invert("BcD", (1, 1, 1)) == "AbC"

    def test_non_letters_consume_key_positions(self, vigenere):
        # The space takes the second key position, so "d" gets shift 2
        assert vigenere.invert("b d", (1, 1, 2)) == "a b"

    def test_parse_numeric_key(self, vigenere):
        assert vigenere.parse_key([3, 1, 4]) == (3, 1, 4)

    def test_parse_rejects_non_alphabetic_keyword(self, vigenere):
        with pytest.raises(InvalidKeyError):
            vigenere.parse_key("le-mon")

    def test_validate_rejects_out_of_range(self, vigenere):
        with pytest.raises(InvalidKeyError):
            vigenere.validate_key((1, 26))
