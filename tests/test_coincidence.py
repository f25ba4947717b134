"""Tests for the Index-of-Coincidence period estimator."""

import random

import pytest

from cryptsearch.services.analysis import CoincidenceEstimator, estimate_period
from tests.conftest import keyword_shifts, vigenere_encrypt


class TestIndexOfCoincidence:
    """Test the raw IC statistic."""

    @pytest.fixture
    def estimator(self):
        return CoincidenceEstimator()

    def test_identical_letters(self, estimator):
        assert estimator.index_of_coincidence("aaaa") == 1.0

    def test_distinct_letters(self, estimator):
        assert estimator.index_of_coincidence("abcdef") == 0.0

    def test_short_groups_contribute_zero(self, estimator):
        assert estimator.index_of_coincidence("a") == 0.0
        assert estimator.index_of_coincidence("") == 0.0

    def test_english_is_near_reference(self, estimator, passage):
        assert estimator.index_of_coincidence(passage) == pytest.approx(0.066, abs=0.01)


class TestEstimatePeriod:
    """Test period ranking."""

    @pytest.fixture
    def ciphertext(self, passage):
        return vigenere_encrypt(passage, keyword_shifts("lemon"))

    def test_reports_every_period(self, ciphertext):
        report = estimate_period(ciphertext, 10)
        assert sorted(e.period for e in report.estimates) == list(range(1, 11))
        assert report.reference_ic == 0.066

    def test_ranked_by_distance(self, ciphertext):
        distances = [e.distance for e in estimate_period(ciphertext, 10).estimates]
        assert distances == sorted(distances)

    def test_column_ics_per_period(self, ciphertext):
        for estimate in estimate_period(ciphertext, 6).estimates:
            assert len(estimate.column_ics) == estimate.period
            assert estimate.average_ic == pytest.approx(sum(estimate.column_ics) / estimate.period)

    def test_period_five_vigenere_sample(self, ciphertext):
        report = estimate_period(ciphertext[:260], 10)
        assert {5, 10} & set(report.best_periods(2))

    def test_period_five_vigenere_full_text(self, ciphertext):
        report = estimate_period(ciphertext, 10)
        assert set(report.best_periods(2)) == {5, 10}

    def test_true_period_ranks_no_worse_than_shuffled(self, ciphertext):
        letters = list(ciphertext)
        random.Random(3).shuffle(letters)
        shuffled = "".join(letters)

        def best_rank(text):
            ranked = estimate_period(text, 10).best_periods(10)
            return min(ranked.index(5), ranked.index(10))

        assert best_rank(ciphertext) <= best_rank(shuffled)

    def test_case_and_punctuation_ignored(self, ciphertext):
        noisy = " ".join(ciphertext[i:i + 7].upper() + "," for i in range(0, len(ciphertext), 7))
        assert estimate_period(noisy, 10).best_periods(2) == estimate_period(ciphertext, 10).best_periods(2)

    def test_non_positive_max_period(self, ciphertext):
        assert estimate_period(ciphertext, 0).estimates == []

    def test_text_shorter_than_period(self):
        report = estimate_period("ab", 4)
        assert all(e.average_ic == 0.0 for e in report.estimates)
