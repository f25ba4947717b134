import logging
from collections import Counter
from typing import ClassVar

from cryptsearch.models.schemas import PeriodEstimate, PeriodReport
from cryptsearch.services.preprocessing.normalizer import TextNormalizer
from cryptsearch.services.transforms.grouping import modulo_groups

logger = logging.getLogger(__name__)


class CoincidenceEstimator:
    """
    Ranks candidate periods by Index of Coincidence.

    For each period the text is split into groups by index mod period;
    when the period matches the key length every group was enciphered
    with a single shift and keeps the IC of plain English. Periods are
    ranked by how close their average group IC comes to that value.
    """

    # Expected IC of English text; uniformly random letters give ~0.0385
    ENGLISH_IC: ClassVar[float] = 0.066

    def __init__(self, reference_ic: float | None = None):
        self.reference_ic = reference_ic if reference_ic is not None else self.ENGLISH_IC
        self.normalizer = TextNormalizer()

    def index_of_coincidence(self, text: str) -> float:
        """
        Calculate Index of Coincidence.

        IOC = sum f(f-1) / (N(N-1)); fewer than two characters give 0.
        """
        n = len(text)
        if n < 2:
            return 0.0

        counter = Counter(text)
        numerator = sum(f * (f - 1) for f in counter.values())
        return numerator / (n * (n - 1))

    def estimate(self, text: str, max_period: int) -> PeriodReport:
        """
        Measure periods 1..max_period.

        Args:
            text: Ciphertext; case and non-letters are ignored
            max_period: Largest period to measure

        Returns:
            PeriodReport ranked by ascending distance from English IC
        """
        letters = self.normalizer.letters_only(text)
        estimates = []

        for period in range(1, max_period + 1):
            column_ics = [
                self.index_of_coincidence(group)
                for group in modulo_groups(letters, period)
            ]
            average = sum(column_ics) / period
            estimates.append(
                PeriodEstimate(
                    period=period,
                    column_ics=column_ics,
                    average_ic=average,
                    distance=abs(average - self.reference_ic),
                )
            )

        # Stable sort keeps the smaller period first on equal distance
        estimates.sort(key=lambda estimate: estimate.distance)

        if estimates:
            logger.debug(
                "Period estimate over %d letters: best %d (IC %.4f)",
                len(letters), estimates[0].period, estimates[0].average_ic,
            )

        return PeriodReport(reference_ic=self.reference_ic, estimates=estimates)


def estimate_period(text: str, max_period: int) -> PeriodReport:
    """
    Rank periods 1..max_period by closeness to English IC.

    A max_period below 1 gives an empty report.
    """
    return CoincidenceEstimator().estimate(text, max_period)
