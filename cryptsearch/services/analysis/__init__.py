"""Statistical period estimation."""

from cryptsearch.services.analysis.coincidence import CoincidenceEstimator, estimate_period

__all__ = ["CoincidenceEstimator", "estimate_period"]
