"""Day-over-day growth of cumulative case counts.

For consecutive rows of one entity, ordered by date::

    growth_i = (cumulative_i - cumulative_{i-1}) / cumulative_{i-1}

The first row contributes no value. Median and mean of the growth series
summarise the entity.
"""

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from caseclimate.contracts.failure import DivisionByZeroError, InsufficientDataError
from caseclimate.models import GrowthSummary

__all__ = ['GrowthRateAnalyzer', 'compute_growth_rates', 'summarize_growth']

logger = logging.getLogger(__name__)


def compute_growth_rates(cumulative: Sequence[float]) -> np.ndarray:
    """Relative growth between consecutive cumulative counts.

    Parameters
    ----------
    cumulative : sequence of float
        Cumulative counts in date order.

    Returns
    -------
    np.ndarray
        ``len(cumulative) - 1`` growth values.

    Raises
    ------
    DivisionByZeroError
        If any predecessor count is zero.

    Examples
    --------
    >>> compute_growth_rates([10, 20, 40])
    array([1., 1.])
    """
    values = np.asarray(cumulative, dtype=float)
    if values.size < 2:
        return np.empty(0, dtype=float)

    prev = values[:-1]
    if np.any(prev == 0):
        raise DivisionByZeroError("Growth step with zero predecessor count")
    return (values[1:] - prev) / prev


def summarize_growth(cumulative: Sequence[float]) -> GrowthSummary:
    """Median and mean growth of a cumulative series.

    Raises
    ------
    InsufficientDataError
        If the series yields no growth value (fewer than two points).
    DivisionByZeroError
        Propagated from compute_growth_rates().
    """
    rates = compute_growth_rates(cumulative)
    if rates.size == 0:
        raise InsufficientDataError("Need at least two days to compute growth")
    return GrowthSummary(
        median=float(np.median(rates)),
        mean=float(np.mean(rates)),
        num_days=int(rates.size),
    )


class GrowthRateAnalyzer:
    """Per-entity growth statistics from the shared time series.

    Parameters
    ----------
    min_total_cases : float
        An entity whose last cumulative count is below this is rejected
        (75 by default: 74 fails, 75 proceeds).
    """

    def __init__(self, min_total_cases: float = 75.0):
        self.min_total_cases = float(min_total_cases)

    def analyze(self, entity_id: str, time_series: pd.DataFrame) -> GrowthSummary:
        """Compute growth statistics for one entity.

        Rows are selected by ``entity`` and stable-sorted by ``date``, so
        an unordered input file gives the same answer as an ordered one.

        Raises
        ------
        InsufficientDataError
            No rows, too few cases, or a single row.
        DivisionByZeroError
            A zero cumulative count precedes another row.
        """
        rows = time_series[time_series["entity"] == entity_id]
        if rows.empty:
            raise InsufficientDataError(f"No rows for entity '{entity_id}'")

        rows = rows.sort_values("date", kind="stable")
        cumulative = rows["cumulative"].to_numpy(dtype=float)

        total = cumulative[-1]
        if total < self.min_total_cases:
            raise InsufficientDataError(
                f"'{entity_id}' has {total:g} cases, need at least {self.min_total_cases:g}"
            )

        summary = summarize_growth(cumulative)
        logger.debug("Growth for %s: median=%.4f mean=%.4f over %d days",
                     entity_id, summary.median, summary.mean, summary.num_days)
        return summary
