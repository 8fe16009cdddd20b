import math

import numpy as np
import pandas as pd
import pytest

from caseclimate.analysis import GrowthRateAnalyzer, compute_growth_rates, summarize_growth
from caseclimate.contracts import DivisionByZeroError, EnrichmentError, InsufficientDataError

pytestmark = [pytest.mark.unit]


def make_series(entity, cumulative, start="2020-03-01"):
    dates = pd.date_range(start, periods=len(cumulative), freq="D")
    return pd.DataFrame({
        "date": dates,
        "entity": entity,
        "label": entity,
        "new_cases": np.nan,
        "cumulative": [float(c) for c in cumulative],
        "city": None,
    })


class TestGrowthFunctions:

    def test_doubling_series(self):
        rates = compute_growth_rates([10, 20, 40])
        assert rates.tolist() == [1.0, 1.0]

        summary = summarize_growth([10, 20, 40])
        assert summary.median == 1.0
        assert summary.mean == 1.0
        assert summary.num_days == 2

    def test_median_and_mean_differ(self):
        summary = summarize_growth([100, 110, 121, 242])
        assert summary.median == pytest.approx(0.1)
        assert summary.mean == pytest.approx((0.1 + 0.1 + 1.0) / 3)

    def test_single_point_has_no_rates(self):
        assert compute_growth_rates([80]).size == 0
        with pytest.raises(InsufficientDataError):
            summarize_growth([80])

    def test_zero_predecessor_raises(self):
        with pytest.raises(DivisionByZeroError):
            compute_growth_rates([0, 5, 10])

    def test_division_error_is_both_enrichment_and_zero_division(self):
        with pytest.raises(EnrichmentError):
            compute_growth_rates([10, 0, 5])
        with pytest.raises(ZeroDivisionError):
            compute_growth_rates([10, 0, 5])


class TestGrowthRateAnalyzer:

    def test_default_threshold(self):
        assert GrowthRateAnalyzer().min_total_cases == 75.0

    def test_threshold_boundary_74_fails(self):
        df = make_series("X", [37, 74])
        with pytest.raises(InsufficientDataError, match="74"):
            GrowthRateAnalyzer(75).analyze("X", df)

    def test_threshold_boundary_75_proceeds(self):
        df = make_series("X", [50, 75])
        summary = GrowthRateAnalyzer(75).analyze("X", df)
        assert summary.median == pytest.approx(0.5)

    def test_spec_example_with_low_threshold(self):
        df = make_series("X", [10, 20, 40])
        summary = GrowthRateAnalyzer(min_total_cases=40).analyze("X", df)
        assert summary.median == 1.0
        assert summary.mean == 1.0

    def test_unknown_entity_raises(self):
        df = make_series("X", [10, 20, 80])
        with pytest.raises(InsufficientDataError, match="No rows"):
            GrowthRateAnalyzer().analyze("Y", df)

    def test_single_row_raises(self):
        df = make_series("X", [100])
        with pytest.raises(InsufficientDataError):
            GrowthRateAnalyzer().analyze("X", df)

    def test_rows_sorted_by_date(self):
        ordered = make_series("X", [10, 20, 40, 80])
        shuffled = ordered.iloc[[2, 0, 3, 1]].reset_index(drop=True)

        a = GrowthRateAnalyzer().analyze("X", ordered)
        b = GrowthRateAnalyzer().analyze("X", shuffled)

        assert a == b
        assert b.median == 1.0

    def test_other_entities_ignored(self):
        df = pd.concat([
            make_series("X", [10, 20, 40, 80]),
            make_series("Y", [100, 1000]),
        ], ignore_index=True)

        summary = GrowthRateAnalyzer().analyze("X", df)
        assert summary.num_days == 3
        assert math.isfinite(summary.mean)
