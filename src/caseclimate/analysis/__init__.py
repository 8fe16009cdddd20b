"""Per-entity statistics.

- growth: day-over-day growth of cumulative counts
- weather: calendar-window weather averages
"""

from caseclimate.analysis.growth import GrowthRateAnalyzer, compute_growth_rates, summarize_growth
from caseclimate.analysis.weather import WeatherAggregator, calendar_window

__all__ = [
    "GrowthRateAnalyzer",
    "compute_growth_rates",
    "summarize_growth",
    "WeatherAggregator",
    "calendar_window",
]
