"""Average weather at a location over a calendar window."""

import calendar
import logging
from datetime import datetime
from typing import Iterable, List, Optional

import numpy as np

from caseclimate.cache.fetcher import CachedFetcher
from caseclimate.models import Location, WeatherSummary

__all__ = ['WeatherAggregator', 'calendar_window']

logger = logging.getLogger(__name__)


def calendar_window(year: int, month: int, hour: int = 12,
                    days: Optional[int] = None) -> List[datetime]:
    """Fixed-hour timestamps for every day of a month.

    Parameters
    ----------
    year, month : int
        Calendar month to sample.
    hour : int
        Hour of day for each sample.
    days : int, optional
        Number of days from the 1st. Defaults to the length of the month.

    Examples
    --------
    >>> len(calendar_window(2020, 2))
    29
    """
    month_days = calendar.monthrange(year, month)[1]
    n = month_days if days is None else min(days, month_days)
    return [datetime(year, month, day, hour) for day in range(1, n + 1)]


class WeatherAggregator:
    """Fetch one weather sample per timestamp and average the successes.

    Samples are fetched one at a time in window order. A failed or
    malformed sample is logged and excluded. With no successful sample the
    averages are NaN; the caller decides whether that drops the entity.

    Parameters
    ----------
    provider : DarkSkyWeatherProvider
        Builds requests (``sample_request``), marks error documents
        (``is_error``) and parses samples (``parse_sample``).
    fetcher : CachedFetcher
        Cache-aside lookups.
    """

    def __init__(self, provider, fetcher: CachedFetcher):
        self.provider = provider
        self.fetcher = fetcher

    def aggregate(self, location: Location, window: Iterable[datetime]) -> WeatherSummary:
        temps = []
        humidities = []
        failures = 0

        for ts in window:
            request = self.provider.sample_request(location, ts)
            result = self.fetcher.fetch(request, is_error=self.provider.is_error)
            if not result.ok:
                failures += 1
                continue
            try:
                sample = self.provider.parse_sample(result.value)
            except ValueError as e:
                failures += 1
                logger.warning("Skipping weather sample %s at %s: %s",
                               ts.isoformat(), location.name, e)
                continue
            temps.append(sample.temperature_c)
            humidities.append(sample.humidity)

        if failures:
            logger.warning("%d/%d weather samples failed for %s",
                           failures, failures + len(temps), location.name)

        if not temps:
            return WeatherSummary(
                average_temp=float("nan"),
                average_humidity=float("nan"),
                samples=0,
                failures=failures,
            )

        return WeatherSummary(
            average_temp=float(np.mean(temps)),
            average_humidity=float(np.mean(humidities)),
            samples=len(temps),
            failures=failures,
        )
