import pytest

from caseclimate.analysis import GrowthRateAnalyzer, WeatherAggregator, calendar_window
from caseclimate.cache import CachedFetcher
from caseclimate.pipeline import EntityEnrichmentPipeline
from caseclimate.providers import (
    CapitalResolver,
    DarkSkyWeatherProvider,
    GoogleGeocoder,
    RestCountriesLookup,
)


@pytest.fixture
def pipeline_config(make_config, temp_dir):
    """InternalConfig for pipeline tests: override X -> CapX, dummy keys."""
    return make_config(
        base_dir=str(temp_dir),
        capital_overrides={"X": "CapX"},
        weather_api_key="wx-key",
        geocoder_api_key="geo-key",
    )


@pytest.fixture
def make_enrichment(cache):
    """Build an EntityEnrichmentPipeline over a transport, sharing one cache."""
    def _make(transport, overrides=None, min_total_cases=75, days=None):
        fetcher = CachedFetcher(cache, transport)
        return EntityEnrichmentPipeline(
            capital_resolver=CapitalResolver(
                overrides if overrides is not None else {"X": "CapX"},
                RestCountriesLookup(fetcher),
            ),
            geocoder=GoogleGeocoder(fetcher, api_key="geo-key"),
            growth_analyzer=GrowthRateAnalyzer(min_total_cases),
            weather_aggregator=WeatherAggregator(
                DarkSkyWeatherProvider("https://api.pirateweather.net/forecast", api_key="wx-key"),
                fetcher,
            ),
            window=calendar_window(2020, 2, 12, days=days),
        )

    return _make
