"""Per-entity enrichment: capital -> coordinates -> growth -> weather.

``process()`` is the failure boundary for one entity. Every expected problem
(unknown capital, failed geocode, too few cases, ...) comes back as a
``Failure`` so the orchestrator can omit the entity and keep going.
"""

import logging
from typing import Iterable

import pandas as pd

from caseclimate.contracts.failure import EnrichmentError
from caseclimate.contracts.result import Failure, Result, Success
from caseclimate.models import EnrichedRecord, Entity

__all__ = ['EntityEnrichmentPipeline']

logger = logging.getLogger(__name__)


class EntityEnrichmentPipeline:
    """Compose the collaborators for one entity at a time.

    Parameters
    ----------
    capital_resolver : CapitalResolver
        ``resolve(label, city_hint) -> str``, raises CapitalResolutionError.
    geocoder : GoogleGeocoder
        ``geocode(address) -> Location``, raises GeocodeError.
    growth_analyzer : GrowthRateAnalyzer
        ``analyze(entity_id, time_series) -> GrowthSummary``.
    weather_aggregator : WeatherAggregator
        ``aggregate(location, window) -> WeatherSummary``.
    window : iterable of datetime
        Calendar window sampled for every entity.
    """

    def __init__(self, capital_resolver, geocoder, growth_analyzer,
                 weather_aggregator, window: Iterable):
        self.capital_resolver = capital_resolver
        self.geocoder = geocoder
        self.growth_analyzer = growth_analyzer
        self.weather_aggregator = weather_aggregator
        self.window = list(window)

    def process(self, entity: Entity, time_series: pd.DataFrame) -> Result[EnrichedRecord]:
        """Enrich one entity.

        Returns
        -------
        Success(EnrichedRecord) or Failure(EnrichmentError)
            Never raises for data or lookup problems. Statistics in a
            Success may still be NaN (e.g. no weather sample succeeded);
            filtering is the caller's job.
        """
        try:
            record = self._enrich(entity, time_series)
        except EnrichmentError as e:
            logger.warning("Skipping %s: %s", entity.id, e)
            return Failure(e)
        except Exception as e:
            logger.exception("Unexpected error while enriching %s", entity.id)
            return Failure(_wrap(e))
        return Success(record)

    def _enrich(self, entity: Entity, time_series: pd.DataFrame) -> EnrichedRecord:
        capital = self.capital_resolver.resolve(entity.label, entity.city_hint)
        location = self.geocoder.geocode(f"{capital}, {entity.label}")
        logger.debug("%s -> %s (%.4f, %.4f)", entity.id, capital,
                     location.latitude, location.longitude)

        growth = self.growth_analyzer.analyze(entity.id, time_series)
        weather = self.weather_aggregator.aggregate(location, self.window)

        return EnrichedRecord(
            entity_id=entity.id,
            capital=capital,
            median=growth.median,
            mean=growth.mean,
            average_temp=weather.average_temp,
            average_humidity=weather.average_humidity,
            total_cases=entity.total_cases,
            latitude=location.latitude,
            longitude=location.longitude,
        )


def _wrap(error: Exception) -> EnrichmentError:
    wrapped = EnrichmentError(f"{type(error).__name__}: {error}")
    wrapped.__cause__ = error
    return wrapped
