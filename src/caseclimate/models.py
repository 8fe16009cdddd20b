"""Domain records passed between pipeline stages."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Entity:
    """One country discovered in the input time series."""
    id: str
    label: str
    total_cases: int
    city_hint: Optional[str] = None


@dataclass(frozen=True)
class LookupRequest:
    """A single idempotent remote lookup.

    ``key`` identifies the external fact and is what the cache stores under.
    It never contains credentials; ``url`` and ``params`` may.
    """
    key: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class WeatherSample:
    temperature_c: float
    humidity: float


@dataclass(frozen=True)
class WeatherSummary:
    average_temp: float
    average_humidity: float
    samples: int
    failures: int


@dataclass(frozen=True)
class GrowthSummary:
    median: float
    mean: float
    num_days: int


@dataclass(frozen=True)
class EnrichedRecord:
    """One output row. Coordinates are kept for diagnostics only."""
    entity_id: str
    capital: str
    median: float
    mean: float
    average_temp: float
    average_humidity: float
    total_cases: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def is_finite(self) -> bool:
        return all(
            math.isfinite(v)
            for v in (self.median, self.mean, self.average_temp, self.average_humidity)
        )
