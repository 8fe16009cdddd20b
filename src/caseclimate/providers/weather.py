"""Historical weather from a DarkSky-compatible time-machine API.

Request shape::

    GET {base_url}/{api_key}/{lat},{lon},{YYYY-MM-DDTHH:MM:SS}?exclude=...

The response's ``currently`` block carries ``temperature`` (Fahrenheit for
the default US units) and ``humidity`` (fraction 0-1).
"""

import logging
from datetime import datetime
from typing import Any, Optional

from caseclimate.models import Location, LookupRequest, WeatherSample

__all__ = ['DarkSkyWeatherProvider', 'to_celsius']

logger = logging.getLogger(__name__)


def to_celsius(value: float, unit: str = "fahrenheit") -> float:
    """Convert a provider-native temperature to degrees Celsius."""
    if unit == "celsius":
        return float(value)
    return (float(value) - 32.0) * 5.0 / 9.0


class DarkSkyWeatherProvider:
    """Build weather lookups and parse their documents.

    The provider does no I/O: ``sample_request`` describes the lookup and
    ``parse_sample`` interprets the cached or live document. The cache key is
    the request URI with the API key segment removed.
    """

    def __init__(self, base_url: str, api_key: Optional[str] = None,
                 exclude: str = "daily,flags,minutely,alerts",
                 temperature_unit: str = "fahrenheit"):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.exclude = exclude
        self.temperature_unit = temperature_unit

    def sample_request(self, location: Location, timestamp: datetime) -> LookupRequest:
        point = f"{location.latitude},{location.longitude},{timestamp.strftime('%Y-%m-%dT%H:%M:%S')}"
        params = {"exclude": self.exclude} if self.exclude else {}
        query = f"?exclude={self.exclude}" if self.exclude else ""
        return LookupRequest(
            key=f"{self.base_url}/{point}{query}",
            url=f"{self.base_url}/{self.api_key or ''}/{point}",
            params=params,
        )

    def is_error(self, doc: Any) -> bool:
        """A document without a ``currently`` block is treated as an error."""
        if not isinstance(doc, dict):
            return True
        if doc.get("error") or doc.get("code"):
            return True
        return not isinstance(doc.get("currently"), dict)

    def parse_sample(self, doc: Any) -> WeatherSample:
        """Extract one sample.

        Raises
        ------
        ValueError
            If temperature or humidity is missing or not numeric.
        """
        try:
            currently = doc["currently"]
            temperature = float(currently["temperature"])
            humidity = float(currently["humidity"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed weather document: {e!r}") from e
        return WeatherSample(
            temperature_c=to_celsius(temperature, self.temperature_unit),
            humidity=humidity,
        )
