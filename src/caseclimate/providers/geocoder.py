"""Google Geocoding API client."""

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from caseclimate.cache.fetcher import CachedFetcher
from caseclimate.contracts.failure import GeocodeError
from caseclimate.models import Location, LookupRequest

__all__ = ['GoogleGeocoder']

logger = logging.getLogger(__name__)


class GoogleGeocoder:
    """Resolve a free-text address to coordinates.

    The first match is used as-is; ambiguous addresses are not
    disambiguated. Lookups go through ``fetcher`` so a resolved address is
    never requested twice.
    """

    def __init__(self, fetcher: CachedFetcher,
                 base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
                 api_key: Optional[str] = None):
        self.fetcher = fetcher
        self.base_url = base_url
        self.api_key = api_key

    def request(self, address: str) -> LookupRequest:
        params = {"address": address}
        key = f"{self.base_url}?{urlencode(params)}"
        if self.api_key:
            params["key"] = self.api_key
        return LookupRequest(key=key, url=self.base_url, params=params)

    @staticmethod
    def is_error(doc: Any) -> bool:
        return not isinstance(doc, dict) or doc.get("status") != "OK"

    def geocode(self, address: str) -> Location:
        """Return the first match for ``address``.

        Raises
        ------
        GeocodeError
            If the lookup failed or produced no results.
        """
        result = self.fetcher.fetch(self.request(address), is_error=self.is_error)
        if not result.ok:
            raise GeocodeError(f"Could not geocode {address!r}: {result.error}")

        try:
            first = result.value["results"][0]
            loc = first["geometry"]["location"]
            return Location(
                name=first.get("formatted_address", address),
                latitude=float(loc["lat"]),
                longitude=float(loc["lng"]),
            )
        except (KeyError, IndexError, TypeError, ValueError):
            raise GeocodeError(f"No usable geocoding match for {address!r}") from None
