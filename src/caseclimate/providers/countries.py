"""Country metadata: capital city lookup.

Names from the input file are normalised to ISO 3166 codes with pycountry
before the REST Countries API is asked for the capital. Overrides in config
take precedence and are how a "capital" can point at another city of
interest (e.g. China -> Wuhan).
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import pycountry

from caseclimate.cache.fetcher import CachedFetcher
from caseclimate.contracts.failure import CapitalResolutionError
from caseclimate.models import LookupRequest

__all__ = ['RestCountriesLookup', 'CapitalResolver', 'country_code']

logger = logging.getLogger(__name__)


def country_code(name: str) -> Optional[str]:
    """Return the ISO alpha-2 code for a country name, or None.

    Tries an exact lookup (name, official name, codes) first, then
    pycountry's fuzzy search for names of four or more characters. A fuzzy
    hit only counts when the name appears in the country's own names.
    Underscores are read as spaces.
    """
    cleaned = name.replace("_", " ").strip()
    if not cleaned:
        return None
    try:
        return pycountry.countries.lookup(cleaned).alpha_2
    except LookupError:
        pass
    # fuzzy search matches substrings, too loose for codes and initials
    if len(cleaned) < 4:
        return None
    try:
        matches = pycountry.countries.search_fuzzy(cleaned)
    except LookupError:
        return None
    # fuzzy hits include subdivisions, which resolve to the parent country
    query = cleaned.casefold()
    for match in matches:
        names = (getattr(match, attr, None) for attr in ("name", "official_name", "common_name"))
        if any(n and query in n.casefold() for n in names):
            return match.alpha_2
    logger.debug("No country named %r (fuzzy matches: %s)", cleaned,
                 ", ".join(m.alpha_2 for m in matches[:3]))
    return None


class RestCountriesLookup:
    """Capital lookup against the REST Countries v3.1 API."""

    def __init__(self, fetcher: CachedFetcher, base_url: str = "https://restcountries.com/v3.1"):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    def request(self, name: str) -> LookupRequest:
        code = country_code(name)
        if code:
            url = f"{self.base_url}/alpha/{code}"
        else:
            url = f"{self.base_url}/name/{quote(name.replace('_', ' '))}"
        return LookupRequest(key=f"{url}?fields=capital", url=url, params={"fields": "capital"})

    @staticmethod
    def is_error(doc: Any) -> bool:
        if isinstance(doc, dict):
            status = doc.get("status")
            return isinstance(status, int) and status >= 400
        return not isinstance(doc, list) or not doc

    def capital(self, name: str) -> Optional[str]:
        """Return the capital of ``name``, or None when unknown."""
        result = self.fetcher.fetch(self.request(name), is_error=self.is_error)
        if not result.ok:
            return None

        doc = result.value
        entry = doc[0] if isinstance(doc, list) else doc
        capitals = entry.get("capital") if isinstance(entry, dict) else None
        if isinstance(capitals, str):
            return capitals or None
        if capitals:
            return capitals[0]
        return None


class CapitalResolver:
    """Override table first, then country metadata, then the input city.

    Parameters
    ----------
    overrides : dict
        Entity label -> city name.
    lookup : object with ``capital(name) -> str | None``
        Country metadata collaborator, usually RestCountriesLookup.
    """

    def __init__(self, overrides: Dict[str, str], lookup):
        self.overrides = dict(overrides)
        self.lookup = lookup

    def resolve(self, label: str, city_hint: Optional[str] = None) -> str:
        """Return the city to geocode for ``label``.

        ``city_hint`` is the city column of the input file, used only when
        neither the overrides nor the metadata name a capital.
        """
        capital = self.overrides.get(label)
        if capital:
            logger.debug("Capital override for %s: %s", label, capital)
            return capital

        capital = self.lookup.capital(label)
        if capital:
            return capital
        if city_hint:
            logger.info("No capital metadata for %s, using input city %s", label, city_hint)
            return city_hint
        raise CapitalResolutionError(f"No capital known for {label!r}")
