"""External collaborators.

- http: requests-based transport shared by all lookups
- weather: DarkSky-compatible historical weather
- geocoder: Google Geocoding API
- countries: capital lookup (pycountry + REST Countries) and overrides
"""

from caseclimate.providers.http import HttpTransport
from caseclimate.providers.weather import DarkSkyWeatherProvider, to_celsius
from caseclimate.providers.geocoder import GoogleGeocoder
from caseclimate.providers.countries import RestCountriesLookup, CapitalResolver, country_code

__all__ = [
    "HttpTransport",
    "DarkSkyWeatherProvider",
    "to_celsius",
    "GoogleGeocoder",
    "RestCountriesLookup",
    "CapitalResolver",
    "country_code",
]
