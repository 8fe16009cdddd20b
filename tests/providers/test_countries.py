import pytest

from caseclimate.cache import CachedFetcher
from caseclimate.contracts import CapitalResolutionError
from caseclimate.providers import CapitalResolver, RestCountriesLookup, country_code

from tests.helpers.fake_transport import FakeTransport

pytestmark = [pytest.mark.unit]

BASE = "https://restcountries.com/v3.1"


class StaticLookup:
    def __init__(self, capitals):
        self.capitals = capitals
        self.asked = []

    def capital(self, name):
        self.asked.append(name)
        return self.capitals.get(name)


@pytest.mark.parametrize("name,code", [
    ("France", "FR"),
    ("FRA", "FR"),
    ("United_States_of_America", "US"),
    ("Germany ", "DE"),
])
def test_country_code(name, code):
    assert country_code(name) == code


def test_country_code_unknown():
    assert country_code("Atlantis Prime") is None
    assert country_code("") is None


def test_fuzzy_match_must_name_the_country():
    # "Kosovo" is only a Serbian subdivision in ISO 3166
    assert country_code("Kosovo") is None
    assert country_code("Russia") == "RU"


def test_request_uses_alpha_code_when_known():
    req = RestCountriesLookup(None, BASE).request("France")
    assert req.url == f"{BASE}/alpha/FR"
    assert req.key == f"{BASE}/alpha/FR?fields=capital"
    assert req.params == {"fields": "capital"}


def test_request_falls_back_to_name_endpoint():
    req = RestCountriesLookup(None, BASE).request("Atlantis Prime")
    assert req.url == f"{BASE}/name/Atlantis%20Prime"


def test_subdivision_name_uses_name_endpoint():
    req = RestCountriesLookup(None, BASE).request("Kosovo")
    assert req.url == f"{BASE}/name/Kosovo"


def test_capital_lookup_through_cache(cache):
    transport = FakeTransport(capitals={"FR": "Paris"})
    lookup = RestCountriesLookup(CachedFetcher(cache, transport), BASE)

    assert lookup.capital("France") == "Paris"
    assert lookup.capital("France") == "Paris"
    assert len(transport.calls) == 1


def test_capital_lookup_failure_returns_none(cache):
    lookup = RestCountriesLookup(CachedFetcher(cache, FakeTransport()), BASE)
    assert lookup.capital("France") is None


@pytest.mark.parametrize("doc,expected", [
    ({"capital": ["Paris"]}, "Paris"),
    ([{"capital": ["Bern"]}], "Bern"),
    ({"capital": []}, None),
    ({"capital": "Rome"}, "Rome"),
])
def test_capital_document_shapes(cache, doc, expected):
    class Fixed(FakeTransport):
        def _country(self, request):
            return doc

    lookup = RestCountriesLookup(CachedFetcher(cache, Fixed()), BASE)
    assert lookup.capital("France") == expected


def test_error_document_detected():
    assert RestCountriesLookup.is_error({"status": 404, "message": "Not Found"})
    assert RestCountriesLookup.is_error([])
    assert not RestCountriesLookup.is_error({"capital": ["Paris"]})


class TestCapitalResolver:

    def test_override_wins_without_lookup(self):
        lookup = StaticLookup({"China": "Beijing"})
        resolver = CapitalResolver({"China": "Wuhan"}, lookup)

        assert resolver.resolve("China") == "Wuhan"
        assert lookup.asked == []

    def test_metadata_used_without_override(self):
        resolver = CapitalResolver({}, StaticLookup({"France": "Paris"}))
        assert resolver.resolve("France") == "Paris"

    def test_neither_source_raises(self):
        resolver = CapitalResolver({"China": "Wuhan"}, StaticLookup({}))
        with pytest.raises(CapitalResolutionError, match="Atlantis"):
            resolver.resolve("Atlantis")

    def test_input_city_used_when_metadata_unknown(self):
        resolver = CapitalResolver({}, StaticLookup({}))
        assert resolver.resolve("Kosovo", city_hint="Pristina") == "Pristina"

    def test_metadata_wins_over_input_city(self):
        resolver = CapitalResolver({}, StaticLookup({"France": "Paris"}))
        assert resolver.resolve("France", city_hint="Lyon") == "Paris"
