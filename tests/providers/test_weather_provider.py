from datetime import datetime

import pytest

from caseclimate.models import Location
from caseclimate.providers import DarkSkyWeatherProvider, to_celsius

pytestmark = [pytest.mark.unit]

LOC = Location(name="CapX", latitude=1.0, longitude=2.0)


def test_to_celsius():
    assert to_celsius(68.0) == pytest.approx(20.0)
    assert to_celsius(32) == pytest.approx(0.0)
    assert to_celsius(21.5, "celsius") == 21.5


def test_sample_request_layout():
    provider = DarkSkyWeatherProvider("https://api.example/forecast/", api_key="SECRET",
                                      exclude="daily,flags")
    req = provider.sample_request(LOC, datetime(2020, 2, 1, 12))

    assert req.url == "https://api.example/forecast/SECRET/1.0,2.0,2020-02-01T12:00:00"
    assert req.params == {"exclude": "daily,flags"}
    assert req.key == "https://api.example/forecast/1.0,2.0,2020-02-01T12:00:00?exclude=daily,flags"
    assert "SECRET" not in req.key


def test_parse_sample_converts_fahrenheit():
    provider = DarkSkyWeatherProvider("https://x")
    sample = provider.parse_sample({"currently": {"temperature": 68, "humidity": 0.5}})

    assert sample.temperature_c == pytest.approx(20.0)
    assert sample.humidity == 0.5


def test_parse_sample_celsius_provider():
    provider = DarkSkyWeatherProvider("https://x", temperature_unit="celsius")
    sample = provider.parse_sample({"currently": {"temperature": 20, "humidity": 0.4}})

    assert sample.temperature_c == 20.0


@pytest.mark.parametrize("doc", [
    {"currently": {"temperature": 68}},
    {"currently": {"temperature": "warm", "humidity": 0.5}},
    {"hourly": {}},
    None,
])
def test_parse_sample_rejects_malformed(doc):
    with pytest.raises(ValueError, match="Malformed"):
        DarkSkyWeatherProvider("https://x").parse_sample(doc)


@pytest.mark.parametrize("doc,expected", [
    ({"currently": {"temperature": 1}}, False),
    ({"error": "daily usage limit exceeded"}, True),
    ({"code": 400, "error": "bad request"}, True),
    ({"latitude": 1.0}, True),
    ("oops", True),
])
def test_is_error(doc, expected):
    assert DarkSkyWeatherProvider("https://x").is_error(doc) is expected
