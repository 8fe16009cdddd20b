import math

import pytest

from caseclimate.contracts import (
    CapitalResolutionError,
    EnrichmentError,
    GeocodeError,
    InsufficientDataError,
)
from caseclimate.models import Entity
from caseclimate.pipeline import discover_entities, load_time_series

from tests.helpers.fake_transport import FakeTransport

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


@pytest.fixture
def series_x(write_csv, internal_config):
    path = write_csv([
        (f"2020-03-0{i + 1}", "X", c, c) for i, c in enumerate([5, 10, 20, 40, 80])
    ])
    return load_time_series(path, internal_config.input)


def test_end_to_end_record(series_x, fake_transport, make_enrichment):
    entity = discover_entities(series_x)[0]
    result = make_enrichment(fake_transport).process(entity, series_x)

    assert result.ok
    record = result.value
    assert record.entity_id == "X"
    assert record.capital == "CapX"
    assert (record.latitude, record.longitude) == (1.0, 2.0)
    assert record.median == 1.0
    assert record.mean == 1.0
    assert record.average_temp == pytest.approx(20.0)
    assert record.average_humidity == pytest.approx(0.5)
    assert record.total_cases == 80
    assert isinstance(record.total_cases, int)
    assert record.is_finite()


def test_geocodes_capital_and_label(series_x, fake_transport, make_enrichment):
    entity = discover_entities(series_x)[0]
    make_enrichment(fake_transport, days=1).process(entity, series_x)

    geocode_calls = fake_transport.calls_to("geocode")
    assert geocode_calls == [
        "https://maps.googleapis.com/maps/api/geocode/json?address=CapX%2C+X"
    ]


def test_rerun_uses_cache_only(series_x, fake_transport, make_enrichment):
    entity = discover_entities(series_x)[0]
    pipeline = make_enrichment(fake_transport)

    pipeline.process(entity, series_x)
    n_calls = len(fake_transport.calls)
    second = pipeline.process(entity, series_x)

    assert second.ok
    assert n_calls == 1 + 29
    assert len(fake_transport.calls) == n_calls


def test_unknown_capital_is_failure(series_x, fake_transport, make_enrichment):
    entity = Entity(id="X", label="Atlantis Prime", total_cases=80)
    result = make_enrichment(fake_transport, overrides={}).process(entity, series_x)

    assert not result.ok
    assert isinstance(result.error, CapitalResolutionError)


def test_input_city_used_when_metadata_has_no_capital(series_x, make_enrichment):
    transport = FakeTransport(coords={"Xville, X": (3.0, 4.0)})
    entity = Entity(id="X", label="X", total_cases=80, city_hint="Xville")
    result = make_enrichment(transport, overrides={}, days=1).process(entity, series_x)

    assert result.ok
    assert result.value.capital == "Xville"
    assert (result.value.latitude, result.value.longitude) == (3.0, 4.0)


def test_geocode_failure_is_failure(series_x, make_enrichment):
    transport = FakeTransport(coords={})
    entity = discover_entities(series_x)[0]
    result = make_enrichment(transport).process(entity, series_x)

    assert isinstance(result.error, GeocodeError)
    assert transport.calls_to("pirateweather") == []


def test_insufficient_cases_is_failure(write_csv, internal_config, fake_transport, make_enrichment):
    path = write_csv([("2020-03-01", "X", 10, 10), ("2020-03-02", "X", 64, 74)])
    series = load_time_series(path, internal_config.input)
    result = make_enrichment(fake_transport).process(discover_entities(series)[0], series)

    assert isinstance(result.error, InsufficientDataError)


def test_weather_outage_gives_nan_record_not_failure(series_x, make_enrichment):
    transport = FakeTransport(coords={"CapX, X": (1.0, 2.0)}, failing_days=range(1, 32))
    result = make_enrichment(transport, days=3).process(discover_entities(series_x)[0], series_x)

    assert result.ok
    assert math.isnan(result.value.average_temp)
    assert not result.value.is_finite()


def test_unexpected_error_is_wrapped(series_x, fake_transport, make_enrichment):
    class ExplodingResolver:
        def resolve(self, label, city_hint=None):
            raise RuntimeError("boom")

    pipeline = make_enrichment(fake_transport)
    pipeline.capital_resolver = ExplodingResolver()
    result = pipeline.process(discover_entities(series_x)[0], series_x)

    assert not result.ok
    assert type(result.error) is EnrichmentError
    assert isinstance(result.error.__cause__, RuntimeError)
