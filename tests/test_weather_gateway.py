"""Test for the external data gateway and its cascade."""
import datetime

import pytest

from hidem import loadtypes as lt
from hidem.components import weather_gateway
from hidem.components.irradiance_cache import IrradianceCache
from hidem.components.weather_gateway import Coordinate, DataLookup
from hidem.estimation_errors import NotFound, ParseError
from hidem.monthly_series import MonthlySeries
from tests import functions_for_testing as fft


@pytest.mark.base
def test_fresh_cache_is_used_without_network(tmp_path):
    """A fresh cache answers before any provider is asked."""
    IrradianceCache(str(tmp_path)).replace(51.5074, -0.1278, fft.SAMPLE_IRRADIANCE, "London", fft.FIXED_NOW)
    provider = fft.FakeProvider(MonthlySeries.constant(9.0, lt.Units.KWH_PER_SQUARE_METER_PER_DAY))
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=provider)
    lookup = gateway.lookup_monthly_irradiance(51.5074, -0.1278, "London")
    assert lookup.source == lt.DataSourceTag.CACHE
    assert lookup.series == fft.SAMPLE_IRRADIANCE
    assert provider.calls == []


@pytest.mark.base
def test_cache_beats_default_when_providers_are_unreachable(tmp_path):
    """Cached data is returned, not the default table."""
    IrradianceCache(str(tmp_path)).replace(51.5074, -0.1278, fft.SAMPLE_IRRADIANCE, "London", fft.FIXED_NOW)
    gateway = fft.make_gateway(str(tmp_path))
    assert gateway.get_monthly_irradiance(51.5074, -0.1278) == fft.SAMPLE_IRRADIANCE


@pytest.mark.base
def test_live_data_is_cached(tmp_path):
    """A live answer replaces the cache records of the coordinate."""
    provider = fft.FakeProvider(fft.SAMPLE_IRRADIANCE)
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=provider)
    lookup = gateway.lookup_monthly_irradiance(53.48, -2.24, "Manchester")
    assert lookup == DataLookup(fft.SAMPLE_IRRADIANCE, lt.DataSourceTag.LIVE)
    records = gateway.irradiance_cache.load(53.48, -2.24)
    assert len(records) == 12
    assert records[0].location == "Manchester"

    # second lookup is served from the cache
    assert gateway.lookup_monthly_irradiance(53.48, -2.24).source == lt.DataSourceTag.CACHE
    assert len(provider.calls) == 1


@pytest.mark.base
def test_stale_cache_is_refreshed(tmp_path):
    """Records older than the max age trigger a live lookup."""
    stale = MonthlySeries.constant(1.0, lt.Units.KWH_PER_SQUARE_METER_PER_DAY)
    IrradianceCache(str(tmp_path)).replace(
        53.48, -2.24, stale, last_updated=fft.FIXED_NOW - datetime.timedelta(days=45)
    )
    provider = fft.FakeProvider(fft.SAMPLE_IRRADIANCE)
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=provider)
    assert gateway.lookup_monthly_irradiance(53.48, -2.24).source == lt.DataSourceTag.LIVE
    records = gateway.irradiance_cache.load(53.48, -2.24)
    assert IrradianceCache.to_series(records) == fft.SAMPLE_IRRADIANCE
    assert records[0].last_updated == fft.FIXED_NOW


@pytest.mark.base
def test_climatology_fallback(tmp_path):
    """The fallback provider answers when the time series fails."""
    provider = fft.FakeProvider(error=NotFound("no data"))
    fallback = fft.FakeProvider(fft.SAMPLE_IRRADIANCE)
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=provider, fallback_provider=fallback)
    lookup = gateway.lookup_monthly_irradiance(53.48, -2.24)
    assert lookup.source == lt.DataSourceTag.LIVE_FALLBACK
    assert len(provider.calls) == 1
    assert len(fallback.calls) == 1
    assert len(gateway.irradiance_cache.load(53.48, -2.24)) == 12


@pytest.mark.base
def test_nearby_cache(tmp_path):
    """Cached neighbours fill in when no provider answers."""
    IrradianceCache(str(tmp_path)).replace(53.50, -2.20, fft.SAMPLE_IRRADIANCE, last_updated=fft.FIXED_NOW)
    gateway = fft.make_gateway(str(tmp_path))
    lookup = gateway.lookup_monthly_irradiance(53.48, -2.24)
    assert lookup == DataLookup(fft.SAMPLE_IRRADIANCE, lt.DataSourceTag.NEARBY_CACHE)


@pytest.mark.base
def test_default_when_everything_fails(tmp_path):
    """Without cache and network the static table is returned."""
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=fft.FakeProvider(error=ParseError("broken")))
    lookup = gateway.lookup_monthly_irradiance(-33.9, 18.4)
    assert lookup.source == lt.DataSourceTag.DEFAULT
    assert lookup.series == weather_gateway.DEFAULT_MONTHLY_IRRADIANCE
    assert len(lookup.series) == 12


@pytest.mark.base
def test_temperature_cascade(tmp_path):
    """Live temperatures first, the UK defaults otherwise."""
    live = fft.make_gateway(str(tmp_path), temperature_provider=fft.FakeProvider(fft.SAMPLE_TEMPERATURE))
    assert live.lookup_monthly_temperature(51.5, -0.1) == DataLookup(fft.SAMPLE_TEMPERATURE, lt.DataSourceTag.LIVE)
    offline = fft.make_gateway(str(tmp_path))
    assert offline.get_monthly_temperature(51.5, -0.1) == weather_gateway.DEFAULT_MONTHLY_TEMPERATURE


@pytest.mark.base
def test_cascade_stops_at_first_answer():
    """Later tiers are not called."""
    called = []

    def silent_tier(coordinate):
        called.append("silent")
        return None

    def answering_tier(coordinate):
        called.append("answering")
        return DataLookup(MonthlySeries.zeros(), lt.DataSourceTag.DEFAULT)

    def unreachable_tier(coordinate):
        raise AssertionError("must not be called")

    lookup = weather_gateway.run_cascade([silent_tier, answering_tier, unreachable_tier], Coordinate(0.0, 0.0))
    assert lookup.source == lt.DataSourceTag.DEFAULT
    assert called == ["silent", "answering"]
