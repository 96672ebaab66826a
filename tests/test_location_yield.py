"""Test for the photovoltaic yield at a location."""
import numpy as np
import pytest

from hidem import loadtypes as lt
from hidem.components.location_yield import LocationYieldCalculator
from hidem.components.weather_gateway import DEFAULT_MONTHLY_IRRADIANCE
from tests import functions_for_testing as fft


@pytest.mark.base
def test_leap_year_february(tmp_path):
    """February has 29 days in 2024 and 28 in 2023."""
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=fft.FakeProvider(fft.SAMPLE_IRRADIANCE))
    calculator = LocationYieldCalculator(gateway)
    leap = calculator.compute(51.5074, -0.1278, "London", reference_year=2024)
    common = calculator.compute(51.5074, -0.1278, "London", reference_year=2023)
    assert leap.days_in_month[2] == 29
    assert common.days_in_month[2] == 28
    assert leap.monthly_yield[2] == pytest.approx(1.6 * 29 * 0.8)
    assert common.monthly_yield[2] == pytest.approx(1.6 * 28 * 0.8)
    assert leap.monthly_yield[1] == common.monthly_yield[1]


@pytest.mark.base
def test_yield_statistics(tmp_path):
    """Annual yield is the sum of the months, the average its twelfth."""
    gateway = fft.make_gateway(str(tmp_path), irradiance_provider=fft.FakeProvider(fft.SAMPLE_IRRADIANCE))
    result = LocationYieldCalculator(gateway, reference_year=2023).compute(53.48, -2.24, "Manchester")
    expected_annual = sum(
        value * days * 0.8
        for value, days in zip(fft.SAMPLE_IRRADIANCE.to_list(), [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31])
    )
    assert result.reference_year == 2023
    assert result.annual_yield == pytest.approx(expected_annual, abs=0.01)
    assert result.average_monthly_yield == pytest.approx(expected_annual / 12, abs=0.01)
    assert result.monthly_solar_irradiance == fft.SAMPLE_IRRADIANCE.to_dict()
    np.testing.assert_allclose(
        [result.monthly_yield[month] for month in range(1, 13)],
        [value * days * 0.8 for value, days in zip(fft.SAMPLE_IRRADIANCE.to_list(), [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31])],
        atol=0.005,
    )
    assert result.data_source == lt.DataSourceTag.LIVE
    assert result.location == "Manchester"


@pytest.mark.base
def test_yield_never_fails(tmp_path):
    """Without any data source the default irradiance is used."""
    result = LocationYieldCalculator(fft.make_gateway(str(tmp_path))).compute(-33.9, 18.4)
    assert result.data_source == lt.DataSourceTag.DEFAULT
    assert result.monthly_solar_irradiance == DEFAULT_MONTHLY_IRRADIANCE.to_dict()
    assert len(result.monthly_yield) == 12
    assert result.reference_year >= 2024


@pytest.mark.base
def test_yield_with_an_unusable_cache_directory(tmp_path):
    """A cache directory that can not be created falls through to live data or the defaults."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    cache_directory = str(blocker / "cache")

    offline = LocationYieldCalculator(fft.make_gateway(cache_directory), reference_year=2023)
    result = offline.compute(51.5, -0.1)
    assert result.data_source == lt.DataSourceTag.DEFAULT
    assert result.monthly_solar_irradiance == DEFAULT_MONTHLY_IRRADIANCE.to_dict()

    online_gateway = fft.make_gateway(cache_directory, irradiance_provider=fft.FakeProvider(fft.SAMPLE_IRRADIANCE))
    lookup = online_gateway.lookup_monthly_irradiance(51.5, -0.1)
    assert lookup.source == lt.DataSourceTag.LIVE
    assert lookup.series == fft.SAMPLE_IRRADIANCE
