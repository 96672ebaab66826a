""" Photovoltaic yield per installed kWp from the monthly irradiance at a location. """
# clean
import datetime
from typing import Optional

from hidem import loadtypes as lt
from hidem import log
from hidem import utils
from hidem.components.weather_gateway import ExternalDataGateway
from hidem.demand_result import LocationYieldResult


class LocationYieldCalculator:

    """Monthly yield = daily irradiance x days of the month x performance ratio."""

    # losses of inverter, wiring, temperature and soiling
    PERFORMANCE_RATIO = 0.8

    def __init__(self, gateway: ExternalDataGateway, reference_year: Optional[int] = None) -> None:
        """Initializes the calculator, without reference year the current year is used."""
        self.gateway = gateway
        self.reference_year = reference_year

    def compute(
        self, latitude: float, longitude: float, location: Optional[str] = None, reference_year: Optional[int] = None
    ) -> LocationYieldResult:
        """Yield of one kWp. Never fails, the irradiance falls back to a default series."""
        year = reference_year or self.reference_year or datetime.date.today().year
        lookup = self.gateway.lookup_monthly_irradiance(latitude, longitude, location)
        irradiance = lookup.series
        monthly_yield = irradiance.map(
            lambda month, daily_irradiance: daily_irradiance * utils.days_in_month(month, year) * self.PERFORMANCE_RATIO,
            lt.Units.KWH_PER_KWP,
        )
        annual_yield = monthly_yield.total()
        log.information(
            f"Yield at {location or 'unnamed location'} ({latitude}, {longitude}) in {year}: "
            f"{annual_yield:.1f} kWh per kWp from {lookup.source.value} irradiance."
        )
        return LocationYieldResult(
            latitude=latitude,
            longitude=longitude,
            location=location,
            reference_year=year,
            monthly_yield=monthly_yield.rounded(2).to_dict(),
            monthly_solar_irradiance=irradiance.to_dict(),
            days_in_month={month: utils.days_in_month(month, year) for month in irradiance},
            average_monthly_yield=utils.round_half_up(annual_yield / 12, 2),
            annual_yield=utils.round_half_up(annual_yield, 2),
            data_source=lookup.source,
        )
