""" Results of demand and yield estimations. """
# clean
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from dataclasses_json import dataclass_json

from hidem import loadtypes as lt
from hidem import utils
from hidem.monthly_series import MonthlySeries


@dataclass_json
@dataclass
class DemandResult:

    """Monthly demand of one energy carrier and how it was derived."""

    # kWh, rounded to two decimals
    monthly_demand: Dict[int, float]
    annual_demand: float
    calculation_method: lt.CalculationMethod
    peak_month: int
    peak_month_demand: float
    low_month: int
    low_month_demand: float
    description: str
    used_heat_pump_proportions: Optional[bool] = None
    # percent, only for distributed annual figures
    monthly_proportions: Optional[Dict[int, float]] = None
    # kWh per year, only for estimated gas
    space_heating_component: Optional[float] = None
    hot_water_component: Optional[float] = None

    @classmethod
    def from_series(
        cls,
        series: MonthlySeries,
        calculation_method: lt.CalculationMethod,
        description: str,
        annual_demand: Optional[float] = None,
        **optional_fields,
    ) -> DemandResult:
        """Rounds the series and fills in the statistics.

        Without an explicit annual figure the annual demand is the sum of the rounded months,
        so a result fed back as monthly input reproduces itself.
        """
        monthly = series.rounded(2)
        peak_month, peak_value = monthly.peak()
        low_month, low_value = monthly.low()
        if annual_demand is None:
            annual_demand = monthly.total()
        return cls(
            monthly_demand=monthly.to_dict(),
            annual_demand=utils.round_half_up(annual_demand, 2),
            calculation_method=calculation_method,
            peak_month=peak_month,
            peak_month_demand=peak_value,
            low_month=low_month,
            low_month_demand=low_value,
            description=description,
            **optional_fields,
        )

    def get_monthly_series(self) -> MonthlySeries:
        """Monthly demand as series."""
        return MonthlySeries.from_mapping(self.monthly_demand, lt.Units.KWH)


@dataclass_json
@dataclass
class LocationYieldResult:

    """Photovoltaic yield per installed kWp at a location."""

    latitude: float
    longitude: float
    location: Optional[str]
    reference_year: int
    # kWh per kWp
    monthly_yield: Dict[int, float]
    # kWh per m2 per day
    monthly_solar_irradiance: Dict[int, float]
    days_in_month: Dict[int, int]
    average_monthly_yield: float
    annual_yield: float
    data_source: lt.DataSourceTag
