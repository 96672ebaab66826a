""" Domestic hot water demand and the electricity needed to heat it. """
# clean
from typing import Optional

from hidem import loadtypes as lt
from hidem import log
from hidem import proportion_tables
from hidem.components import carrier_conversion
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.monthly_series import MonthlySeries


class HotWaterDemandCalculator:

    """Thermal hot water demand from the occupants, converted by the hot water system."""

    # kWh per year
    ANNUAL_BASE_DEMAND = 1250.0
    ANNUAL_STANDING_LOSSES = 600.0
    ANNUAL_DEMAND_PER_OCCUPANT = 1.0

    def __init__(self, heat_pump_catalogue: HeatPumpCatalogue) -> None:
        """Initializes the calculator with the catalogue for heat pump COPs."""
        self.heat_pump_catalogue = heat_pump_catalogue

    def annual_thermal_demand(self, occupants: Optional[int]) -> float:
        """Thermal demand in kWh per year, zero without occupants."""
        if occupants is None or occupants <= 0:
            return 0.0
        return self.ANNUAL_BASE_DEMAND + self.ANNUAL_DEMAND_PER_OCCUPANT * occupants + self.ANNUAL_STANDING_LOSSES

    def compute_thermal(self, occupants: Optional[int]) -> MonthlySeries:
        """Thermal demand per month."""
        return proportion_tables.distribute(
            self.annual_thermal_demand(occupants), proportion_tables.ProportionTable.HOT_WATER_DEMAND
        )

    def compute(
        self,
        occupants: Optional[int],
        hot_water_type: Optional[str],
        heat_pump_id: Optional[int] = None,
        heat_pump_cop: Optional[float] = None,
    ) -> MonthlySeries:
        """Electricity per month for heating the hot water."""
        if occupants is None or occupants <= 0:
            log.debug("No occupants given, the hot water demand is zero.")
            return MonthlySeries.zeros(lt.Units.KWH)
        system_type = lt.HeatingSystemType.parse(hot_water_type)
        cop = 1.0
        if system_type == lt.HeatingSystemType.HEAT_PUMP:
            cop = carrier_conversion.resolve_cop(self.heat_pump_catalogue, heat_pump_id, heat_pump_cop)
        electricity = carrier_conversion.thermal_to_electricity(self.compute_thermal(occupants), system_type, cop)
        log.debug(
            f"Hot water for {occupants} occupants with {system_type.value}: {electricity.total():.1f} kWh electricity per year."
        )
        return electricity
