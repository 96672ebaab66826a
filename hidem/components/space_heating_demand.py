""" Space heating demand from a simplified monthly heat balance of the building.

Stage A derives one heat loss coefficient per floor area from the fabric and the air
tightness, stage B turns it into monthly demand with the outdoor temperatures.
"""
# clean
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from hidem import loadtypes as lt
from hidem import log
from hidem import utils
from hidem.components import carrier_conversion
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.components.weather_gateway import ExternalDataGateway
from hidem.demand_request import DemandEstimateRequest
from hidem.monthly_series import MonthlySeries

__authors__ = "HiDEM developers"
__license__ = "MIT"

# U-values in W/(m2*K)
WALL_U_VALUES = MappingProxyType(
    {
        lt.WallType.BRICK: 2.0,
        lt.WallType.CAVITY_UNINSULATED: 1.5,
        lt.WallType.CAVITY_INSULATED: 0.5,
        lt.WallType.STONE: 1.7,
        lt.WallType.MODERN: 0.3,
    }
)
WINDOW_U_VALUES = MappingProxyType({lt.WindowType.SINGLE: 5.0, lt.WindowType.DOUBLE: 2.8, lt.WindowType.TRIPLE: 1.0})
ROOF_U_VALUES = MappingProxyType({lt.RoofInsulation.YES: 0.2, lt.RoofInsulation.NO: 0.6})
FLOOR_U_VALUES = MappingProxyType(
    {lt.FloorInsulation.YES: 0.13, lt.FloorInsulation.NO: 0.6, lt.FloorInsulation.MODERN: 0.18}
)
# share of each element in the envelope
WALL_WEIGHT = 0.3
WINDOW_WEIGHT = 0.15
ROOF_WEIGHT = 0.2
FLOOR_WEIGHT = 0.2
SHAPE_FACTORS = MappingProxyType(
    {
        lt.HouseType.DETACHED: 1.0,
        lt.HouseType.SEMI_DETACHED: 0.85,
        lt.HouseType.END_TERRACED: 0.80,
        lt.HouseType.TERRACED: 0.70,
    }
)
# air changes per hour
AIR_CHANGE_RATES = MappingProxyType(
    {
        lt.BuildEra.BEFORE_1930: 0.9,
        lt.BuildEra.FROM_1930_TO_1980: 0.7,
        lt.BuildEra.FROM_1981_TO_2002: 0.55,
        lt.BuildEra.AFTER_2003: 0.45,
    }
)
# m
CEILING_HEIGHT = 2.4
# Wh/(m3*K), heat capacity of air
AIR_HEAT_CONSTANT = 0.33


@dataclass(frozen=True)
class BuildingFabric:

    """Parsed building description. Unknown categories are already replaced by their defaults."""

    wall_type: lt.WallType = lt.WallType.CAVITY_UNINSULATED
    window_type: lt.WindowType = lt.WindowType.DOUBLE
    roof_insulation: lt.RoofInsulation = lt.RoofInsulation.NO
    floor_insulation: lt.FloorInsulation = lt.FloorInsulation.NO
    house_type: lt.HouseType = lt.HouseType.SEMI_DETACHED
    build_era: lt.BuildEra = lt.BuildEra.FROM_1981_TO_2002

    @classmethod
    def from_request(cls, request: DemandEstimateRequest) -> BuildingFabric:
        """Parses the category strings of a request."""
        return cls(
            wall_type=lt.WallType.parse(request.wall_type),
            window_type=lt.WindowType.parse(request.window_type),
            roof_insulation=lt.RoofInsulation.parse(request.roof_insulation),
            floor_insulation=lt.FloorInsulation.parse(request.floor_insulation),
            house_type=lt.HouseType.parse(request.house_type),
            build_era=lt.BuildEra.parse(request.build_era),
        )

    def get_fabric_heat_loss(self) -> float:
        """Weighted envelope U-value, scaled by the exposure of the house shape."""
        weighted_u_value = (
            WALL_U_VALUES[self.wall_type] * WALL_WEIGHT
            + WINDOW_U_VALUES[self.window_type] * WINDOW_WEIGHT
            + ROOF_U_VALUES[self.roof_insulation] * ROOF_WEIGHT
            + FLOOR_U_VALUES[self.floor_insulation] * FLOOR_WEIGHT
        )
        return weighted_u_value * SHAPE_FACTORS[self.house_type]

    def get_ventilation_heat_loss(self) -> float:
        """Infiltration loss per floor area."""
        return AIR_HEAT_CONSTANT * AIR_CHANGE_RATES[self.build_era] * CEILING_HEIGHT

    def get_heat_loss_coefficient(self) -> float:
        """Heat loss coefficient in W/(m2*K)."""
        return self.get_fabric_heat_loss() + self.get_ventilation_heat_loss()


def calculate_monthly_heat_demand(
    heat_loss_coefficient: float, floor_area: float, monthly_temperatures: MonthlySeries
) -> MonthlySeries:
    """Thermal space heating demand in kWh per month.

    Months at or above the indoor temperature need no heating. The internal gains are
    spread evenly and no month goes below zero.
    """
    monthly_internal_gains = SpaceHeatingDemandCalculator.ANNUAL_INTERNAL_GAINS / 12

    def demand_of_month(month: int, outdoor_temperature: float) -> float:
        temperature_difference = SpaceHeatingDemandCalculator.INDOOR_TEMPERATURE - outdoor_temperature
        if temperature_difference <= 0:
            return 0.0
        loss_per_area = heat_loss_coefficient * temperature_difference * utils.hours_in_month(month) / 1000
        return max(0.0, loss_per_area - monthly_internal_gains) * floor_area

    return monthly_temperatures.map(demand_of_month, lt.Units.KWH)


class SpaceHeatingDemandCalculator:

    """Space heating demand of a building and the electricity its heating system draws."""

    # °C
    INDOOR_TEMPERATURE = 20.0
    # kWh per m2 per year
    ANNUAL_INTERNAL_GAINS = 15.0

    def __init__(self, gateway: ExternalDataGateway, heat_pump_catalogue: HeatPumpCatalogue) -> None:
        """Initializes the calculator with the temperature source and the heat pump catalogue."""
        self.gateway = gateway
        self.heat_pump_catalogue = heat_pump_catalogue

    @staticmethod
    def has_floor_area(floor_area: Optional[float]) -> bool:
        """Floor area must be given and positive."""
        return floor_area is not None and floor_area > 0

    def compute_thermal(self, request: DemandEstimateRequest, latitude: float, longitude: float) -> MonthlySeries:
        """Thermal demand per month, zero without a floor area."""
        if not self.has_floor_area(request.house_floor_area):
            log.debug("No floor area given, the space heating demand is zero.")
            return MonthlySeries.zeros(lt.Units.KWH)
        fabric = BuildingFabric.from_request(request)
        coefficient = fabric.get_heat_loss_coefficient()
        temperatures = self.gateway.get_monthly_temperature(latitude, longitude)
        thermal = calculate_monthly_heat_demand(coefficient, request.house_floor_area, temperatures)  # type: ignore
        log.debug(
            f"Heat loss coefficient {coefficient:.3f} W/m2K for {fabric}, "
            f"space heating {thermal.total():.1f} kWh per year."
        )
        return thermal

    def annual_thermal_demand(self, request: DemandEstimateRequest, latitude: float, longitude: float) -> float:
        """Thermal demand in kWh per year."""
        return self.compute_thermal(request, latitude, longitude).total()

    def compute(self, request: DemandEstimateRequest, latitude: float, longitude: float) -> MonthlySeries:
        """Electricity per month for space heating."""
        system_type = request.heating_system
        thermal = self.compute_thermal(request, latitude, longitude)
        cop = 1.0
        if system_type == lt.HeatingSystemType.HEAT_PUMP:
            cop = carrier_conversion.resolve_cop(self.heat_pump_catalogue, request.heat_pump_id, request.heat_pump_cop)
        return carrier_conversion.thermal_to_electricity(thermal, system_type, cop)
