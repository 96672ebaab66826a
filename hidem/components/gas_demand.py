""" Monthly gas demand of a household from user data or an estimation. """
# clean
from __future__ import annotations
from typing import Dict, Mapping, Optional, Tuple

from hidem import loadtypes as lt
from hidem import log
from hidem import proportion_tables
from hidem import utils
from hidem.components import demand_strategy
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.components.hot_water_demand import HotWaterDemandCalculator
from hidem.components.space_heating_demand import SpaceHeatingDemandCalculator
from hidem.components.weather_gateway import ExternalDataGateway
from hidem.demand_request import DemandEstimateRequest
from hidem.demand_result import DemandResult
from hidem.estimation_errors import InvalidInput
from hidem.estimation_parameters import EstimationParameters


class GasDemandOrchestrator:

    """Chooses the strategy for a request and produces the gas demand.

    An estimation counts space heating only for gas heating and hot water only for
    gas hot water. The two annual figures are weighted with fixed allocation factors
    and spread with their own tables.
    """

    SPACE_HEATING_ALLOCATION = 0.85
    HOT_WATER_ALLOCATION = 0.15

    def __init__(
        self,
        hot_water_calculator: HotWaterDemandCalculator,
        space_heating_calculator: SpaceHeatingDemandCalculator,
        parameters: Optional[EstimationParameters] = None,
    ) -> None:
        """Initializes the orchestrator with its calculators."""
        self.hot_water_calculator = hot_water_calculator
        self.space_heating_calculator = space_heating_calculator
        self.parameters = parameters or EstimationParameters.default()

    @classmethod
    def from_parameters(
        cls,
        parameters: EstimationParameters,
        gateway: Optional[ExternalDataGateway] = None,
        heat_pump_catalogue: Optional[HeatPumpCatalogue] = None,
    ) -> GasDemandOrchestrator:
        """Wires the calculators, by default with the real data providers and catalogue."""
        gateway = gateway or ExternalDataGateway.from_parameters(parameters)
        heat_pump_catalogue = heat_pump_catalogue or HeatPumpCatalogue.get_default(parameters.default_heat_pump_cop)
        return cls(
            HotWaterDemandCalculator(heat_pump_catalogue),
            SpaceHeatingDemandCalculator(gateway, heat_pump_catalogue),
            parameters,
        )

    @utils.measure_execution_time
    def calculate(self, request: DemandEstimateRequest) -> DemandResult:
        """Gas demand of the request. Raises InvalidInput if no strategy applies."""
        method = demand_strategy.select_calculation_method(request)
        log.information(f"Calculating gas demand with method {method.value}.")
        if method == lt.CalculationMethod.USER_MONTHLY:
            return demand_strategy.from_monthly_input(request.monthly_usage, "gas")  # type: ignore
        if method == lt.CalculationMethod.USER_ANNUAL_DISTRIBUTED:
            return demand_strategy.from_annual_input(
                request.annual_usage,  # type: ignore
                proportion_tables.ProportionTable.GAS_STANDARD,
                "gas",
                "standard gas",
            )
        return self._from_estimation(request)

    def _from_estimation(self, request: DemandEstimateRequest) -> DemandResult:
        if request.occupants is None or request.occupants <= 0:
            raise InvalidInput("Number of occupants is required for gas demand estimation")

        annual_space_heating = 0.0
        if request.heating_system == lt.HeatingSystemType.GAS:
            latitude, longitude = demand_strategy.resolve_coordinates(request, self.parameters)
            annual_space_heating = self.space_heating_calculator.annual_thermal_demand(request, latitude, longitude)
        annual_hot_water = 0.0
        if request.hot_water_system == lt.HeatingSystemType.GAS:
            annual_hot_water = self.hot_water_calculator.annual_thermal_demand(request.occupants)
        return self.estimate_from_annual_demands(annual_space_heating, annual_hot_water, request.occupants)

    def estimate_from_annual_demands(
        self, annual_space_heating: float, annual_hot_water: float, occupants: int
    ) -> DemandResult:
        """Weights and spreads annual space heating and hot water gas demand."""
        space_heating_component = annual_space_heating * self.SPACE_HEATING_ALLOCATION
        hot_water_component = annual_hot_water * self.HOT_WATER_ALLOCATION
        monthly = proportion_tables.distribute(
            space_heating_component, proportion_tables.ProportionTable.GAS_SPACE_HEATING
        ) + proportion_tables.distribute(hot_water_component, proportion_tables.ProportionTable.GAS_HOT_WATER)
        log.information(
            f"Gas demand estimation: space heating ({annual_space_heating:.1f} x {self.SPACE_HEATING_ALLOCATION:.2f}) "
            f"+ hot water ({annual_hot_water:.1f} x {self.HOT_WATER_ALLOCATION:.2f}) = "
            f"{space_heating_component + hot_water_component:.1f} kWh/year"
        )
        description = (
            f"Estimated gas demand for {occupants} residents: "
            f"Space heating component={space_heating_component:.1f} kWh/year (85%), "
            f"Hot water component={hot_water_component:.1f} kWh/year (15%), "
            f"Total={monthly.total():.1f} kWh/year"
        )
        return DemandResult.from_series(
            monthly,
            lt.CalculationMethod.ESTIMATED,
            description,
            space_heating_component=utils.round_half_up(space_heating_component, 2),
            hot_water_component=utils.round_half_up(hot_water_component, 2),
        )

    @staticmethod
    def validate_monthly_input(monthly_usage: Optional[Mapping[int, float]]) -> bool:
        """True if every month has a non negative value."""
        return demand_strategy.validate_monthly_input(monthly_usage)

    @staticmethod
    def get_monthly_proportions() -> Dict[str, Tuple[float, ...]]:
        """Distribution tables for gas."""
        return {
            "standard": proportion_tables.get_proportions(proportion_tables.ProportionTable.GAS_STANDARD),
            "space_heating": proportion_tables.get_proportions(proportion_tables.ProportionTable.GAS_SPACE_HEATING),
            "hot_water": proportion_tables.get_proportions(proportion_tables.ProportionTable.GAS_HOT_WATER),
        }
