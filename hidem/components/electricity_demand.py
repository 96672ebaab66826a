""" Monthly electricity demand of a household from user data or an estimation. """
# clean
from __future__ import annotations
from typing import Dict, Mapping, Optional, Tuple

from hidem import loadtypes as lt
from hidem import log
from hidem import proportion_tables
from hidem import utils
from hidem.components import demand_strategy
from hidem.components.basic_demand import BasicDemandCalculator
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.components.hot_water_demand import HotWaterDemandCalculator
from hidem.components.space_heating_demand import SpaceHeatingDemandCalculator
from hidem.components.weather_gateway import ExternalDataGateway
from hidem.demand_request import DemandEstimateRequest
from hidem.demand_result import DemandResult
from hidem.estimation_errors import InvalidInput
from hidem.estimation_parameters import EstimationParameters


class ElectricityDemandOrchestrator:

    """Chooses the strategy for a request and produces the electricity demand.

    Monthly user data is taken as is, an annual figure is distributed with the
    standard or the heat pump table, an estimation adds up basic, hot water and
    space heating electricity.
    """

    def __init__(
        self,
        basic_demand_calculator: BasicDemandCalculator,
        hot_water_calculator: HotWaterDemandCalculator,
        space_heating_calculator: SpaceHeatingDemandCalculator,
        parameters: Optional[EstimationParameters] = None,
    ) -> None:
        """Initializes the orchestrator with its calculators."""
        self.basic_demand_calculator = basic_demand_calculator
        self.hot_water_calculator = hot_water_calculator
        self.space_heating_calculator = space_heating_calculator
        self.parameters = parameters or EstimationParameters.default()

    @classmethod
    def from_parameters(
        cls,
        parameters: EstimationParameters,
        gateway: Optional[ExternalDataGateway] = None,
        heat_pump_catalogue: Optional[HeatPumpCatalogue] = None,
    ) -> ElectricityDemandOrchestrator:
        """Wires the calculators, by default with the real data providers and catalogue."""
        gateway = gateway or ExternalDataGateway.from_parameters(parameters)
        heat_pump_catalogue = heat_pump_catalogue or HeatPumpCatalogue.get_default(parameters.default_heat_pump_cop)
        return cls(
            BasicDemandCalculator(),
            HotWaterDemandCalculator(heat_pump_catalogue),
            SpaceHeatingDemandCalculator(gateway, heat_pump_catalogue),
            parameters,
        )

    @utils.measure_execution_time
    def calculate(self, request: DemandEstimateRequest) -> DemandResult:
        """Electricity demand of the request. Raises InvalidInput if no strategy applies."""
        method = demand_strategy.select_calculation_method(request)
        log.information(f"Calculating electricity demand with method {method.value}.")
        if method == lt.CalculationMethod.USER_MONTHLY:
            return demand_strategy.from_monthly_input(request.monthly_usage, "electricity")  # type: ignore
        if method == lt.CalculationMethod.USER_ANNUAL_DISTRIBUTED:
            return demand_strategy.from_annual_input(
                request.annual_usage,  # type: ignore
                proportion_tables.electricity_table(request.has_heat_pump),
                "electricity",
                "heat pump" if request.has_heat_pump else "standard",
                used_heat_pump_proportions=request.has_heat_pump,
            )
        return self._from_estimation(request)

    def _from_estimation(self, request: DemandEstimateRequest) -> DemandResult:
        if not BasicDemandCalculator.is_valid_occupants(request.occupants):
            raise InvalidInput("Number of occupants (residents) is required for estimation")
        latitude, longitude = demand_strategy.resolve_coordinates(request, self.parameters)

        basic = self.basic_demand_calculator.compute(request.occupants)
        hot_water = self.hot_water_calculator.compute(
            request.occupants, request.hot_water_type, request.heat_pump_id, request.heat_pump_cop
        )
        space_heating = self.space_heating_calculator.compute(request, latitude, longitude)
        total = basic + hot_water + space_heating

        description = (
            f"Estimated electricity demand for {request.occupants} residents: "
            f"Ebasic={basic.mean():.1f} + Ehot water={hot_water.mean():.1f} + "
            f"Espace heating={space_heating.mean():.1f} = {total.mean():.1f} kWh/month avg "
            f"({total.total():.0f} kWh/year)"
        )
        log.information(description)
        return DemandResult.from_series(total, lt.CalculationMethod.ESTIMATED, description)

    @staticmethod
    def validate_monthly_input(monthly_usage: Optional[Mapping[int, float]]) -> bool:
        """True if every month has a non negative value."""
        return demand_strategy.validate_monthly_input(monthly_usage)

    @staticmethod
    def get_monthly_proportions() -> Dict[str, Tuple[float, ...]]:
        """Distribution tables for annual electricity figures."""
        return {
            "standard": proportion_tables.get_proportions(proportion_tables.ProportionTable.ELECTRICITY_STANDARD),
            "heat_pump": proportion_tables.get_proportions(proportion_tables.ProportionTable.ELECTRICITY_HEAT_PUMP),
        }
