""" Fakes and factories shared by the tests. """
import datetime
from typing import List, Optional, Tuple

from hidem import loadtypes as lt
from hidem.components.basic_demand import BasicDemandCalculator
from hidem.components.electricity_demand import ElectricityDemandOrchestrator
from hidem.components.gas_demand import GasDemandOrchestrator
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.components.hot_water_demand import HotWaterDemandCalculator
from hidem.components.irradiance_cache import IrradianceCache
from hidem.components.space_heating_demand import SpaceHeatingDemandCalculator
from hidem.components.weather_gateway import ExternalDataGateway
from hidem.estimation_errors import ExternalDataError, NetworkError
from hidem.estimation_parameters import EstimationParameters
from hidem.monthly_series import MonthlySeries

FIXED_NOW = datetime.datetime(2024, 6, 1, 12, 0, tzinfo=datetime.timezone.utc)

SAMPLE_IRRADIANCE = MonthlySeries(
    (0.8, 1.6, 2.9, 4.3, 5.5, 6.0, 5.8, 5.0, 3.6, 2.1, 1.0, 0.6), lt.Units.KWH_PER_SQUARE_METER_PER_DAY
)
SAMPLE_TEMPERATURE = MonthlySeries(
    (3.0, 4.0, 6.0, 9.0, 12.0, 15.0, 17.0, 17.0, 14.0, 10.0, 6.0, 4.0), lt.Units.CELSIUS
)


class FakeProvider:

    """Provider that answers with a fixed series or raises a fixed error."""

    def __init__(self, series: Optional[MonthlySeries] = None, error: Optional[ExternalDataError] = None) -> None:
        self.series = series
        self.error = error
        self.calls: List[Tuple[float, float]] = []

    def fetch(self, latitude: float, longitude: float) -> MonthlySeries:
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        assert self.series is not None
        return self.series


def unreachable_provider() -> FakeProvider:
    return FakeProvider(error=NetworkError("host unreachable"))


def make_gateway(
    cache_directory: str,
    irradiance_provider: Optional[FakeProvider] = None,
    fallback_provider: Optional[FakeProvider] = None,
    temperature_provider: Optional[FakeProvider] = None,
    now: datetime.datetime = FIXED_NOW,
) -> ExternalDataGateway:
    """Gateway whose providers are unreachable unless given."""
    return ExternalDataGateway(
        irradiance_cache=IrradianceCache(cache_directory, coordinate_precision=4),
        irradiance_provider=irradiance_provider or unreachable_provider(),
        irradiance_fallback_provider=fallback_provider or unreachable_provider(),
        temperature_provider=temperature_provider or unreachable_provider(),
        clock=lambda: now,
    )


def make_parameters(cache_directory: str) -> EstimationParameters:
    return EstimationParameters(cache_directory=cache_directory, request_timeout=1.0)


def make_electricity_orchestrator(gateway: ExternalDataGateway, parameters: EstimationParameters) -> ElectricityDemandOrchestrator:
    catalogue = HeatPumpCatalogue.get_default(parameters.default_heat_pump_cop)
    return ElectricityDemandOrchestrator(
        BasicDemandCalculator(),
        HotWaterDemandCalculator(catalogue),
        SpaceHeatingDemandCalculator(gateway, catalogue),
        parameters,
    )


def make_gas_orchestrator(gateway: ExternalDataGateway, parameters: EstimationParameters) -> GasDemandOrchestrator:
    catalogue = HeatPumpCatalogue.get_default(parameters.default_heat_pump_cop)
    return GasDemandOrchestrator(
        HotWaterDemandCalculator(catalogue),
        SpaceHeatingDemandCalculator(gateway, catalogue),
        parameters,
    )
