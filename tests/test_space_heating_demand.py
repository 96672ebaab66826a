"""Test for the space heating demand of a building."""
import pytest

from hidem import loadtypes as lt
from hidem.components import space_heating_demand
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.components.space_heating_demand import BuildingFabric, SpaceHeatingDemandCalculator
from hidem.components.weather_gateway import DEFAULT_MONTHLY_TEMPERATURE
from hidem.demand_request import DemandEstimateRequest
from hidem.monthly_series import MonthlySeries
from tests import functions_for_testing as fft


@pytest.mark.base
def test_default_fabric_coefficient():
    """Cavity walls, double glazing, no insulation, semi-detached, 1981-2002."""
    fabric = BuildingFabric.from_request(DemandEstimateRequest())
    assert fabric == BuildingFabric()
    expected_fabric = (1.5 * 0.3 + 2.8 * 0.15 + 0.6 * 0.2 + 0.6 * 0.2) * 0.85
    expected_ventilation = 0.33 * 0.55 * 2.4
    assert fabric.get_heat_loss_coefficient() == pytest.approx(expected_fabric + expected_ventilation)
    assert fabric.get_heat_loss_coefficient() == pytest.approx(1.3791)


@pytest.mark.base
def test_leaky_detached_house():
    """A detached brick house from before 1930 with single glazing."""
    request = DemandEstimateRequest(
        wall_type="brick", window_type="single", house_type="detached", build_era="before-1930"
    )
    assert BuildingFabric.from_request(request).get_heat_loss_coefficient() == pytest.approx(1.59 + 0.7128)


@pytest.mark.base
def test_unknown_categories_use_defaults():
    """Unknown strings give the default coefficient."""
    request = DemandEstimateRequest(
        wall_type="straw", window_type="quadruple", roof_insulation="maybe", house_type="castle", build_era="future"
    )
    assert BuildingFabric.from_request(request) == BuildingFabric()


@pytest.mark.base
def test_no_heating_when_outside_is_warm():
    """Outdoor temperatures of 20 °C and above need no heating."""
    temperatures = MonthlySeries([20.0] * 6 + [25.0] * 6, lt.Units.CELSIUS)
    demand = space_heating_demand.calculate_monthly_heat_demand(1.3791, 100.0, temperatures)
    assert demand.total() == 0.0


@pytest.mark.base
def test_manual_heat_balance_of_january():
    """Loss per area minus a twelfth of the internal gains, times the floor area."""
    demand = space_heating_demand.calculate_monthly_heat_demand(1.3791, 100.0, fft.SAMPLE_TEMPERATURE)
    expected_loss_per_area = 1.3791 * (20.0 - 3.0) * 31 * 24 / 1000
    assert demand[1] == pytest.approx((expected_loss_per_area - 15.0 / 12) * 100.0)
    # February of a typical year has 28 days
    expected_loss_per_area = 1.3791 * (20.0 - 4.0) * 28 * 24 / 1000
    assert demand[2] == pytest.approx((expected_loss_per_area - 15.0 / 12) * 100.0)


@pytest.mark.base
def test_internal_gains_never_make_demand_negative():
    """A mild month with a tiny coefficient stays at zero."""
    temperatures = MonthlySeries.constant(19.5, lt.Units.CELSIUS)
    demand = space_heating_demand.calculate_monthly_heat_demand(0.1, 100.0, temperatures)
    assert min(demand.values()) == 0.0


@pytest.mark.base
def test_missing_floor_area_skips_the_temperature_lookup(tmp_path):
    """Zero demand without asking for temperatures."""
    temperature_provider = fft.FakeProvider(fft.SAMPLE_TEMPERATURE)
    gateway = fft.make_gateway(str(tmp_path), temperature_provider=temperature_provider)
    calculator = SpaceHeatingDemandCalculator(gateway, HeatPumpCatalogue.get_default())
    request = DemandEstimateRequest(heating_type="electric", house_floor_area=0)
    assert calculator.compute(request, 51.5, -0.1).total() == 0.0
    assert temperature_provider.calls == []


@pytest.mark.base
def test_conversion_by_heating_system(tmp_path):
    """Heat pumps divide by the COP, gas draws no electricity."""
    gateway = fft.make_gateway(str(tmp_path), temperature_provider=fft.FakeProvider(fft.SAMPLE_TEMPERATURE))
    calculator = SpaceHeatingDemandCalculator(gateway, HeatPumpCatalogue.get_default())
    request = DemandEstimateRequest(heating_type="heat-pump", heat_pump_id=3, house_floor_area=80.0)
    thermal = calculator.compute_thermal(request, 51.5, -0.1)
    assert thermal.total() > 0
    assert calculator.compute(request, 51.5, -0.1).total() == pytest.approx(thermal.total() / 4.0)

    request = DemandEstimateRequest(heating_type="gas-boiler", house_floor_area=80.0)
    assert calculator.compute(request, 51.5, -0.1).total() == 0.0
    assert calculator.annual_thermal_demand(request, 51.5, -0.1) == pytest.approx(thermal.total())

    request = DemandEstimateRequest(heating_type="electricity", house_floor_area=80.0)
    assert calculator.compute(request, 51.5, -0.1).total() == pytest.approx(thermal.total())


@pytest.mark.base
def test_unreachable_temperature_source_uses_defaults(tmp_path):
    """The heat balance still runs on the default temperatures."""
    gateway = fft.make_gateway(str(tmp_path))
    calculator = SpaceHeatingDemandCalculator(gateway, HeatPumpCatalogue.get_default())
    request = DemandEstimateRequest(heating_type="electric", house_floor_area=100.0)
    expected = space_heating_demand.calculate_monthly_heat_demand(
        BuildingFabric().get_heat_loss_coefficient(), 100.0, DEFAULT_MONTHLY_TEMPERATURE
    )
    assert calculator.compute(request, 51.5, -0.1) == expected
