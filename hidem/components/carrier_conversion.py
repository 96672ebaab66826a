""" Converts thermal demand into the demand of the energy carrier that serves it. """
# clean
from typing import Optional

from hidem import loadtypes as lt
from hidem import log
from hidem.components.heat_pump_catalogue import HeatPumpCatalogue
from hidem.monthly_series import MonthlySeries


def resolve_cop(
    catalogue: HeatPumpCatalogue, heat_pump_id: Optional[int] = None, heat_pump_cop: Optional[float] = None
) -> float:
    """An explicit COP wins over the catalogue entry of the id."""
    if heat_pump_cop is not None:
        if heat_pump_cop <= 0:
            log.warning(f"Ignoring non positive heat pump COP {heat_pump_cop}.")
        else:
            return heat_pump_cop
    return catalogue.get_cop(heat_pump_id)


def thermal_to_electricity(thermal: MonthlySeries, system_type: lt.HeatingSystemType, cop: float) -> MonthlySeries:
    """Electricity a system draws for a thermal demand.

    Gas systems and unknown systems draw no electricity. The COP is only used for heat pumps.
    """
    if system_type == lt.HeatingSystemType.HEAT_PUMP:
        return thermal.scale(1.0 / cop)
    if system_type == lt.HeatingSystemType.ELECTRIC:
        return thermal
    if system_type == lt.HeatingSystemType.GAS:
        return MonthlySeries.zeros(thermal.unit)
    log.debug("Unknown heating system, the thermal demand is not counted as electricity.")
    return MonthlySeries.zeros(thermal.unit)
