""" Monthly distribution tables in percent of the annual total.

Every table sums to 100. The tables are tuples behind a read only mapping
and are only reachable through the lookup functions below.
"""
# clean
import enum
from types import MappingProxyType
from typing import Dict, Tuple

from hidem import loadtypes as lt
from hidem.monthly_series import MonthlySeries


@enum.unique
class ProportionTable(str, enum.Enum):

    """Names of the distribution tables."""

    ELECTRICITY_STANDARD = "electricity_standard"
    ELECTRICITY_HEAT_PUMP = "electricity_heat_pump"
    GAS_STANDARD = "gas_standard"
    GAS_SPACE_HEATING = "gas_space_heating"
    GAS_HOT_WATER = "gas_hot_water"
    HOT_WATER_DEMAND = "hot_water_demand"


_HOT_WATER_PROFILE = (9.4, 8.5, 9.1, 8.1, 8.2, 7.5, 7.3, 7.3, 7.8, 8.3, 8.4, 10.1)

# sums to 93, scaled to 100 below
_SPACE_HEATING_WEIGHTS = (17.0, 15.0, 12.0, 8.0, 4.0, 1.0, 1.0, 1.0, 3.0, 6.0, 11.0, 14.0)

_TABLES = MappingProxyType(
    {
        ProportionTable.ELECTRICITY_STANDARD: (11.0, 10.0, 9.0, 8.0, 7.0, 6.0, 6.0, 6.0, 7.0, 8.0, 9.0, 13.0),
        # winter peak of heat pump households
        ProportionTable.ELECTRICITY_HEAT_PUMP: (12.0, 11.0, 10.0, 8.0, 6.0, 5.0, 5.0, 5.0, 6.0, 7.0, 9.0, 16.0),
        ProportionTable.GAS_STANDARD: (15.0, 14.0, 12.0, 9.0, 6.0, 3.0, 3.0, 3.0, 5.0, 8.0, 11.0, 11.0),
        ProportionTable.GAS_SPACE_HEATING: tuple(
            weight * 100.0 / sum(_SPACE_HEATING_WEIGHTS) for weight in _SPACE_HEATING_WEIGHTS
        ),
        ProportionTable.GAS_HOT_WATER: _HOT_WATER_PROFILE,
        ProportionTable.HOT_WATER_DEMAND: _HOT_WATER_PROFILE,
    }
)


def get_proportions(table: ProportionTable) -> Tuple[float, ...]:
    """Returns the twelve percentages of a table, January first."""
    return _TABLES[table]


def get_proportions_by_month(table: ProportionTable) -> Dict[int, float]:
    """Returns a fresh month to percentage dictionary of a table."""
    return MonthlySeries(get_proportions(table), lt.Units.PERCENT).to_dict()


def electricity_table(has_heat_pump: bool) -> ProportionTable:
    """Table used to distribute an annual electricity figure."""
    if has_heat_pump:
        return ProportionTable.ELECTRICITY_HEAT_PUMP
    return ProportionTable.ELECTRICITY_STANDARD


def distribute(total: float, table: ProportionTable) -> MonthlySeries:
    """Spreads an annual total over the months with a table."""
    return MonthlySeries.from_proportions(total, get_proportions(table), lt.Units.KWH)
