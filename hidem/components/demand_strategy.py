""" Strategy selection and the user data strategies shared by all demand types. """
# clean
from typing import Mapping, Optional, Tuple

from hidem import loadtypes as lt
from hidem import log
from hidem import proportion_tables
from hidem.demand_request import DemandEstimateRequest
from hidem.demand_result import DemandResult
from hidem.estimation_errors import InvalidInput
from hidem.estimation_parameters import EstimationParameters
from hidem.monthly_series import MONTHS, MonthlySeries


def select_calculation_method(request: DemandEstimateRequest) -> lt.CalculationMethod:
    """Monthly data wins over an annual figure, which wins over an estimation."""
    if request.monthly_usage:
        return lt.CalculationMethod.USER_MONTHLY
    if request.annual_usage is not None and request.annual_usage > 0:
        return lt.CalculationMethod.USER_ANNUAL_DISTRIBUTED
    if request.needs_estimation:
        return lt.CalculationMethod.ESTIMATED
    raise InvalidInput(
        "No valid demand input provided. Please provide monthly usage, annual usage, or request an estimation."
    )


def validate_monthly_input(monthly_usage: Optional[Mapping[int, float]]) -> bool:
    """True if every month has a value and no value is negative."""
    if not monthly_usage:
        return False
    for month in MONTHS:
        value = monthly_usage.get(month)
        if value is None or value < 0:
            return False
    return True


def from_monthly_input(monthly_usage: Mapping[int, float], carrier_name: str) -> DemandResult:
    """Takes the user's months as they are, missing months count as zero."""
    try:
        series = MonthlySeries.from_partial(monthly_usage, lt.Units.KWH)
    except ValueError as error:
        raise InvalidInput(str(error)) from error
    return DemandResult.from_series(
        series,
        lt.CalculationMethod.USER_MONTHLY,
        f"Monthly {carrier_name} demand calculated from user's monthly input",
    )


def from_annual_input(
    annual_usage: float, table: proportion_tables.ProportionTable, carrier_name: str, table_name: str, **optional_fields
) -> DemandResult:
    """Spreads the user's annual figure with a proportion table."""
    series = proportion_tables.distribute(annual_usage, table)
    return DemandResult.from_series(
        series,
        lt.CalculationMethod.USER_ANNUAL_DISTRIBUTED,
        f"Annual {carrier_name} demand ({annual_usage:,.0f} kWh) distributed using {table_name} proportions",
        annual_demand=annual_usage,
        monthly_proportions=proportion_tables.get_proportions_by_month(table),
        **optional_fields,
    )


def resolve_coordinates(request: DemandEstimateRequest, parameters: EstimationParameters) -> Tuple[float, float]:
    """Coordinates of the request or the default location."""
    if request.has_coordinates():
        return request.latitude, request.longitude  # type: ignore
    log.warning(
        f"No coordinates given, using the default location {parameters.default_location} "
        f"({parameters.default_latitude}, {parameters.default_longitude})."
    )
    return parameters.default_latitude, parameters.default_longitude
