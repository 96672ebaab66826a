""" Import monthly irradiance from NASA POWER and monthly temperature from Open-Meteo. """
# clean
import datetime
import math
from typing import Any, Dict, Optional, Tuple

import pandas as pd
import requests

from hidem import loadtypes as lt
from hidem import log
from hidem import utils
from hidem.estimation_errors import NetworkError, NotFound, ParseError
from hidem.monthly_series import MONTHS, MonthlySeries

NASA_POWER_MONTHLY_URL = "https://power.larc.nasa.gov/api/temporal/monthly/point"
NASA_POWER_CLIMATOLOGY_URL = "https://power.larc.nasa.gov/api/temporal/climatology/point"
OPEN_METEO_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

# all sky surface shortwave downward irradiance in kWh per m2 per day
IRRADIANCE_PARAMETER = "ALLSKY_SFC_SW_DWN"
NASA_POWER_FIRST_YEAR = 1981
MONTH_ABBREVIATIONS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}


def get_json(url: str, params: Dict[str, Any], timeout: float) -> Any:
    """Performs one GET request and returns the decoded json body.

    Raises NetworkError for unreachable hosts and server errors, NotFound for
    client errors and ParseError for bodies that are not json.
    """
    try:
        response = requests.get(url, params=params, timeout=timeout)
    except requests.exceptions.Timeout as error:
        raise NetworkError(f"Request to {url} timed out after {timeout} seconds.") from error
    except requests.exceptions.RequestException as error:
        raise NetworkError(f"Request to {url} failed: {error}") from error
    if 400 <= response.status_code < 500:
        raise NotFound(f"{url} answered {response.status_code} for {params}.")
    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as error:
        raise NetworkError(f"{url} answered {response.status_code}.") from error
    try:
        return response.json()
    except ValueError as error:
        raise ParseError(f"{url} did not answer with json.") from error


def complete_monthly_series(monthly_means: pd.Series, unit: lt.Units, source_name: str) -> MonthlySeries:
    """Turns per month means into a series, rounded to two decimals. Gaps are a ParseError."""
    missing = [month for month in MONTHS if month not in monthly_means.index]
    if missing:
        raise ParseError(f"{source_name} delivered no valid values for months {missing}.")
    return MonthlySeries([utils.round_half_up(float(monthly_means[month]), 2) for month in MONTHS], unit)


def get_irradiance_block(payload: Any) -> Dict[str, Any]:
    """Values of the irradiance parameter in a NASA POWER answer."""
    try:
        block = payload["properties"]["parameter"][IRRADIANCE_PARAMETER]
    except (KeyError, TypeError) as error:
        raise ParseError(f"NASA POWER answer lacks the {IRRADIANCE_PARAMETER} parameter.") from error
    if not isinstance(block, dict) or not block:
        raise ParseError(f"NASA POWER answer holds no {IRRADIANCE_PARAMETER} values.")
    return block


def parse_nasa_power_monthly(payload: Any) -> MonthlySeries:
    """Averages the YYYYMM keyed values over the years.

    Fill values (-999), negative and missing values are skipped. The annual
    entries with month 13 are ignored.
    """
    block = get_irradiance_block(payload)
    database = pd.DataFrame(
        {
            "key": [str(key) for key in block],
            "value": pd.to_numeric(pd.Series(list(block.values()), dtype=object), errors="coerce"),
        }
    )
    database["month"] = pd.to_numeric(database["key"].str[4:], errors="coerce")
    valid = (
        (database["key"].str.len() == 6)
        & database["month"].between(1, 12)
        & database["value"].notna()
        & (database["value"] >= 0)
    )
    valid_values = database[valid].astype({"month": int})
    monthly_means = valid_values.groupby("month")["value"].mean()
    return complete_monthly_series(monthly_means, lt.Units.KWH_PER_SQUARE_METER_PER_DAY, "NASA POWER monthly")


def parse_nasa_power_climatology(payload: Any) -> MonthlySeries:
    """Reads the long term monthly means, keyed JAN to DEC."""
    block = get_irradiance_block(payload)
    values: Dict[int, float] = {}
    for key, raw_value in block.items():
        key = str(key).upper()
        month: Optional[int] = MONTH_ABBREVIATIONS.get(key)
        if month is None and key.isdigit() and 1 <= int(key) <= 12:
            month = int(key)
        if month is None:
            continue
        try:
            value = float(raw_value)
        except (TypeError, ValueError):
            continue
        if math.isnan(value) or value < 0:
            continue
        values[month] = value
    return complete_monthly_series(
        pd.Series(values, dtype=float), lt.Units.KWH_PER_SQUARE_METER_PER_DAY, "NASA POWER climatology"
    )


def parse_open_meteo_daily_temperature(payload: Any) -> MonthlySeries:
    """Averages the daily mean temperatures per calendar month."""
    try:
        daily = payload["daily"]
        times = daily["time"]
        temperatures = daily["temperature_2m_mean"]
    except (KeyError, TypeError) as error:
        raise ParseError("Open-Meteo answer lacks daily mean temperatures.") from error
    if len(times) != len(temperatures):
        raise ParseError("Open-Meteo answer has a different number of dates and temperatures.")
    database = pd.DataFrame(
        {
            "time": pd.to_datetime(pd.Series(times, dtype=object), errors="coerce"),
            "temperature": pd.to_numeric(pd.Series(temperatures, dtype=object), errors="coerce"),
        }
    ).dropna()
    monthly_means = database.groupby(database["time"].dt.month)["temperature"].mean()
    return complete_monthly_series(monthly_means, lt.Units.CELSIUS, "Open-Meteo archive")


class NasaPowerMonthlyProvider:

    """Monthly irradiance of the last complete years from the NASA POWER time series."""

    def __init__(self, timeout: float, number_of_years: int = 5, today: Optional[datetime.date] = None) -> None:
        """Initializes the provider, today decides which years are complete."""
        self.timeout = timeout
        self.number_of_years = number_of_years
        self.today = today

    def get_year_range(self) -> Tuple[int, int]:
        """First and last year requested."""
        today = self.today or datetime.date.today()
        end_year = today.year - 1
        start_year = max(end_year - self.number_of_years + 1, NASA_POWER_FIRST_YEAR)
        return start_year, end_year

    def fetch(self, latitude: float, longitude: float) -> MonthlySeries:
        """Monthly irradiance averaged over the years."""
        start_year, end_year = self.get_year_range()
        params = {
            "parameters": IRRADIANCE_PARAMETER,
            "community": "RE",
            "longitude": f"{longitude:.6f}",
            "latitude": f"{latitude:.6f}",
            "start": start_year,
            "end": end_year,
            "format": "JSON",
        }
        log.debug(f"Requesting NASA POWER monthly irradiance {start_year}-{end_year} for {latitude}, {longitude}.")
        return parse_nasa_power_monthly(get_json(NASA_POWER_MONTHLY_URL, params, self.timeout))


class NasaPowerClimatologyProvider:

    """Long term monthly irradiance from the NASA POWER climatology."""

    def __init__(self, timeout: float) -> None:
        """Initializes the provider."""
        self.timeout = timeout

    def fetch(self, latitude: float, longitude: float) -> MonthlySeries:
        """Monthly climatological irradiance."""
        params = {
            "parameters": IRRADIANCE_PARAMETER,
            "community": "RE",
            "longitude": f"{longitude:.6f}",
            "latitude": f"{latitude:.6f}",
            "format": "JSON",
        }
        log.debug(f"Requesting NASA POWER climatology for {latitude}, {longitude}.")
        return parse_nasa_power_climatology(get_json(NASA_POWER_CLIMATOLOGY_URL, params, self.timeout))


class OpenMeteoTemperatureProvider:

    """Monthly mean outdoor temperature of one past year from the Open-Meteo archive."""

    def __init__(self, timeout: float, year: Optional[int] = None) -> None:
        """Initializes the provider, the default year is the last complete one."""
        self.timeout = timeout
        self.year = year

    def fetch(self, latitude: float, longitude: float) -> MonthlySeries:
        """Monthly mean temperatures."""
        year = self.year or datetime.date.today().year - 1
        params = {
            "latitude": f"{latitude:.4f}",
            "longitude": f"{longitude:.4f}",
            "start_date": f"{year}-01-01",
            "end_date": f"{year}-12-31",
            "daily": "temperature_2m_mean",
            "timezone": "auto",
        }
        log.debug(f"Requesting Open-Meteo temperatures of {year} for {latitude}, {longitude}.")
        return parse_open_meteo_daily_temperature(get_json(OPEN_METEO_ARCHIVE_URL, params, self.timeout))
