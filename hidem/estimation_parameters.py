""" Defines the estimation parameters class. This defines where data comes from and how long it stays valid. """
# clean
from __future__ import annotations
from typing import Optional
from dataclasses import dataclass
from dataclass_wizard import JSONWizard
from dotenv import load_dotenv

from hidem import log
from hidem import utils


@dataclass()
class EstimationParameters(JSONWizard):

    """Defines HOW estimations are carried out: fallback location, data providers and caching."""

    default_latitude: float = 51.5074
    default_longitude: float = -0.1278
    default_location: str = "London"
    # seconds per HTTP call
    request_timeout: float = 10.0
    cache_directory: str = utils.HIDEMPATH["cache_dir"]
    cache_max_age_in_days: int = 30
    # decimals of latitude and longitude used as cache key
    coordinate_precision: int = 4
    # degrees
    nearby_tolerance: float = 0.1
    default_heat_pump_cop: float = 3.0
    # None means the current year
    yield_reference_year: Optional[int] = None
    logging_level: int = log.LogPrio.INFORMATION

    @classmethod
    def default(cls) -> EstimationParameters:
        """Parameters for a London fallback and the package cache directory."""
        return cls()

    @classmethod
    def from_environment(cls) -> EstimationParameters:
        """Reads overrides from HIDEM_* environment variables, a `.env` file included."""
        load_dotenv()
        defaults = cls()
        reference_year = utils.get_environment_variable("HIDEM_YIELD_REFERENCE_YEAR", "0")
        parameters = cls(
            default_latitude=float(
                utils.get_environment_variable("HIDEM_DEFAULT_LATITUDE", str(defaults.default_latitude))
            ),
            default_longitude=float(
                utils.get_environment_variable("HIDEM_DEFAULT_LONGITUDE", str(defaults.default_longitude))
            ),
            default_location=utils.get_environment_variable("HIDEM_DEFAULT_LOCATION", defaults.default_location),
            request_timeout=float(
                utils.get_environment_variable("HIDEM_REQUEST_TIMEOUT", str(defaults.request_timeout))
            ),
            cache_directory=utils.get_environment_variable("HIDEM_CACHE_DIRECTORY", defaults.cache_directory),
            cache_max_age_in_days=int(
                utils.get_environment_variable("HIDEM_CACHE_MAX_AGE_IN_DAYS", str(defaults.cache_max_age_in_days))
            ),
            coordinate_precision=int(
                utils.get_environment_variable("HIDEM_COORDINATE_PRECISION", str(defaults.coordinate_precision))
            ),
            nearby_tolerance=float(
                utils.get_environment_variable("HIDEM_NEARBY_TOLERANCE", str(defaults.nearby_tolerance))
            ),
            default_heat_pump_cop=float(
                utils.get_environment_variable("HIDEM_DEFAULT_HEAT_PUMP_COP", str(defaults.default_heat_pump_cop))
            ),
            yield_reference_year=int(reference_year) if int(reference_year) > 0 else None,
            logging_level=int(utils.get_environment_variable("HIDEM_LOGGING_LEVEL", str(int(defaults.logging_level)))),
        )
        parameters.validate()
        return parameters

    def validate(self) -> None:
        """Raises a ValueError for parameters no estimation can work with."""
        if not -90 <= self.default_latitude <= 90 or not -180 <= self.default_longitude <= 180:
            raise ValueError(
                f"Default location {self.default_latitude}, {self.default_longitude} is not a valid coordinate."
            )
        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}.")
        if self.cache_max_age_in_days < 0:
            raise ValueError(f"Cache max age must not be negative, got {self.cache_max_age_in_days}.")
        if self.coordinate_precision < 0:
            raise ValueError(f"Coordinate precision must not be negative, got {self.coordinate_precision}.")
        if self.default_heat_pump_cop <= 0:
            raise ValueError(f"Default heat pump COP must be positive, got {self.default_heat_pump_cop}.")
