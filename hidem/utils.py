""" Contains various utility functions and utility classes. """
# clean
import calendar
import decimal
import hashlib
import inspect
import math
import os
from functools import wraps
from timeit import default_timer as timer
from typing import Any, Dict, Optional, Tuple

from hidem import log

__authors__ = "HiDEM developers"
__license__ = "MIT"
__version__ = "1"
__status__ = "development"

# Retrieves hidem directory absolute path
hidem_abs_path = os.path.dirname(os.path.abspath(inspect.getfile(inspect.currentframe())))  # type: ignore
hidem_inputs = os.path.join(hidem_abs_path, "inputs")

HIDEMPATH: Dict[str, Any] = {
    "inputs": hidem_inputs,
    "cache_dir": os.path.join(hidem_inputs, "cache"),
    "heat_pumps": os.path.join(hidem_inputs, "heat_pumps.json"),
}

# year without February 29th, used where a typical year is meant
TYPICAL_YEAR = 2023


def days_in_month(month: int, year: Optional[int] = None) -> int:
    """Returns the number of days of a month, leap years included when a year is given."""
    if month < 1 or month > 12:
        raise ValueError(f"Month {month} is not between 1 and 12.")
    if year is None:
        year = TYPICAL_YEAR
    return calendar.monthrange(year, month)[1]


def hours_in_month(month: int, year: Optional[int] = None) -> int:
    """Returns the number of hours of a month."""
    return days_in_month(month, year) * 24


def round_half_up(value: float, digits: int = 2) -> float:
    """Rounds to the given decimals with halves away from zero, 0.125 becomes 0.13.

    The shortest decimal text of the float is rounded, not its binary value.
    """
    if not math.isfinite(value):
        return value
    quantum = decimal.Decimal(1).scaleb(-digits)
    return float(decimal.Decimal(repr(float(value))).quantize(quantum, rounding=decimal.ROUND_HALF_UP))


def get_coordinate_cache_file(
    component_key: str, latitude: float, longitude: float, cache_dir_path: str = HIDEMPATH["cache_dir"]
) -> Tuple[bool, str]:
    """Gets a cache path for a coordinate.

    The coordinate is turned into a string, hashed and the hash is used as filename,
    so every rounded coordinate has its own file.
    """
    coordinate_str = f"{latitude:.6f}|{longitude:.6f}"
    sha_key = hashlib.sha256(coordinate_str.encode("utf-8")).hexdigest()
    filename = component_key + "_" + sha_key + ".cache"

    cache_absolute_filepath = os.path.join(cache_dir_path, filename)
    if not os.path.isdir(cache_dir_path):
        os.makedirs(cache_dir_path, exist_ok=True)
    if os.path.isfile(cache_absolute_filepath):
        return True, cache_absolute_filepath
    return False, cache_absolute_filepath


def measure_execution_time(my_function):  # noqa
    """Utility function that works as decorator for measuring execution time."""

    @wraps(my_function)
    def function_wrapper_for_measuring_execution_time(*args, **kwargs):
        """Inner function for the time measuring utility decorator."""
        start = timer()
        result = my_function(*args, **kwargs)
        end = timer()
        diff = end - start
        log.profile(
            "Executing " + my_function.__module__ + "." + my_function.__name__ + " took " + f"{diff:1.2f}" + " seconds"
        )
        return result

    return function_wrapper_for_measuring_execution_time


def get_environment_variable(key: str, default: Optional[str] = None) -> str:
    """Get environment variable. Raise error if variable not found."""
    value = os.getenv(key, default)
    if not value:
        raise ValueError(
            f"""Could not determine value of environment variable: {key}.
                         Make sure to set it in an `.env` file inside the HiDEM root folder
                         or somewhere within your system environment."""
        )
    return value
