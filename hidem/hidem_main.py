""" Main module for HiDEM: estimates demand or yield from the command line. """
# clean
import sys
from datetime import datetime
from typing import List, Optional

from dotenv import load_dotenv

from hidem import log
from hidem.components.electricity_demand import ElectricityDemandOrchestrator
from hidem.components.gas_demand import GasDemandOrchestrator
from hidem.components.location_yield import LocationYieldCalculator
from hidem.components.weather_gateway import ExternalDataGateway
from hidem.demand_request import DemandEstimateRequest
from hidem.estimation_errors import InvalidInput
from hidem.estimation_parameters import EstimationParameters

load_dotenv()

USAGE = "Usage: hidem electricity <request.json> | hidem gas <request.json> | hidem yield <latitude> <longitude> [label]"


def read_request(path_to_request: str) -> DemandEstimateRequest:
    """Reads a demand request from a json file, an unreadable file is invalid input."""
    try:
        with open(path_to_request, "r", encoding="utf-8") as filestream:
            return DemandEstimateRequest.from_json(filestream.read())  # type: ignore
    except (OSError, ValueError, TypeError, KeyError, AttributeError) as error:
        raise InvalidInput(f"Could not read the request file {path_to_request}: {error}") from error


def main(command: str, arguments: List[str], parameters: Optional[EstimationParameters] = None) -> str:
    """Runs one estimation and returns the result as json."""
    if parameters is None:
        parameters = EstimationParameters.from_environment()
    log.set_logging_level(parameters.logging_level)
    starttime = datetime.now()
    log.information(f"Starting {command} estimation @ {starttime.strftime('%d-%b-%Y %H:%M:%S')}")

    if command in ("electricity", "gas"):
        if len(arguments) != 1:
            raise InvalidInput(f"The {command} estimation needs exactly one request file.")
        request = read_request(arguments[0])
        if command == "electricity":
            result = ElectricityDemandOrchestrator.from_parameters(parameters).calculate(request)
        else:
            result = GasDemandOrchestrator.from_parameters(parameters).calculate(request)
        result_json = result.to_json(indent=4)  # type: ignore
    elif command == "yield":
        if len(arguments) not in (2, 3):
            raise InvalidInput("The yield estimation needs a latitude, a longitude and optionally a label.")
        try:
            latitude = float(arguments[0])
            longitude = float(arguments[1])
        except ValueError as error:
            raise InvalidInput(f"Latitude and longitude must be numbers: {error}") from error
        label = arguments[2] if len(arguments) == 3 else None
        gateway = ExternalDataGateway.from_parameters(parameters)
        calculator = LocationYieldCalculator(gateway, parameters.yield_reference_year)
        result_json = calculator.compute(latitude, longitude, label).to_json(indent=4)  # type: ignore
    else:
        raise InvalidInput(f"Unknown command {command}. {USAGE}")

    log.profile(f"{command} estimation took {(datetime.now() - starttime).total_seconds()} seconds")
    return result_json


def cli() -> None:
    """Entry point of the console script."""
    if len(sys.argv) < 2:
        log.information(USAGE)
        sys.exit(1)
    try:
        print(main(sys.argv[1], sys.argv[2:]))
    except InvalidInput as error:
        log.error(str(error))
        sys.exit(2)


if __name__ == "__main__":
    cli()
