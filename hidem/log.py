""" Logging functionality for all of HiDEM. """
# clean
from enum import IntEnum
import os
import threading
from typing import Optional

LOGGING_LEVEL = 3
LOGGING_PATH: str = os.getenv("HIDEM_LOGGING_PATH", os.path.join(".", "logs"))
LOGGING_FILE_NAME = "hidem_estimation.log"
PROFILING_FILE_NAME = "profiling_timeuse.log"

# concurrent estimations append to the same files
_FILE_LOCK = threading.Lock()


class LogPrio(IntEnum):
    """Define a logging priority."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    DEBUG = 4
    PROFILE = 5
    TRACE = 6

    @staticmethod
    def get_prio_string(prio: int) -> str:
        """Get the string representation of the priority."""
        prio_strings = {
            LogPrio.ERROR: "ERR",
            LogPrio.WARNING: "WRN",
            LogPrio.INFORMATION: "IFO",
            LogPrio.DEBUG: "DBG",
            LogPrio.PROFILE: "PRF",
            LogPrio.TRACE: "TRC",
        }
        return prio_strings.get(prio, "???")  # type: ignore


def set_logging_level(logging_level: int) -> None:
    """Changes the level up to which messages are printed."""
    global LOGGING_LEVEL
    LOGGING_LEVEL = int(logging_level)


# The logging_message_path can not be set in the function head because then it
# would always use the LOGGING_PATH at definition time, not at runtime.
def error(message: str, logging_message_path: Optional[str] = None) -> None:
    """Log an error message."""
    log(LogPrio.ERROR, message, logging_message_path)


def warning(message: str, logging_message_path: Optional[str] = None) -> None:
    """Log a warning message."""
    log(LogPrio.WARNING, message, logging_message_path)


def information(message: str, logging_message_path: Optional[str] = None) -> None:
    """Log a information message."""
    log(LogPrio.INFORMATION, message, logging_message_path)


def debug(message: str, logging_message_path: Optional[str] = None) -> None:
    """Log a debug message."""
    log(LogPrio.DEBUG, message, logging_message_path)


def trace(message: str, logging_message_path: Optional[str] = None) -> None:
    """Log a trace message."""
    log(LogPrio.TRACE, message, logging_message_path)


def profile(message: str, logging_message_path: Optional[str] = None) -> None:
    """Log a profile message and keep it in the profiling file as well."""
    log(LogPrio.PROFILE, message, logging_message_path)
    _append_to_file(PROFILING_FILE_NAME, message, logging_message_path)


def log(prio: int, message: str, logging_message_path: Optional[str] = None) -> None:
    """Write and print a log message."""
    if prio <= LOGGING_LEVEL:
        print(str(LogPrio.get_prio_string(prio)) + ":" + message)
    _append_to_file(LOGGING_FILE_NAME, LogPrio.get_prio_string(prio) + ":" + message, logging_message_path)


def _append_to_file(file_name: str, message: str, logging_message_path: Optional[str]) -> None:
    if logging_message_path is None:
        logging_message_path = LOGGING_PATH
    with _FILE_LOCK:
        try:
            os.makedirs(logging_message_path, exist_ok=True)
            with open(os.path.join(logging_message_path, file_name), "a", encoding="utf-8") as filestream:
                filestream.write(message + "\n")
        except OSError:
            print(f"{file_name} could not be appended in {logging_message_path}.")
