"""decomment utilities package."""

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_MAX_FILE_SIZE,
    ERROR_LOG_FILE,
    STATE_DIR,
)
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_MAX_FILE_SIZE",
    "ERROR_LOG_FILE",
    "STATE_DIR",
    "ExitCodes",
    "handle_exceptions",
]
