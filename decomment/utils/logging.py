"""Centralized logging configuration using Loguru.

Every module logs through the single configured ``logger`` exported here.
Human-readable output goes to stderr so it never mixes with the report on
stdout; NDJSON output is available for CI log collectors.

Usage:
    from decomment.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if DECOMMENT_LOG_LEVEL=DEBUG

Environment Variables:
    DECOMMENT_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    DECOMMENT_LOG_JSON: 0|1 (default: 0, human-readable)
    DECOMMENT_LOG_FILE: path to log file (optional)
    DECOMMENT_RUN_ID: correlation ID stamped on JSON records
"""

import json
import os
import sys
import uuid

from loguru import logger

from .constants import ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL, ENV_RUN_ID

# Remove default handler
logger.remove()

# Numeric levels for JSON records
JSON_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 35,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)
_run_id = os.environ.get(ENV_RUN_ID) or str(uuid.uuid4())


def _json_record(message) -> str:
    """Render a loguru message as one NDJSON line."""
    record = message.record

    payload = {
        "level": JSON_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "thread": record["thread"].name,
        "run_id": record["extra"].get("run_id", _run_id),
    }

    for key, value in record["extra"].items():
        if key != "run_id":
            payload[key] = value

    if record["exception"]:
        payload["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(payload, default=str)


def json_sink(message):
    """Write NDJSON records to stderr.

    Never call logger.* inside a sink - causes infinite recursion.
    """
    sys.stderr.write(_json_record(message) + "\n")
    sys.stderr.flush()


# No emojis - Windows CP1252 consoles choke on them
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

if _json_mode:
    logger.add(
        json_sink,
        level=_log_level,
        colorize=False,
    )
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:

    def _file_sink(message):
        """Append NDJSON to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_json_record(message) + "\n")

    logger.add(
        _file_sink,
        level="DEBUG",  # File always captures everything
        enqueue=True,
    )


def get_run_id() -> str:
    """Get the correlation ID of the current process."""
    return _run_id


__all__ = [
    "logger",
    "get_run_id",
]
