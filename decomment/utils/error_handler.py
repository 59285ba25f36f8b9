"""Centralized error handler for decomment commands."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from typing import Any

import click

from decomment.utils.logging import get_run_id, logger

from .constants import ERROR_LOG_FILE, STATE_DIR


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns unexpected failures into a logged ClickException.

    Click's own exceptions (usage errors, explicit exits) pass through
    untouched so exit codes stay meaningful.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Inner wrapper that implements the try-except logic."""
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)
            tb = traceback.format_exc()

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            log_hint = ""
            try:
                STATE_DIR.mkdir(parents=True, exist_ok=True)
                with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
                    f.write("\n" + "=" * 80 + "\n")
                    f.write(f"[{datetime.now().isoformat()}] Error in command: {func.__name__}\n")
                    f.write(f"Run ID: {get_run_id()}\n")
                    f.write("=" * 80 + "\n")
                    f.write(f"{error_type}: {error_msg}\n\n")
                    f.write(tb)
                    f.write("=" * 80 + "\n\n")
                log_hint = f"\n\nFull traceback logged to: {ERROR_LOG_FILE}"
            except OSError as log_err:
                logger.warning(f"Could not write error log {ERROR_LOG_FILE}: {log_err}")

            raise click.ClickException(f"{error_type}: {error_msg}{log_hint}") from e

    return wrapper
