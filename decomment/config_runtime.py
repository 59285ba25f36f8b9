"""Runtime configuration for decomment - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from decomment.utils.constants import CONFIG_FILE_NAME, DEFAULT_MAX_FILE_SIZE, ENV_PREFIX
from decomment.utils.logging import logger

DEFAULTS = {
    "limits": {
        "max_file_size": DEFAULT_MAX_FILE_SIZE,
        "jobs": 0,
    },
    "walk": {
        "exclude": [],
        "follow_symlinks": False,
    },
    "retention": {
        "keep_shebang": True,
        "preserve_semantic": False,
        "preserve_copyright": False,
        "keep_patterns": [],
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_env_value(raw: str, default_value: Any) -> Any:
    """Coerce an environment string to the type of its default."""
    # bool is checked first: isinstance(True, int) is also true
    if isinstance(default_value, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"expected one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}")
    if isinstance(default_value, int):
        return int(raw)
    if isinstance(default_value, float):
        return float(raw)
    if isinstance(default_value, list):
        return [v.strip() for v in raw.split(",") if v.strip()]
    return raw


def _same_type(value: Any, default_value: Any) -> bool:
    """Type check that does not let bools pass as ints or vice versa."""
    if isinstance(default_value, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default_value, bool)
    return isinstance(value, type(default_value))


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .decomment.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (DECOMMENT_<SECTION>_<KEY>)
    2. <root>/.decomment.json
    3. Built-in defaults

    Args:
        root: Directory to look for the config file in. A file path uses
            its parent directory.

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    base = Path(root)
    if base.is_file():
        base = base.parent
    path = base / CONFIG_FILE_NAME

    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key not in cfg[section]:
                                logger.warning(f"Unknown config key {section}.{key} in {path}")
                                continue
                            if _same_type(value, cfg[section][key]):
                                cfg[section][key] = value
                            else:
                                logger.warning(
                                    f"Ignoring {section}.{key} in {path}: expected "
                                    f"{type(cfg[section][key]).__name__}, got {type(value).__name__}"
                                )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    cfg[section][key] = _parse_env_value(value, cfg[section][key])
                except (ValueError, AttributeError) as e:
                    logger.warning(
                        f"Invalid value for environment variable {env_var}: '{value}' - {e}"
                    )
                    logger.info(f"Using value: {cfg[section][key]}")

    return cfg
