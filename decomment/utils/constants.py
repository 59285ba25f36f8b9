"""Centralized constants for decomment.

Single source of truth for paths, limits and environment variable names
used across the package.
"""

from pathlib import Path

# ============================================================================
# OUTPUT LOCATIONS
# ============================================================================

# Per-user state directory (error log only, nothing is cached between runs)
STATE_DIR = Path.home() / ".decomment"

ERROR_LOG_FILE = STATE_DIR / "error.log"

# Project-level configuration file, looked up under the target root
CONFIG_FILE_NAME = ".decomment.json"

# ============================================================================
# FILE PROCESSING LIMITS
# ============================================================================

# Files larger than this are skipped by the walker (default: 10MB)
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# Bounded job queue holds this many slots per worker
QUEUE_SLOTS_PER_WORKER = 2

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "DECOMMENT_"
ENV_LOG_LEVEL = "DECOMMENT_LOG_LEVEL"
ENV_LOG_JSON = "DECOMMENT_LOG_JSON"
ENV_LOG_FILE = "DECOMMENT_LOG_FILE"
ENV_RUN_ID = "DECOMMENT_RUN_ID"
