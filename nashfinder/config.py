"""Centralized configuration constants for nashfinder.

Values that callers may want to tune without code changes are read from
environment variables; everything else lives in the grouped classes below.
"""

from __future__ import annotations

import os

# Environment mode
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

# CORS configuration for the HTTP API
_cors_origins_env = os.environ.get("CORS_ORIGINS", "")
if _cors_origins_env:
    CORS_ORIGINS: list[str] = [origin.strip() for origin in _cors_origins_env.split(",")]
elif IS_PRODUCTION:
    # Production requires explicit CORS_ORIGINS to be set
    CORS_ORIGINS = []
else:
    CORS_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]

# File upload limits
MAX_UPLOAD_SIZE_BYTES = int(os.environ.get("MAX_UPLOAD_SIZE_BYTES", 1024 * 1024))  # 1MB default

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class SolverConfig:
    """Configuration constants for the LP solver adapter."""

    # Wall-clock limit per support pair; expiry counts as infeasible
    TIMEOUT_MILLIS = int(os.environ.get("NASHFINDER_SOLVER_TIMEOUT_MS", 1000))
    # 0 is silent, anything above turns on HiGHS console output
    VERBOSITY = int(os.environ.get("NASHFINDER_SOLVER_VERBOSITY", 0))
    METHOD = "highs"


class ExtractionConfig:
    """Configuration constants for reading equilibria out of LP solutions."""

    ROUNDING_DECIMALS = 2
    # A float carries about 17 significant digits; more places add nothing
    MAX_ROUNDING_DECIMALS = 15
    # Base tolerance for verifying a profile, scaled by action count
    VERIFY_TOLERANCE = 0.01


class SearchConfig:
    """Configuration constants for the equilibrium search."""

    DEFAULT_MAX_WORKERS = int(os.environ.get("NASHFINDER_MAX_WORKERS", 1))
    # Above this many support pairs a warning is logged before solving
    SUPPORT_PAIR_WARNING_THRESHOLD = 4096


class ApiConfig:
    """Configuration constants for the HTTP API."""

    TITLE = "Nash Finder"
    DEFAULT_HOST = os.environ.get("NASHFINDER_HOST", "127.0.0.1")
    DEFAULT_PORT = int(os.environ.get("NASHFINDER_PORT", 8000))
    MAX_ERROR_MESSAGE_LENGTH = 200
