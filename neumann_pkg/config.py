"""Centralized configuration for Neumann.

This module defines:
- Numeric precision and rounding used by the arithmetic backend
- Input validation limits (expression length, maximum precision)
- Default logging level

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with NEUMANN_)
"""

import decimal
import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("neumann")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Numeric configuration
PRECISION = int(os.getenv("NEUMANN_PRECISION", "20"))  # significant digits
ROUNDING = os.getenv("NEUMANN_ROUNDING", decimal.ROUND_HALF_UP)

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("NEUMANN_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_PRECISION = int(os.getenv("NEUMANN_MAX_PRECISION", "1000"))  # significant digits

LOG_LEVEL = os.getenv("NEUMANN_LOG_LEVEL", "WARNING")

ROUNDING_MODES = (
    decimal.ROUND_CEILING,
    decimal.ROUND_DOWN,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_UP,
    decimal.ROUND_05UP,
)
