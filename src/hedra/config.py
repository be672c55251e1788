"""
Configuration & Numeric Tolerances
==================================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Consistency: every shape compares coordinates, lengths and angles with
   the same tolerances instead of scattering magic numbers.
2. Environment: the default log level can be changed without touching code
   by setting the ``HEDRA_LOG_LEVEL`` environment variable.

Exports:
    GEOMETRY_EPS (float): Tolerance for coordinates and lengths.
    ANGLE_TOLERANCE_DEG (float): Tolerance for angle comparisons in degrees.
    LOG_LEVEL_ENV (str): Name of the environment variable holding the log level.
"""
import logging
import os


# Global Constants
GEOMETRY_EPS: float = 1e-9
ANGLE_TOLERANCE_DEG: float = 1e-4
LOG_LEVEL_ENV: str = "HEDRA_LOG_LEVEL"


def get_log_level(default: int = logging.INFO) -> int:
    """
    Resolve the log level from the environment.

    Accepts level names (``"DEBUG"``) or numbers (``"10"``). Unknown values
    fall back to ``default``.
    """
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return default

    raw = raw.strip()
    if raw.isdigit():
        return int(raw)

    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    return default
