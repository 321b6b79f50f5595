"""Typed environment variable parsing.

Every helper returns its default when the variable is missing or cannot be
parsed, so a typo in the environment never prevents a daemon from starting.

Examples::

    from daemonizable.common.config import env_bool, env_float

    run_once = env_bool("DAEMONIZABLE_RUN_ONCE", default=False)
    timeout = env_float("DAEMONIZABLE_TIMEOUT", default=5.0)
"""

from __future__ import annotations

import os


def env_bool(name: str, default: bool = False) -> bool:
    """Get boolean environment variable.

    True values: "true", "1", "yes", "on" (case-insensitive)
    False values: "false", "0", "no", "off" (case-insensitive)
    Missing or invalid: returns default
    """
    val = os.environ.get(name)
    if val is None:
        return default
    lower = val.strip().lower()
    if lower in ("true", "1", "yes", "on"):
        return True
    if lower in ("false", "0", "no", "off"):
        return False
    return default


def env_float(name: str, default: float = 0.0) -> float:
    """Get float environment variable.

    Args:
        name: Environment variable name
        default: Default value if not set or invalid

    Returns:
        Float value parsed from environment variable, or default on error
    """
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default
