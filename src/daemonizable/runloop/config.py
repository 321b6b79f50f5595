"""Runloop configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass

from daemonizable.common.config import env_bool, env_float
from daemonizable.runloop.errors import ConfigurationError


DEFAULT_TIMEOUT = 5  # seconds between two iterations


def is_valid_timeout(value: float) -> bool:
    """Return True for finite, non-negative durations.

    -0.0, NaN and infinity are rejected. Raises TypeError for values that
    are not real numbers.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    return math.isfinite(value) and math.copysign(1, value) > 0


@dataclass(frozen=True)
class RunloopConfig:
    """Configuration for a runloop.

    Values are read once per run. Use ``from_env`` to fill in anything not
    given on the command line from DAEMONIZABLE_* environment variables.
    """

    iteration_timeout: float = DEFAULT_TIMEOUT
    run_once: bool = False
    detect_leaks: bool = False

    def __post_init__(self) -> None:
        if not is_valid_timeout(self.iteration_timeout):
            raise ConfigurationError(
                f"Invalid iteration timeout: {self.iteration_timeout!r} (must be finite and >= 0)"
            )

    @classmethod
    def from_env(
        cls,
        *,
        run_once: bool = False,
        detect_leaks: bool = False,
        iteration_timeout: float | None = None,
    ) -> RunloopConfig:
        """Create config from explicit options and environment variables.

        Args:
            run_once: Run a single iteration then shut down
            detect_leaks: Print a memory usage report after every iteration
            iteration_timeout: Seconds to sleep between iterations (None = env/default)
        """
        if iteration_timeout is None:
            iteration_timeout = env_float("DAEMONIZABLE_TIMEOUT", DEFAULT_TIMEOUT)
        return cls(
            iteration_timeout=iteration_timeout,
            run_once=run_once or env_bool("DAEMONIZABLE_RUN_ONCE", False),
            detect_leaks=detect_leaks or env_bool("DAEMONIZABLE_DETECT_LEAKS", False),
        )

    def mode_display(self) -> str:
        """Return a display string for the current mode."""
        parts = ["Run-once" if self.run_once else "Endless"]
        if self.detect_leaks:
            parts.append("Leak detection")
        return " + ".join(parts)
