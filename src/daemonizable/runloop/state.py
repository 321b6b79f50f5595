"""Mutable runloop state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from daemonizable.runloop.config import DEFAULT_TIMEOUT, is_valid_timeout
from daemonizable.runloop.errors import ConfigurationError

MICROSECONDS = 1_000_000

# Longest single sleep while waiting; bounds shutdown latency
WAIT_SLICE = 0.1


@dataclass
class RunloopState:
    """State owned by a single runloop instance.

    The shutdown flag is a plain boolean: the signal handler only assigns it,
    and ``wait`` sleeps in short slices, re-reading it between slices. It only
    ever goes from False to True.
    """

    return_code: int = 0
    last_usage: int = 0
    last_peak_usage: int = 0
    shutdown_requested: bool = False
    _timeout_us: int = field(default=DEFAULT_TIMEOUT * MICROSECONDS, repr=False)

    def set_timeout(self, seconds: float) -> RunloopState:
        """Set the sleep between two iterations, in seconds."""
        if not is_valid_timeout(seconds):
            raise ConfigurationError(f"Invalid timeout: {seconds!r} (must be finite and >= 0)")
        self._timeout_us = round(MICROSECONDS * seconds)
        return self

    def get_timeout(self) -> float:
        """Get the sleep between two iterations, in seconds."""
        return self._timeout_us / MICROSECONDS

    def set_return_code(self, return_code: int) -> RunloopState:
        """Set the exit code; 0 if everything went fine."""
        if isinstance(return_code, bool) or not isinstance(return_code, int):
            raise TypeError(f"return code must be an int, got {return_code!r}")
        if return_code < 0:
            raise ConfigurationError(f"Invalid return code: {return_code!r} (must be >= 0)")
        self.return_code = return_code
        return self

    def get_return_code(self) -> int:
        return self.return_code

    def request_shutdown(self) -> None:
        self.shutdown_requested = True

    def is_shutdown_requested(self) -> bool:
        return self.shutdown_requested

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``, waking early if shutdown is requested.

        Returns True if shutdown was requested.
        """
        deadline = time.monotonic() + seconds
        while not self.shutdown_requested:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            time.sleep(min(remaining, WAIT_SLICE))
        return self.shutdown_requested
