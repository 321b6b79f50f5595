"""Run a unit of work repeatedly as a signal-aware daemon."""

__version__ = "0.1.0"

from daemonizable.runloop import EndlessWork, Runloop, RunloopConfig, ShutdownRequested, run

__all__ = [
    "EndlessWork",
    "Runloop",
    "RunloopConfig",
    "ShutdownRequested",
    "run",
    "__version__",
]
