"""Exceptions raised by the runloop."""

from __future__ import annotations


class RunloopError(Exception):
    """Base exception for runloop faults."""


class ConfigurationError(RunloopError, ValueError):
    """A setting was given a value the runloop cannot accept."""


class ShutdownRequested(Exception):
    """Voluntary exit from the runloop because a shutdown is pending.

    Raised by ``RunloopContext.throw_on_shutdown()`` and caught only by the
    runloop itself. It is control flow, not a fault, so it does not derive
    from ``RunloopError``.
    """
