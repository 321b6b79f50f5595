"""Runloop runtime context."""

from __future__ import annotations

from dataclasses import dataclass, field

from daemonizable.runloop.config import RunloopConfig
from daemonizable.runloop.errors import ShutdownRequested
from daemonizable.runloop.output import NullOutput, Output
from daemonizable.runloop.state import RunloopState


@dataclass
class RunloopContext:
    """Runtime context handed to every lifecycle hook.

    Gives the work access to its configuration, the output sink, and the
    controls it may use at any time: requesting shutdown, setting the
    return code or timeout, and the voluntary shutdown checkpoint.
    """

    config: RunloopConfig
    output: Output = field(default_factory=NullOutput)
    state: RunloopState = field(default_factory=RunloopState)

    # Number of iterations started so far
    iteration: int = 0

    # Value returned by the most recent do_work call
    last_status: int | None = None

    def shutdown(self) -> RunloopContext:
        """End the runloop gracefully after the current iteration."""
        self.state.request_shutdown()
        return self

    def is_shutdown_requested(self) -> bool:
        return self.state.is_shutdown_requested()

    def throw_on_shutdown(self) -> RunloopContext:
        """Raise ShutdownRequested if a shutdown is pending.

        Call this inside a long ``do_work`` at a point where stopping is safe,
        typically right before doing something irreversible. The rest of the
        iteration, ``finish_iteration`` included, is skipped and the runloop
        goes straight to ``finalize``.
        """
        if self.state.is_shutdown_requested():
            raise ShutdownRequested(
                "Volunteered to break out of the runloop because a shutdown is requested"
            )
        return self

    def set_return_code(self, return_code: int) -> RunloopContext:
        self.state.set_return_code(return_code)
        return self

    def get_return_code(self) -> int:
        return self.state.get_return_code()

    def set_timeout(self, seconds: float) -> RunloopContext:
        self.state.set_timeout(seconds)
        return self

    def get_timeout(self) -> float:
        return self.state.get_timeout()
