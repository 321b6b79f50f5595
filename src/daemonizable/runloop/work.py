"""Lifecycle hooks implemented by the work a runloop drives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from daemonizable.runloop.context import RunloopContext


class Work(Protocol):
    """Anything exposing the five lifecycle hooks can be run."""

    def starting(self, ctx: RunloopContext) -> None: ...

    def start_iteration(self, ctx: RunloopContext) -> None: ...

    def do_work(self, ctx: RunloopContext) -> int | None: ...

    def finish_iteration(self, ctx: RunloopContext) -> None: ...

    def finalize(self, ctx: RunloopContext) -> None: ...


class EndlessWork:
    """Base class with no-op hooks; override the ones you need.

    ``do_work`` is called on every iteration. Keep it fast and process one
    unit per call. If a unit is slow, process small batches and call
    ``ctx.throw_on_shutdown()`` between them so shutdown stays fast and the
    process is never killed halfway through a unit.
    """

    def starting(self, ctx: RunloopContext) -> None:
        """Called once, before the first iteration."""

    def start_iteration(self, ctx: RunloopContext) -> None:
        """Called before each iteration."""

    def do_work(self, ctx: RunloopContext) -> int | None:
        """Process one unit of work. Returns 0 if everything went fine."""
        return 0

    def finish_iteration(self, ctx: RunloopContext) -> None:
        """Called after each iteration."""

    def finalize(self, ctx: RunloopContext) -> None:
        """Called once on shutdown, after the last iteration.

        Keep it short: when shutting down because of a signal the process
        may be killed if cleanup takes too long.
        """


class FunctionWork(EndlessWork):
    """Run a plain ``fn(ctx)`` callable as the work of each iteration."""

    def __init__(self, fn: Callable[[RunloopContext], int | None]) -> None:
        self.fn = fn

    def do_work(self, ctx: RunloopContext) -> int | None:
        return self.fn(ctx)

    def __repr__(self) -> str:
        return f"FunctionWork({getattr(self.fn, '__qualname__', self.fn)!r})"
