"""The runloop controller.

Lifecycle: ``starting`` once, then ``start_iteration`` / ``do_work`` /
``finish_iteration`` followed by a sleep, repeated until a shutdown is
requested, then ``finalize`` once. Shutdown is only sampled between phases,
so an iteration that has started always completes unless the work leaves
through ``ctx.throw_on_shutdown()``.
"""

from __future__ import annotations

import signal
import threading
import tracemalloc
from types import FrameType
from typing import Any, TextIO

from daemonizable.common.logging import log_info, log_success, log_warning
from daemonizable.runloop.config import RunloopConfig
from daemonizable.runloop.context import RunloopContext
from daemonizable.runloop.errors import ShutdownRequested
from daemonizable.runloop.memory import (
    MemorySampler,
    compute_memory_info,
    sample_memory,
    write_memory_report,
)
from daemonizable.runloop.output import NullOutput, Output
from daemonizable.runloop.resources import ResettableResource
from daemonizable.runloop.state import RunloopState
from daemonizable.runloop.work import Work

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)


class Runloop:
    """Drive a work object through the endless iteration lifecycle.

    Args:
        work: Object implementing the lifecycle hooks (see ``Work``)
        config: Runloop configuration (defaults to ``RunloopConfig()``)
        output: Sink for status and diagnostics text (defaults to ``NullOutput``)
        resource: Optional resource reset after every iteration
        memory_sampler: Returns (current, peak) memory in bytes for leak detection
        log_stream: Where lifecycle log lines go (defaults to stderr)
    """

    def __init__(
        self,
        work: Work,
        config: RunloopConfig | None = None,
        output: Output | None = None,
        resource: ResettableResource | None = None,
        memory_sampler: MemorySampler | None = None,
        log_stream: TextIO | None = None,
    ) -> None:
        self.work = work
        self.log_stream = log_stream
        self.config = config if config is not None else RunloopConfig()
        self.resource = resource
        self.memory_sampler = memory_sampler if memory_sampler is not None else sample_memory

        state = RunloopState()
        state.set_timeout(self.config.iteration_timeout)
        self.ctx = RunloopContext(
            config=self.config,
            output=output if output is not None else NullOutput(),
            state=state,
        )

    @property
    def state(self) -> RunloopState:
        return self.ctx.state

    def shutdown(self) -> Runloop:
        """Instruct the runloop to end gracefully after the current iteration."""
        self.state.request_shutdown()
        return self

    def is_shutdown_requested(self) -> bool:
        return self.state.is_shutdown_requested()

    def set_timeout(self, seconds: float) -> Runloop:
        self.state.set_timeout(seconds)
        return self

    def get_timeout(self) -> float:
        return self.state.get_timeout()

    def set_return_code(self, return_code: int) -> Runloop:
        self.state.set_return_code(return_code)
        return self

    def get_return_code(self) -> int:
        return self.state.get_return_code()

    def handle_signal(self, signum: int, frame: FrameType | None) -> None:
        """Signal handler: request shutdown on SIGTERM and SIGINT.

        Runs with the main loop paused at an arbitrary point, so it does
        nothing except set the shutdown flag.
        """
        if signum in SHUTDOWN_SIGNALS:
            self.state.request_shutdown()

    def run(self) -> int:
        """Install signal handlers and run the loop.

        Returns the return code set by the work (0 by default).
        """
        previous_handlers = self._install_signal_handlers()
        started_tracing = False
        if (
            self.config.detect_leaks
            and self.memory_sampler is sample_memory
            and not tracemalloc.is_tracing()
        ):
            tracemalloc.start()
            started_tracing = True

        try:
            return self.runloop()
        finally:
            if started_tracing:
                tracemalloc.stop()
            self._restore_signal_handlers(previous_handlers)

    def runloop(self) -> int:
        """Run the lifecycle state machine without touching signal handlers."""
        ctx = self.ctx
        log_info(
            f"Runloop starting ({self.config.mode_display()}, timeout {ctx.get_timeout()}s)",
            self.log_stream,
        )
        self.work.starting(ctx)

        try:
            while not ctx.is_shutdown_requested():
                self._iterate()
            if self.config.run_once:
                log_info(f"Iteration {ctx.iteration}: run-once complete", self.log_stream)
            else:
                log_info(f"Iteration {ctx.iteration}: shutdown requested", self.log_stream)
        except ShutdownRequested:
            log_info(
                f"Iteration {ctx.iteration}: left early, shutdown requested", self.log_stream
            )
        finally:
            self.work.finalize(ctx)

        log_success(
            f"Runloop completed gracefully (return code {ctx.get_return_code()})",
            self.log_stream,
        )
        return ctx.get_return_code()

    def _iterate(self) -> None:
        ctx = self.ctx
        ctx.iteration += 1

        self.work.start_iteration(ctx)
        ctx.last_status = self.work.do_work(ctx)
        self.work.finish_iteration(ctx)

        if self.resource is not None:
            self.resource.reset()

        if self.config.run_once:
            ctx.shutdown()

        if self.config.detect_leaks:
            self._report_memory()

        # Returns early when a signal sets the shutdown flag
        if not ctx.is_shutdown_requested():
            ctx.state.wait(ctx.get_timeout())

    def _report_memory(self) -> None:
        state = self.state
        current, peak = self.memory_sampler()
        peak_info = compute_memory_info(peak, state.last_peak_usage)
        current_info = compute_memory_info(current, state.last_usage)
        state.last_peak_usage = peak
        state.last_usage = current
        write_memory_report(self.ctx.output, peak_info, current_info)

    def _install_signal_handlers(self) -> dict[int, Any]:
        previous: dict[int, Any] = {}
        if threading.current_thread() is not threading.main_thread():
            log_warning(
                "Runloop is not on the main thread, shutdown signals are not handled",
                self.log_stream,
            )
            return previous
        for signum in SHUTDOWN_SIGNALS:
            previous[signum] = signal.signal(signum, self.handle_signal)
        return previous

    def _restore_signal_handlers(self, previous: dict[int, Any]) -> None:
        for signum, handler in previous.items():
            # None means the old handler was not installed from Python
            if handler is not None:
                signal.signal(signum, handler)


def run(
    work: Work,
    config: RunloopConfig | None = None,
    output: Output | None = None,
    resource: ResettableResource | None = None,
) -> int:
    """Run ``work`` until shutdown and return its exit code."""
    return Runloop(work, config=config, output=output, resource=resource).run()
