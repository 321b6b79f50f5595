"""CLI entry point for running a work object in a runloop."""

from __future__ import annotations

import argparse
import importlib
import pathlib
import sys
from typing import Any, Sequence, TextIO

from daemonizable.common.logging import log_error, log_info
from daemonizable.runloop.config import RunloopConfig
from daemonizable.runloop.errors import ConfigurationError
from daemonizable.runloop.exit_codes import RunloopExitCode
from daemonizable.runloop.loop import Runloop
from daemonizable.runloop.output import NullOutput, Output, StreamOutput
from daemonizable.runloop.work import FunctionWork, Work

_HOOKS = ("starting", "start_iteration", "do_work", "finish_iteration", "finalize")


def load_work(target: str) -> Work:
    """Load a work object from ``module:attr`` notation.

    ``attr`` may name a class (instantiated without arguments), an object
    that already implements the lifecycle hooks, or a plain callable taking
    the context, which is wrapped in ``FunctionWork``.
    """
    if ":" not in target:
        raise ConfigurationError(f"Invalid work target '{target}'. Expected format module:attr.")
    module_name, attr_name = target.split(":", 1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    obj: Any = getattr(module, attr_name, None)
    if obj is None:
        raise ConfigurationError(f"Module '{module_name}' has no attribute '{attr_name}'")
    if isinstance(obj, type):
        try:
            obj = obj()
        except TypeError as e:
            raise ConfigurationError(f"Cannot instantiate '{target}' without arguments: {e}") from e
    if all(callable(getattr(obj, hook, None)) for hook in _HOOKS):
        return obj
    if callable(obj):
        return FunctionWork(obj)
    raise ConfigurationError(f"'{target}' is neither a work object nor callable")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daemonizable",
        description="Run a unit of work repeatedly until SIGTERM/SIGINT",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Environment Variables:
    DAEMONIZABLE_TIMEOUT        Seconds between iterations (default: 5)
    DAEMONIZABLE_RUN_ONCE       Run a single iteration (default: false)
    DAEMONIZABLE_DETECT_LEAKS   Report memory usage per iteration (default: false)

To stop the runloop gracefully send SIGTERM or press Ctrl-C; the current
iteration finishes and finalize runs before the process exits.

Examples:
    daemonizable mypkg.jobs:SyncWork                  # Run until signalled
    daemonizable mypkg.jobs:SyncWork --run-once       # One iteration, then exit
    daemonizable mypkg.jobs:SyncWork -t 0.5           # Half a second between iterations
    daemonizable mypkg.jobs:SyncWork --detect-leaks   # Print memory report per iteration
    daemonizable mypkg.jobs:SyncWork --log-file run.log  # Lifecycle log lines to run.log
""",
    )
    parser.add_argument(
        "target",
        metavar="MODULE:ATTR",
        help="Work class, work object, or callable to run",
    )
    parser.add_argument(
        "--run-once",
        action="store_true",
        help="Run the work just once, do not go into an endless loop",
    )
    parser.add_argument(
        "--detect-leaks",
        action="store_true",
        help="Output information about memory usage",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Seconds to sleep between two iterations",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress output written by the work",
    )
    parser.add_argument(
        "--log-file",
        type=pathlib.Path,
        default=None,
        metavar="PATH",
        help="Append runloop log lines to PATH instead of stderr",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the runloop CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = RunloopConfig.from_env(
            run_once=args.run_once,
            detect_leaks=args.detect_leaks,
            iteration_timeout=args.timeout,
        )
        work = load_work(args.target)
    except ConfigurationError as e:
        log_error(str(e))
        return RunloopExitCode.CONFIGURATION_ERROR

    output = NullOutput() if args.quiet else StreamOutput()

    if args.log_file is None:
        return _run(work, config, output, None)
    try:
        log_stream = args.log_file.open("a", encoding="utf-8")
    except OSError as e:
        log_error(f"Cannot open log file {args.log_file}: {e}")
        return RunloopExitCode.CONFIGURATION_ERROR
    with log_stream:
        return _run(work, config, output, log_stream)


def _run(work: Work, config: RunloopConfig, output: Output, log_stream: TextIO | None) -> int:
    log_info(f"Running {work!r}", log_stream)
    try:
        return Runloop(work, config=config, output=output, log_stream=log_stream).run()
    except ConfigurationError as e:
        log_error(f"Configuration error: {e}", log_stream)
        return RunloopExitCode.CONFIGURATION_ERROR
    except Exception as e:
        log_error(f"Runloop error: {type(e).__name__}: {e}", log_stream)
        return RunloopExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
