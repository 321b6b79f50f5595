"""Endless runloop - run one unit of work repeatedly until shutdown.

The runloop:
- Calls ``starting`` once, then start_iteration/do_work/finish_iteration
  repeatedly, then ``finalize`` once
- Sleeps between iterations; SIGTERM/SIGINT cut the sleep short
- Lets long-running work leave early via ``ctx.throw_on_shutdown()``
- Optionally reports memory usage after every iteration

Usage:
    daemonizable mypkg.jobs:SyncWork              # Run until signalled
    daemonizable mypkg.jobs:SyncWork --run-once   # Single iteration
    daemonizable mypkg.jobs:SyncWork --detect-leaks --timeout 1.5
"""

from daemonizable.runloop.config import DEFAULT_TIMEOUT, RunloopConfig
from daemonizable.runloop.context import RunloopContext
from daemonizable.runloop.errors import ConfigurationError, RunloopError, ShutdownRequested
from daemonizable.runloop.exit_codes import RunloopExitCode
from daemonizable.runloop.loop import Runloop, run
from daemonizable.runloop.output import BufferedOutput, NullOutput, StreamOutput
from daemonizable.runloop.resources import CallbackResource
from daemonizable.runloop.work import EndlessWork, FunctionWork

__all__ = [
    "BufferedOutput",
    "CallbackResource",
    "ConfigurationError",
    "DEFAULT_TIMEOUT",
    "EndlessWork",
    "FunctionWork",
    "NullOutput",
    "Runloop",
    "RunloopConfig",
    "RunloopContext",
    "RunloopError",
    "RunloopExitCode",
    "ShutdownRequested",
    "StreamOutput",
    "run",
]
