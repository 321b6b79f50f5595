"""Example work: keep an average score file up to date.

Run it with::

    daemonizable daemonizable.example:AverageScoreWork --timeout 1.5
"""

from __future__ import annotations

import pathlib
import random
import time
from typing import Callable

from daemonizable.runloop.context import RunloopContext
from daemonizable.runloop.work import EndlessWork

DEFAULT_SCORE_FILE = pathlib.Path("/tmp/average-score.txt")


def calculate_average_score() -> int:
    """Stand-in for a slow computation."""
    time.sleep(5)
    return random.randint(1, 10)


class AverageScoreWork(EndlessWork):
    """Recompute the average score and write it to a file every iteration."""

    def __init__(
        self,
        path: pathlib.Path = DEFAULT_SCORE_FILE,
        calculate: Callable[[], int] = calculate_average_score,
    ) -> None:
        self.path = path
        self.calculate = calculate

    def do_work(self, ctx: RunloopContext) -> int:
        # Always write, the caller decides whether output is shown
        ctx.output.write("Updating average score... ")

        score = self.calculate()
        # Last safe point before touching the file
        ctx.throw_on_shutdown()

        try:
            self.path.write_text(str(score))
        except OSError:
            ctx.set_return_code(1)
            ctx.shutdown()
            ctx.output.writeln("failed!", style="error")
            return 1

        ctx.output.writeln("done")
        return 0
