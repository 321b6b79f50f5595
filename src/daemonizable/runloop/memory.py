"""Memory usage diagnostics for leak detection.

Each iteration the runloop samples current and peak memory, compares the
sample with the previous one and prints a short report. The report has no
influence on control flow or the return code.
"""

from __future__ import annotations

import tracemalloc
from dataclasses import dataclass
from typing import Callable

from daemonizable.runloop.output import Output

MemorySampler = Callable[[], tuple[int, int]]


@dataclass
class MemoryInfo:
    """One memory sample compared against the previous one."""

    amount: int
    diff: int
    diff_percentage: float
    status: str  # "stable", "increasing" or "decreasing"
    style: str  # output style matching the status

    @property
    def kbytes(self) -> float:
        return self.amount / 1024


def compute_memory_info(amount: int, last: int) -> MemoryInfo:
    """Compare ``amount`` with the ``last`` sample.

    The percentage is 0 when there is no previous sample (``last == 0``).
    """
    diff = amount - last
    diff_percentage = 0 if last == 0 else diff / (last / 100)
    if diff > 0:
        status, style = "increasing", "error"
    elif diff < 0:
        status, style = "decreasing", "comment"
    else:
        status, style = "stable", "info"
    return MemoryInfo(
        amount=amount,
        diff=diff,
        diff_percentage=diff_percentage,
        status=status,
        style=style,
    )


def sample_memory() -> tuple[int, int]:
    """Return (current, peak) traced memory in bytes.

    Requires ``tracemalloc`` to be tracing; the runloop starts it when leak
    detection is enabled.
    """
    return tracemalloc.get_traced_memory()


def format_memory_line(label: str, info: MemoryInfo) -> str:
    return f"{label}: {info.kbytes:.2f} KByte {info.status} ({info.diff_percentage:.3f} %)"


def write_memory_report(output: Output, peak: MemoryInfo, current: MemoryInfo) -> None:
    """Write the memory usage report to ``output``."""
    output.writeln("== MEMORY USAGE ==")
    output.writeln(format_memory_line("Peak", peak), style=peak.style)
    output.writeln(format_memory_line("Cur.", current), style=current.style)
    output.writeln("")
