"""Runloop exit codes."""

from __future__ import annotations

from enum import IntEnum


class RunloopExitCode(IntEnum):
    """Exit codes used by the CLI when the work itself did not choose one."""

    SUCCESS = 0  # Clean shutdown, return code left at its default
    ERROR = 1  # Unhandled fault raised by the work
    CONFIGURATION_ERROR = 2  # Invalid option or unloadable work target
