"""CLI logging with optional color output."""

from __future__ import annotations

import io
import os
import sys
from datetime import datetime, timezone
from typing import TextIO

# ANSI color codes, only emitted when the log stream is a tty.
_RED = "\033[0;31m"
_GREEN = "\033[0;32m"
_YELLOW = "\033[0;33m"
_BLUE = "\033[0;34m"
_RESET = "\033[0m"


def _use_color(stream: TextIO) -> bool:
    try:
        return os.isatty(stream.fileno())
    except (OSError, ValueError, io.UnsupportedOperation, AttributeError):
        return False


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("[%Y-%m-%dT%H:%M:%SZ]")


def _emit(color: str, label: str, message: str, stream: TextIO | None) -> None:
    # Resolved per call so redirected or captured stderr is honoured
    if stream is None:
        stream = sys.stderr
    ts = _timestamp()
    if _use_color(stream):
        line = f"{color}{ts} [{label}]{_RESET} {message}"
    else:
        line = f"{ts} [{label}] {message}"
    print(line, file=stream, flush=True)


def log_info(message: str, stream: TextIO | None = None) -> None:
    """Log an informational message to ``stream`` (stderr by default)."""
    _emit(_BLUE, "INFO", message, stream)


def log_warning(message: str, stream: TextIO | None = None) -> None:
    """Log a warning message to ``stream`` (stderr by default)."""
    _emit(_YELLOW, "WARN", message, stream)


def log_error(message: str, stream: TextIO | None = None) -> None:
    """Log an error message to ``stream`` (stderr by default)."""
    _emit(_RED, "ERROR", message, stream)


def log_success(message: str, stream: TextIO | None = None) -> None:
    """Log a success message to ``stream`` (stderr by default)."""
    _emit(_GREEN, "OK", message, stream)
