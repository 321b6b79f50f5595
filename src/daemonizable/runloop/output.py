"""Line-oriented output sinks for status and diagnostics text.

Work implementations write to ``ctx.output`` unconditionally; whether the
text reaches a terminal, a buffer, or nowhere is decided by the caller that
constructed the runloop.
"""

from __future__ import annotations

import io
import os
import sys
from typing import Protocol, TextIO

# Style name -> ANSI color, used only by decorated streams.
STYLES = {
    "info": "\033[0;34m",
    "comment": "\033[0;33m",
    "error": "\033[0;31m",
    "success": "\033[0;32m",
}
_RESET = "\033[0m"


class Output(Protocol):
    """Text sink accepted by the runloop."""

    def write(self, message: str, style: str | None = None) -> None: ...

    def writeln(self, message: str = "", style: str | None = None) -> None: ...


def _is_tty(stream: TextIO) -> bool:
    try:
        return os.isatty(stream.fileno())
    except (OSError, ValueError, io.UnsupportedOperation, AttributeError):
        return False


class StreamOutput:
    """Write to a text stream, coloring styled text when decorated.

    ``decorated`` defaults to whether the stream is a tty.
    """

    def __init__(self, stream: TextIO | None = None, decorated: bool | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.decorated = _is_tty(self.stream) if decorated is None else decorated

    def _format(self, message: str, style: str | None) -> str:
        if style and self.decorated and style in STYLES:
            return f"{STYLES[style]}{message}{_RESET}"
        return message

    def write(self, message: str, style: str | None = None) -> None:
        self.stream.write(self._format(message, style))
        self.stream.flush()

    def writeln(self, message: str = "", style: str | None = None) -> None:
        self.stream.write(self._format(message, style) + "\n")
        self.stream.flush()


class BufferedOutput(StreamOutput):
    """Collect output in memory; ``fetch()`` returns it and empties the buffer."""

    def __init__(self, decorated: bool = False) -> None:
        super().__init__(io.StringIO(), decorated=decorated)

    def fetch(self) -> str:
        content = self.stream.getvalue()
        self.stream.seek(0)
        self.stream.truncate(0)
        return content


class NullOutput:
    """Discard everything, used when output is silenced."""

    def write(self, message: str, style: str | None = None) -> None:
        pass

    def writeln(self, message: str = "", style: str | None = None) -> None:
        pass
