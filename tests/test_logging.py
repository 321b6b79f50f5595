"""Tests for daemonizable.common.logging."""

from __future__ import annotations

import io

import pytest

from daemonizable.common.logging import log_error, log_info, log_success, log_warning


def test_log_functions_write_labelled_lines_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """Each level writes one labelled line to stderr and nothing to stdout."""
    log_info("test info")
    log_warning("test warning")
    log_error("test error")
    log_success("test success")

    captured = capsys.readouterr()
    assert captured.out == ""
    lines = captured.err.splitlines()
    assert len(lines) == 4
    assert lines[0].endswith("[INFO] test info")
    assert lines[1].endswith("[WARN] test warning")
    assert lines[2].endswith("[ERROR] test error")
    assert lines[3].endswith("[OK] test success")


def test_no_color_when_not_a_tty(capsys: pytest.CaptureFixture[str]) -> None:
    log_error("plain")
    assert "\033[" not in capsys.readouterr().err


def test_lines_start_with_utc_timestamp(capsys: pytest.CaptureFixture[str]) -> None:
    log_info("stamped")
    line = capsys.readouterr().err.strip()
    assert line.startswith("[")
    assert line[1:21].endswith("Z")


def test_explicit_stream_replaces_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """A stream passed by the caller receives the line instead of stderr."""
    stream = io.StringIO()
    log_info("to file", stream)
    log_warning("also to file", stream=stream)

    lines = stream.getvalue().splitlines()
    assert lines[0].endswith("[INFO] to file")
    assert lines[1].endswith("[WARN] also to file")
    assert "\033[" not in stream.getvalue()
    assert capsys.readouterr().err == ""
