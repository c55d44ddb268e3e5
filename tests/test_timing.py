"""Tests for wcgen.timing."""

from __future__ import annotations

import logging

import pytest

from wcgen.timing import start_span, timed_span


def test_span_logs_start_and_finish(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="wcgen"):
        span = start_span("work started")
        duration = span.finish("work finished")

    assert span.finished
    assert duration >= 0
    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "work started"
    assert messages[1].startswith("work finished in ")


def test_finish_is_idempotent() -> None:
    span = start_span("started")
    first = span.finish("finished")
    assert span.finish("finished again") == first


def test_timed_span_finishes_when_block_raises() -> None:
    with pytest.raises(RuntimeError):
        with timed_span("started", "finished") as span:
            raise RuntimeError("boom")
    assert span.finished


def test_debug_spans_log_at_debug_level(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="wcgen"):
        with timed_span("quiet started", "quiet finished", debug=True):
            pass
    assert {record.levelno for record in caplog.records} == {logging.DEBUG}
