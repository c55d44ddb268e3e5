"""Scoped timing spans for build pass instrumentation."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from .logging import get_logger


class TimeSpan:
    """A started timing span that logs its duration when finished."""

    def __init__(self, label: str, *, debug: bool = False, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger("timing")
        self._level = logging.DEBUG if debug else logging.INFO
        self._start = time.perf_counter()
        self.duration: Optional[float] = None
        self.logger.log(self._level, label)

    @property
    def finished(self) -> bool:
        return self.duration is not None

    def finish(self, label: str) -> float:
        if self.duration is None:
            self.duration = time.perf_counter() - self._start
            self.logger.log(self._level, "%s in %.1f ms", label, self.duration * 1000)
        return self.duration


def start_span(label: str, *, debug: bool = False, logger: Optional[logging.Logger] = None) -> TimeSpan:
    return TimeSpan(label, debug=debug, logger=logger)


@contextmanager
def timed_span(
    start_label: str,
    finish_label: str,
    *,
    debug: bool = False,
    logger: Optional[logging.Logger] = None,
) -> Iterator[TimeSpan]:
    """Time the enclosed block, finishing the span even when it raises."""
    span = start_span(start_label, debug=debug, logger=logger)
    try:
        yield span
    finally:
        span.finish(finish_label)


__all__ = ["TimeSpan", "start_span", "timed_span"]
