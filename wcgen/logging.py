"""Logging setup for wcgen build passes.

Every module logs through a child of the ``wcgen`` logger, so a host build
tool can route or silence the whole stage with one logger name.
"""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT_LOGGER = "wcgen"
_CONSOLE_FORMAT = "[wcgen] %(levelname)s %(message)s"
# Relative timestamps line up with the timing spans logged per output path.
_FILE_FORMAT = "%(relativeCreated)8.0fms %(levelname)-7s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``wcgen.<name>``, or the stage root logger when ``name`` is empty."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}" if name else _ROOT_LOGGER)


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach console (and optional file) handlers to the stage root logger.

    ``quiet`` keeps only warnings and errors on the console. The file sink,
    when given, always records at DEBUG so skipped writes and span timings
    survive for later inspection. Calling this again replaces earlier handlers.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file is not None else _console_level(verbose, quiet))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(_console_level(verbose, quiet))
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
