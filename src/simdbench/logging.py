"""Logging setup for simdbench.

Progress lines ("Running 10 iterations...") go to the console as plain
text; warnings and errors carry their level name so they stand out from
the report.  An optional log file records everything, per-trial timings
included, with timestamps and logger names.

Modules log through children of the ``simdbench`` logger obtained from
:func:`get_logger`.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "simdbench"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class _ConsoleFormatter(logging.Formatter):
    """Plain messages below WARNING, ``LEVEL: message`` from WARNING up."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {message}"
        return message


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure the ``simdbench`` logger for one CLI invocation.

    Args:
        verbose: Show per-trial timings (DEBUG) on the console.
        quiet: Only show warnings and errors. Ignored if *verbose* is True.
        log_file: Also log everything at DEBUG to this file, truncating it.

    Returns:
        The configured ``simdbench`` logger.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # A second invocation in the same process must not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(_console_level(verbose, quiet))
    console.setFormatter(_ConsoleFormatter("%(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``simdbench.<name>`` child logger."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
