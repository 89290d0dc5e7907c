"""Logger hierarchy and the diagnostic channel for covpods.

Operational messages go to ``covpods.<component>`` loggers. Recoverable
findings made while collecting pods (orphaned counter files, runs without any
meta-data file) go to the separate ``covpods.diagnostics`` logger. They are
logged at WARNING when the caller asked for warnings and at DEBUG otherwise,
so they never change the outcome of a collection.
"""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT_LOGGER = "covpods"
DIAGNOSTICS_LOGGER = f"{_ROOT_LOGGER}.diagnostics"

_CONSOLE_FORMAT = "[covpods] %(levelname)s %(message)s"
_DIAGNOSTIC_CONSOLE_FORMAT = "[covpods] %(levelname)s (diagnostic) %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the logger for a covpods component."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{component}" if component else _ROOT_LOGGER)


def report_diagnostic(message: str, *args: object, warn: bool = False) -> None:
    """Log a recoverable collection finding on the diagnostic channel."""
    level = logging.WARNING if warn else logging.DEBUG
    logging.getLogger(DIAGNOSTICS_LOGGER).log(level, message, *args)


class _ConsoleFormatter(logging.Formatter):
    """Marks diagnostic records so they read apart from operational output."""

    def __init__(self) -> None:
        super().__init__(_CONSOLE_FORMAT)
        self._diagnostic = logging.Formatter(_DIAGNOSTIC_CONSOLE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if record.name == DIAGNOSTICS_LOGGER:
            return self._diagnostic.format(record)
        return super().format(record)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console output, and an optional file sink, on the covpods loggers.

    Existing handlers are replaced so repeated CLI runs in one process do not
    duplicate output. The diagnostic channel is reset to inherit the root
    covpods level.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logging.getLogger(DIAGNOSTICS_LOGGER).setLevel(logging.NOTSET)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(_ConsoleFormatter())
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["DIAGNOSTICS_LOGGER", "configure_logging", "get_logger", "report_diagnostic"]
