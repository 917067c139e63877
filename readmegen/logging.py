"""Logging helpers for the readmegen CLI and relay."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "readmegen"
_CONSOLE_FORMAT = "[readmegen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Transport libraries log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger below the ``readmegen`` namespace."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach console (stderr) and optional file handlers to the readmegen logger.

    ``quiet`` keeps only warnings on the console, which is what ``--stdout``
    runs want because the README itself goes to stdout.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger


__all__ = ["configure_logging", "get_logger"]
