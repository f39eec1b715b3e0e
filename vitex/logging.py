"""Logging utilities for vitex builds."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "vitex"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the vitex hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (and optional file) handlers on the vitex logger.

    ``quiet`` keeps only warnings on the console, which suits bundler output
    where skipped patterns and renamed entries are the interesting lines.
    The file sink always records at the verbose-or-info level.
    """
    level = logging.DEBUG if verbose else logging.INFO
    console_level = logging.WARNING if quiet and not verbose else level
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    # The bundler may evaluate its config file more than once per process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter("[vitex] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
