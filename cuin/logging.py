"""Logging utilities for cuin commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "cuin"
_CONSOLE_FORMAT = "[cuin] %(levelname)s %(area)s%(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cuin hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class _ConsoleFormatter(logging.Formatter):
    """Prefix console records with the logger name below ``cuin``, e.g. ``payload:``."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = _LOGGER_NAME + "."
        area = record.name[len(prefix) :] if record.name.startswith(prefix) else ""
        record.area = f"{area}: " if area else ""
        return super().format(record)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the cuin logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Drop handlers left over from an earlier invocation in the same process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(_ConsoleFormatter(_CONSOLE_FORMAT))
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
