"""Logging configuration tests."""

from __future__ import annotations

import logging
from pathlib import Path

from cuin.logging import configure_logging, get_logger


def _console_handler(logger: logging.Logger) -> logging.Handler:
    return next(
        handler for handler in logger.handlers if not isinstance(handler, logging.FileHandler)
    )


def test_console_lines_carry_the_logger_area() -> None:
    logger = configure_logging()
    formatter = _console_handler(logger).formatter
    assert formatter is not None

    child = get_logger("payload")
    record = child.makeRecord(child.name, logging.INFO, __file__, 1, "Loaded %d", (3,), None)
    root_record = logger.makeRecord(logger.name, logging.INFO, __file__, 1, "Ready", (), None)

    assert formatter.format(record) == "[cuin] INFO payload: Loaded 3"
    assert formatter.format(root_record) == "[cuin] INFO Ready"


def test_repeated_configuration_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "cuin.log"

    configure_logging(verbose=True, log_file=log_file)
    logger = configure_logging(verbose=True, log_file=log_file)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    get_logger("stores").debug("written to file")
    for handler in logger.handlers:
        handler.flush()

    assert "cuin.stores: written to file" in log_file.read_text(encoding="utf-8")
    configure_logging()
