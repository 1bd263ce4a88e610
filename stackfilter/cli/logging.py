from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "stackfilter"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class LoggingState:
    level: int
    propagate: bool
    handlers: tuple[logging.Handler, ...]


def _console_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    *,
    verbosity: int,
    log_file: Path | None,
    enable_file: bool,
) -> LoggingState:
    """
    Route ``stackfilter.*`` logs to stderr (and optionally a rotating file).

    Returns the previous logger state for restore_logging().
    """
    logger = logging.getLogger(_LOGGER_NAME)
    previous = LoggingState(
        level=logger.level,
        propagate=logger.propagate,
        handlers=tuple(logger.handlers),
    )

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_level = _console_level(verbosity)
    console_handler = RichHandler(
        console=Console(file=sys.stderr, force_terminal=False),
        show_path=verbosity >= 2,
        markup=False,
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    level = console_level
    if enable_file and log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        level = logging.DEBUG

    logger.setLevel(level)
    logger.propagate = False
    return previous


def restore_logging(previous: LoggingState) -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in previous.handlers:
            handler.close()
    for handler in previous.handlers:
        logger.addHandler(handler)
    logger.setLevel(previous.level)
    logger.propagate = previous.propagate
