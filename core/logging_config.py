# core/logging_config.py

"""Logging configuration for the roster application."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER_NAME = "roster"


def setup_logging(
    log_level: str = "WARNING",
    log_file: str | None = None,
) -> logging.Logger:
    """
    Configures the application logger.

    Args:
        log_level (str): Logging level name (DEBUG, INFO, WARNING, ERROR).
        log_file (str | None): Optional path to a log file. Parent directories are created.

    Returns:
        The configured root application logger.

    Notes:
        - Model and CLI modules log through child loggers (`roster.<module>`), so this
          only needs to run once, at program start.
        - Console output goes to stderr so it never interleaves with command results.
    """
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
        )
    )
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
            )
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Returns a child of the application logger, e.g. `roster.models.group`."""
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
