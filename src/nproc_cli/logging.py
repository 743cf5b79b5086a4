"""
Module: logging

This module provides functions for setting up logging configuration.
"""

from __future__ import annotations

import logging
import sys
from os import PathLike
from pathlib import Path

from .constants import PACKAGE_ROOT

log = logging.getLogger(__name__)

LOGGING_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGGING_DATEFMT = "%Y-%m-%d %I:%M %p"


def add_filelogger(file_path: str | PathLike, level: str = "INFO", logger_name: str | None = None) -> None:
    """
    Add file logging for the specified package.

    This function configures a file logger to capture log messages
    for the package specified by logger_name.

    :param file_path: The path to the log file.
    :param level: Optional; the logging level. Default is 'INFO'.
                  Must be a valid logging level name (e.g., 'DEBUG', 'INFO').
    :param logger_name: Optional; the name of the logger to add the file handler to.
                        Default is the root logger.
    """
    # passing None to getLogger gets the root logger
    logger = logging.getLogger(logger_name)

    file_path = Path(file_path)

    file_handler = logging.FileHandler(file_path)
    file_handler.setLevel(level.upper())
    file_handler.setFormatter(logging.Formatter(fmt=LOGGING_FORMAT, datefmt=LOGGING_DATEFMT))
    logger.addHandler(file_handler)
    log.info(
        "File logger added for %s at %s with level %s.",
        logger.name,
        file_path,
        level.upper(),
    )


def setup_cli_logging(log_file: str | PathLike | None, log_level: str):
    """
    Setup logging for the CLI.
    Everything goes to stderr so that stdout only ever carries the result line.
    """
    package_logger = logging.getLogger(PACKAGE_ROOT)
    package_logger.setLevel(log_level.upper())

    # Remove handlers from a previous invocation in the same interpreter
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(fmt=LOGGING_FORMAT, datefmt=LOGGING_DATEFMT))
    package_logger.addHandler(console_handler)

    if log_file:
        add_filelogger(
            log_file,
            log_level.upper(),
            logger_name=PACKAGE_ROOT,
        )

    log.debug("Logging setup complete.")
