"""
Centralized logging configuration for wavecollapse.

Usage:
    from wavecollapse.logging_config import setup_logging
    setup_logging()  # Call once at startup, e.g. from a script or test session

All wavecollapse.* loggers propagate to the package root logger. Nothing is attached until setup_logging() is called.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from wavecollapse import constants


def setup_logging(
    log_level: int = constants.LOG_LEVEL_DEFAULT,
    console_level: int = constants.LOG_CONSOLE_LEVEL_DEFAULT,
    log_file: Path | str | None = None,
) -> logging.Logger:
    """
    Configure the logging system for wavecollapse.

    Args:
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)
        log_file: Optional path of a rotating log file

    Returns:
        The package root logger
    """
    root_logger = logging.getLogger(constants.LOGGER_ROOT_NAME)
    root_logger.setLevel(min(log_level, console_level))

    # Clear any existing handlers (for re-initialization)
    root_logger.handlers.clear()

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=constants.LOG_FILE_MAX_BYTES,
            backupCount=constants.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(fmt=constants.LOG_FILE_FORMAT, datefmt=constants.LOG_FILE_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

    # Console handler (less verbose)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(fmt=constants.LOG_CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger configured as child of the wavecollapse logger
    """
    if name == constants.LOGGER_ROOT_NAME or name.startswith(f"{constants.LOGGER_ROOT_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{constants.LOGGER_ROOT_NAME}.{name}")
