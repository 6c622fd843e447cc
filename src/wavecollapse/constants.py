"""Contains global constants and default values used throughout the project."""

import logging

# === LOGGING CONSTANTS ===

LOGGER_ROOT_NAME: str = "wavecollapse"

LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT: int = 5

LOG_FILE_FORMAT: str = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-35s | %(funcName)-25s | %(message)s"
LOG_FILE_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
LOG_CONSOLE_FORMAT: str = "%(levelname)-8s | %(name)-25s | %(message)s"

LOG_LEVEL_DEFAULT: int = logging.DEBUG
LOG_CONSOLE_LEVEL_DEFAULT: int = logging.WARNING

# === MODEL CONSTANTS ===

# Weight given to every value of a set rule that has no explicit weight.
SET_RULE_DEFAULT_WEIGHT: float = 1.0

# Offsets along a single axis used by 1D chains (previous cell, next cell).
CHAIN_NEIGHBOR_OFFSETS: list[tuple[int]] = [(-1,), (1,)]
