"""Centralized logging configuration for youtrack2github."""

from __future__ import annotations

import logging
import sys

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for youtrack2github.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Unknown names fall back to INFO.
        log_file: Optional path to log file. If provided, logs will be written to both
                  console and file.

    Example:
        >>> setup_logging("DEBUG")  # Show every request and throttle decision
        >>> setup_logging("INFO", "migration.log")  # Keep a timestamped record of the run
    """
    logger = logging.getLogger("youtrack2github")
    logger.setLevel(LEVELS.get(level.upper(), logging.INFO))

    # Remove any existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    # Throttle waits can last an hour, so the file log carries timestamps
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(file_handler)

    logger.propagate = False
