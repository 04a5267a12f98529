"""Logging configuration."""

import logging
import sys
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
) -> None:
    """Configure logging for a finddups run.

    Diagnostics go to stderr so that stdout carries only the duplicate
    report.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for log output

    Raises:
        ConfigError: If the level name is not a known logging level
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigError(f"Unknown log level: {level}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
