"""
Logging Configuration

Centralized logging setup for the NEO service.

Usage:
    from logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Fetched NeoWs feed")
"""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the whole application.

    Parameters
    ----------
    level : int or str
        Logging level, either numeric (logging.DEBUG) or a name ("DEBUG").
    log_file : str, optional
        Path to a log file. If None, logs only go to stdout.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
