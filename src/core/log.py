"""Centralized logging configuration."""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Handlers are left to the application: library loggers only propagate
    to the root logger.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Logger instance
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))

    return logger
