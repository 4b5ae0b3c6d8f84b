"""
Logging setup shared by the validation engine modules.
"""

import logging
import sys

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger writing to stdout at the configured level.

    Calling it again for the same name returns the same logger without
    adding another handler.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(settings.LOG_LEVEL)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(settings.LOG_LEVEL)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """
    Log an exception with the step it came from.

    The traceback is added only in DEBUG mode.

    Args:
        logger: Logger instance
        error: Exception that occurred
        context: Where the error occurred (validator, capability, field)
    """
    message = f"{type(error).__name__}: {error}"
    if context:
        message = f"{context}: {message}"
    logger.error(message, exc_info=settings.DEBUG)
