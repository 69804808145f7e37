"""Logging setup shared by the web service and the console chatbot."""

import logging
import sys

from operand_demos.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger writing to stderr at the configured level.

    Handlers are attached once per logger name, so calling this repeatedly
    (e.g. at import time in every module) does not duplicate output.

    Args:
        name: Logger name, usually the calling module's ``__name__``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(get_settings().LOG_LEVEL.upper())

    return logger
