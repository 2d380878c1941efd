"""
Logging configuration for the document portal.
"""
import logging
import sys
from typing import Optional

from docportal.core.config import settings

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Args:
        log_level: Logging level name; defaults to settings.LOG_LEVEL

    Returns:
        Configured root logger
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers so repeated calls don't duplicate output
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    return logger
