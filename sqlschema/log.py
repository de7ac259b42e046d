"""Logging configuration and utilities"""

import logging
from pathlib import Path

from .config import LOGGER_NAME, LOG_LEVEL, LOG_FILE, LOG_FORMAT, LOG_FILE_FORMAT, VERBOSE


# Package logger; handlers are only installed by configure_logging()
logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())

_handlers = []


def configure_logging(level: str = None, log_file: str = None, verbose: bool = False):
    """Install console (and optional file) handlers on the package logger"""
    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    if verbose or VERBOSE:
        level = 'DEBUG'
    level = (level or LOG_LEVEL).upper()
    # Unknown level names fall back to WARNING
    level_value = getattr(logging, level, logging.WARNING)
    if not isinstance(level_value, int):
        level_value = logging.WARNING
    logger.setLevel(level_value)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level_value)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _handlers.append(console_handler)

    # File handler
    log_file = log_file or LOG_FILE
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        _handlers.append(file_handler)

    for handler in _handlers:
        logger.addHandler(handler)

    return logger


__all__ = ['logger', 'configure_logging']
