"""Logger setup shared by the datecsp package."""

from __future__ import annotations

import logging

from .config import LOG_FORMAT, LOGGER_NAME


def get_logger() -> logging.Logger:
    """
    Return the package logger.

    Only a NullHandler is attached here, so importing the library never
    prints anything. Applications configure output themselves, and the
    CLI does so through set_verbosity().
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def set_verbosity(verbose: bool) -> None:
    """Send package logs to stderr at DEBUG or WARNING level."""
    logger = get_logger()

    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            logger.removeHandler(handler)

    # Bound to the current sys.stderr
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
