"""
Logging for ts2typebox.

Library modules only create child loggers of `ts_to_typebox`; handlers
are installed by the command line, so applications embedding the
pipeline keep their own logging setup.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "ts_to_typebox"

LOG_FORMAT = "[ts2typebox] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or one of its children."""
    logger = logging.getLogger(LOGGER_NAME)
    return logger.getChild(name) if name else logger


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Send package log records to stderr.

    Generated code may be echoed to stdout, so log output never goes there.
    Calling this again replaces the previous handler.

    Args:
        verbose: Show debug records (pipeline phases) as well

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
