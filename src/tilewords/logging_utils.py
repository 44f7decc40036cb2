"""Logging setup shared by the tilewords package."""

import logging

LOGGER_NAME = "tilewords"
"""Name of the logger used throughout the package."""


def get_logger(level: int | str | None = None) -> logging.Logger:
    """Return the package logger.

    A stream handler is attached the first time this is called.  If `level` is given, the
    logger level is (re)set to it.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    if level is not None:
        logger.setLevel(level)

    return logger
