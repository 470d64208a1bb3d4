from __future__ import annotations

import logging

LOGGER_NAME = "twinscan"


def get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_verbosity(quiet: bool = False, verbose: bool = False) -> int:
    """Adjust the package logger; ``quiet`` wins over ``verbose``. Returns the new level."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    get_logger().setLevel(level)
    return level
