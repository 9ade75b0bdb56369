"""Logging configuration for the promql-tutor CLI."""

from __future__ import annotations

import logging
import sys


LOGGER_NAME = "promql_tutor"
HANDLER_NAME = "promql_tutor.stdout"

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def verbosity_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level."""
    return _VERBOSITY_LEVELS[max(0, min(verbosity, len(_VERBOSITY_LEVELS) - 1))]


def configure_logging(verbosity: int) -> None:
    """Configure logging output based on verbosity.

    Args:
        verbosity: 0 for warnings only, 1 for INFO, 2 or more for DEBUG
            (parser degradation details) on stdout
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    level = verbosity_level(verbosity)
    logger.setLevel(level)

    if level == logging.WARNING:
        logger.handlers.clear()
        return

    for item in list(logger.handlers):
        if item.get_name() == HANDLER_NAME:
            logger.removeHandler(item)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
