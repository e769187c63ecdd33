"""Diagnostic logging setup.

Log records are developer diagnostics written to stderr; user-facing
messages are rendered by the Rich console in the CLI layer instead.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "banned_users"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this more than once replaces the previous handler rather
    than stacking duplicates.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_banned_users_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._banned_users_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
