"""Logging setup for the cyclogear package.

Library modules log through ``logging.getLogger(__name__)``; no handlers are
installed here beyond a NullHandler on the package logger.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "cyclogear"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}


def configure_logging(level: str = "WARNING", *, stream_handler: bool = False) -> logging.Logger:
    """Set the package logger level.

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        stream_handler: Also attach a stderr handler (for scripts and notebooks).

    Returns:
        The package logger.
    """
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    if name == "WARN":
        name = "WARNING"

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(name)

    if stream_handler and not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(handler)

    return logger
