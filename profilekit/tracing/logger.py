"""Logging setup for profilekit."""

import logging
import sys
from typing import TextIO

ROOT_LOGGER_NAME = "profilekit"

HANDLER_NAME = "profilekit.console"

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"


def setup_tracing(log_level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Attach a console handler to the profilekit logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        stream: Stream for the handler (default: sys.stderr).

    Returns:
        The configured root logger of the package.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper()))
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the package logger, or one of its children.

    Args:
        name: Optional child name (e.g. "profile" -> "profilekit.profile").
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
