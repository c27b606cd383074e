"""Logging helpers for profilekit."""

from .logger import get_logger, setup_tracing

__all__ = [
    "get_logger",
    "setup_tracing",
]
