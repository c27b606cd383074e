"""Command line interface for profilekit."""

from .main import cli

__all__ = ["cli"]
