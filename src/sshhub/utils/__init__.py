"""Utility modules for sshhub.

This package contains shared utilities for logging and output formatting.
"""

from sshhub.utils.logging import configure_logging, get_logger
from sshhub.utils.output import OutputFormatter, console

__all__ = [
    "OutputFormatter",
    "configure_logging",
    "console",
    "get_logger",
]
