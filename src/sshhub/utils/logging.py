"""Logging configuration for sshhub.

Verbosity is controlled via CLI flags:
- No flag: WARNING only
- -v: INFO level
- -vv: DEBUG level

The interactive menu redraws the screen in place, so while it runs
nothing is logged to the console; pass --log-file to keep a record.
File records include the thread name to tell probe workers apart.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "sshhub"

_loggers: dict[str, logging.Logger] = {}


def get_log_level(verbosity: int) -> int:
    """Convert a -v count to a log level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    verbosity: int = 0,
    log_file: str | Path | None = None,
    interactive: bool = False,
) -> logging.Logger:
    """Configure the sshhub logger tree.

    Args:
        verbosity: Number of -v flags from CLI.
        log_file: Optional path of a log file, always written at DEBUG.
        interactive: Whether the full-screen menu is about to run. No
            console handler is installed in that case.

    Returns:
        The configured root 'sshhub' logger.

    Example:
        >>> configure_logging(verbosity=1)
        >>> configure_logging(log_file="~/.sshhub/sshhub.log", interactive=True)
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if not interactive:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(get_log_level(verbosity))
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Creates child loggers under the 'sshhub' namespace.

    Args:
        name: Name of the module (e.g., 'prober', 'registry').

    Returns:
        Logger instance.
    """
    prefix = f"{ROOT_LOGGER}."
    full_name = name if name.startswith(prefix) else prefix + name

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]
