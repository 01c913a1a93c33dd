"""CLI module for sshhub.

This package contains all Click command definitions for the sshhub CLI.
"""

from sshhub.cli.main import cli

__all__ = ["cli"]
