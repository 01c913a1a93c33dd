"""Data models for sshhub.

This module contains Pydantic models for targets and the registry record.
"""

from sshhub.models.target import (
    DEFAULT_EXEC_TEMPLATE,
    DEFAULT_PORT,
    ProbeResult,
    Registry,
    Target,
)

__all__ = [
    "DEFAULT_EXEC_TEMPLATE",
    "DEFAULT_PORT",
    "ProbeResult",
    "Registry",
    "Target",
]
