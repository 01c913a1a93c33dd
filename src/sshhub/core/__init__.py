"""Core functionality for sshhub.

This module contains the core logic: the target registry, input
validation, online status probing, session launching and storage.
"""

from sshhub.core.config import ConfigStore
from sshhub.core.exceptions import (
    ConfigIOError,
    ConfigurationError,
    CorruptConfigError,
    DuplicateIDError,
    LaunchError,
    PromptCancelled,
    SshhubError,
    TargetNotFoundError,
)
from sshhub.core.prober import Prober, probe
from sshhub.core.registry import TargetRegistry
from sshhub.core.session import Session
from sshhub.core.validator import FieldKind, validate_field

__all__ = [
    "ConfigIOError",
    "ConfigStore",
    "ConfigurationError",
    "CorruptConfigError",
    "DuplicateIDError",
    "FieldKind",
    "LaunchError",
    "Prober",
    "PromptCancelled",
    "Session",
    "SshhubError",
    "TargetNotFoundError",
    "TargetRegistry",
    "probe",
    "validate_field",
]
