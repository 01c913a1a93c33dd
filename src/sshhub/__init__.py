"""sshhub - interactive menu for picking and connecting to SSH targets.

This package keeps a list of SSH targets, shows them in a keyboard
driven terminal menu annotated with their online status, and launches
ssh against the chosen one.

Example:
    $ sshhub
    $ sshhub targets list --scan
    $ sshhub connect 1
"""

__version__ = "0.1.0"

from sshhub.core.exceptions import (
    ConfigurationError,
    DuplicateIDError,
    PromptCancelled,
    RegistryError,
    SshhubError,
    TargetNotFoundError,
)

__all__ = [
    "ConfigurationError",
    "DuplicateIDError",
    "PromptCancelled",
    "RegistryError",
    "SshhubError",
    "TargetNotFoundError",
    "__version__",
]
