"""Custom exceptions for sshhub.

This module defines a hierarchy of exceptions used throughout sshhub
to provide meaningful error messages and enable proper error handling.

Exception Hierarchy:
    SshhubError (base)
    ├── ConfigurationError
    │   ├── CorruptConfigError
    │   └── ConfigIOError
    ├── RegistryError
    │   ├── DuplicateIDError
    │   └── TargetNotFoundError
    ├── FieldValidationError
    │   ├── EmptyInputError
    │   ├── InvalidIntegerError
    │   │   └── InvalidPortError
    │   └── InvalidBooleanError
    └── LaunchError

    PromptCancelled (not an error, raised when the user aborts a prompt)
"""

from __future__ import annotations

from typing import Any


class SshhubError(Exception):
    """Base exception for all sshhub errors.

    Args:
        message: Human-readable error message.
        details: Optional dictionary with additional error context.

    Attributes:
        message: The error message.
        details: Additional context about the error.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(SshhubError):
    """Raised when the stored configuration cannot be read or written."""


class CorruptConfigError(ConfigurationError):
    """Raised when the config file exists but cannot be parsed.

    Args:
        path: The path of the config file.
        reason: Why parsing failed.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration file: {reason}",
            details={"path": path},
        )
        self.path = path


class ConfigIOError(ConfigurationError):
    """Raised when the config file cannot be written.

    Args:
        path: The path of the config file.
        reason: Description of the I/O failure.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to save configuration: {reason}",
            details={"path": path},
        )
        self.path = path


class RegistryError(SshhubError):
    """Raised when a registry operation violates its invariants."""


class DuplicateIDError(RegistryError):
    """Raised when a target id is already used by another target.

    Args:
        target_id: The conflicting id.
    """

    def __init__(self, target_id: int) -> None:
        super().__init__(
            f"Target ID {target_id} already exists",
            details={"id": target_id},
        )
        self.target_id = target_id


class TargetNotFoundError(RegistryError):
    """Raised when no target has the requested id.

    Args:
        target_id: The id that was not found.
    """

    def __init__(self, target_id: int) -> None:
        super().__init__(f"Target ID {target_id} not found")
        self.target_id = target_id


class FieldValidationError(SshhubError):
    """Raised when user input for a single form field is invalid."""


class EmptyInputError(FieldValidationError):
    """Raised when a required field is left empty."""

    def __init__(self) -> None:
        super().__init__("Input cannot be empty")


class InvalidIntegerError(FieldValidationError):
    """Raised when an integer field receives a non-numeric value.

    Args:
        value: The rejected input.
    """

    def __init__(self, value: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid integer: '{value}'")
        self.value = value


class InvalidPortError(InvalidIntegerError):
    """Raised when a port number is outside 1-65535."""

    def __init__(self, value: str) -> None:
        super().__init__(value, f"Port must be between 1 and 65535, got {value}")


class InvalidBooleanError(FieldValidationError):
    """Raised when a yes/no field receives anything but 'y' or 'n'.

    Args:
        value: The rejected input.
    """

    def __init__(self, value: str) -> None:
        super().__init__("Invalid input. Please enter 'y' or 'n'")
        self.value = value


class LaunchError(SshhubError):
    """Raised when the launch command cannot be started.

    Args:
        command: The command line that failed.
        message: Description of the failure.
    """

    def __init__(self, command: str, message: str) -> None:
        super().__init__(
            f"Failed to launch '{command}': {message}",
            details={"command": command},
        )
        self.command = command


class PromptCancelled(Exception):
    """Raised when the user enters the cancellation sentinel.

    Cancellation is a user choice rather than a failure, so this does not
    derive from SshhubError and is never reported as an error.
    """
