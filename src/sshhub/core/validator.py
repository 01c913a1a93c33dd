"""Validation of raw form input.

All functions here are pure: they turn one line of user input into a
field value or raise. The cancellation sentinel is checked before any
other rule so that it can abort any prompt.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from sshhub.core.exceptions import (
    EmptyInputError,
    InvalidBooleanError,
    InvalidIntegerError,
    InvalidPortError,
    PromptCancelled,
)

CANCEL_SENTINEL = "!cancel"

MIN_PORT = 1
MAX_PORT = 65535


class FieldKind(str, Enum):
    """Kinds of form fields."""

    TEXT = "text"
    INTEGER = "integer"
    PORT = "port"
    BOOLEAN = "boolean"


def is_cancel(raw: str) -> bool:
    """Check if input is the cancellation sentinel (case-insensitive)."""
    return raw.strip().lower() == CANCEL_SENTINEL


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def validate_field(
    kind: FieldKind,
    raw: str,
    current: Any = None,
    required: bool = False,
) -> Any:
    """Resolve one line of input into a field value.

    Args:
        kind: Type of the field.
        raw: Text entered by the user.
        current: Existing or default value. Used when the input is empty on
            an optional field, and as the fallback for unparsable integers.
        required: Whether empty input is rejected.

    Returns:
        The resolved value (str, int or bool depending on kind).

    Raises:
        PromptCancelled: If raw is the cancellation sentinel.
        EmptyInputError: If raw is empty and the field is required.
        InvalidIntegerError: If an integer field has no usable value.
        InvalidPortError: If a port is outside 1-65535.
        InvalidBooleanError: If a yes/no field gets anything else.

    Example:
        >>> validate_field(FieldKind.TEXT, "", current="web")
        'web'
        >>> validate_field(FieldKind.PORT, "2200")
        2200
    """
    if is_cancel(raw):
        raise PromptCancelled()

    value = raw.strip()

    if not value:
        if required:
            raise EmptyInputError()
        return current

    if kind is FieldKind.TEXT:
        return value

    if kind is FieldKind.BOOLEAN:
        if value.lower() == "y":
            return True
        if value.lower() == "n":
            return False
        raise InvalidBooleanError(value)

    number = _parse_int(value)
    if number is None:
        if not required and current is not None:
            return current
        raise InvalidIntegerError(value)

    if kind is FieldKind.PORT and not MIN_PORT <= number <= MAX_PORT:
        raise InvalidPortError(value)

    return number
