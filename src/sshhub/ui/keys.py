"""Keyboard input helpers.

Raw key strings from readchar are translated into the small set of
events the selection menu understands.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import readchar


class Key(str, Enum):
    """Key events understood by the menu."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    DIGIT = "digit"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    Attributes:
        key: Kind of key.
        digit: Value 1-9 for DIGIT events, None otherwise.
    """

    key: Key
    digit: int | None = None

    @classmethod
    def number(cls, digit: int) -> KeyEvent:
        """Create a DIGIT event for 1-9."""
        if not 1 <= digit <= 9:
            raise ValueError(f"Digit must be 1-9, got {digit}")
        return cls(Key.DIGIT, digit)


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_up(key: str) -> bool:
    """Check if key is up arrow or vim 'k'."""
    return key == readchar.key.UP or key.lower() == "k"


def is_down(key: str) -> bool:
    """Check if key is down arrow or vim 'j'."""
    return key == readchar.key.DOWN or key.lower() == "j"


def is_digit(key: str) -> bool:
    """Check if key is one of 1-9."""
    return len(key) == 1 and key in "123456789"


def parse_key(key: str) -> KeyEvent:
    """Translate a raw readchar key into a KeyEvent."""
    if is_up(key):
        return KeyEvent(Key.UP)
    if is_down(key):
        return KeyEvent(Key.DOWN)
    if is_enter(key):
        return KeyEvent(Key.ENTER)
    if is_escape(key):
        return KeyEvent(Key.ESCAPE)
    if is_digit(key):
        return KeyEvent.number(int(key))
    return KeyEvent(Key.OTHER)
