"""Terminal primitives used by the interactive UI.

The menu and editor only talk to the Terminal and Input protocols.
RichTerminal implements both on top of a Rich console for output and
readchar for single key presses.
"""

from __future__ import annotations

from typing import Protocol

import readchar
from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from sshhub.core.exceptions import PromptCancelled
from sshhub.ui.keys import KeyEvent, parse_key

# Message category styles
INFO = "cyan"
SUCCESS = "green"
WARNING = "yellow"
ERROR = "red"


class Terminal(Protocol):
    """Screen output and single key input."""

    def clear(self) -> None: ...

    def move_to(self, row: int) -> None: ...

    def write_line(self, text: str | Text = "", style: str | None = None) -> None: ...

    def read_key(self) -> KeyEvent: ...


class Input(Protocol):
    """Line-based prompt input."""

    def read_line(self, prompt: str) -> str: ...


class RichTerminal:
    """Terminal and Input backed by Rich and readchar.

    Args:
        console: Rich console to draw on (auto-created if not provided).
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def clear(self) -> None:
        self.console.clear()

    def move_to(self, row: int) -> None:
        """Place the cursor at the start of a screen row."""
        self.console.control(Control.move_to(0, row))

    def write_line(self, text: str | Text = "", style: str | None = None) -> None:
        """Write one line, erasing whatever was on that row before."""
        if isinstance(text, str):
            text = Text(text)
        self.console.control(Control((ControlType.ERASE_IN_LINE, 2)))
        self.console.print(text, style=style or "", soft_wrap=True)

    def read_key(self) -> KeyEvent:
        return parse_key(readchar.readkey())

    def read_line(self, prompt: str) -> str:
        """Read one line of text.

        Raises:
            PromptCancelled: If input is closed (Ctrl-D).
        """
        try:
            return self.console.input(Text(f"{prompt} >> "))
        except EOFError as e:
            self.console.print()
            raise PromptCancelled() from e
