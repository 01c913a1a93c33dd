"""Keyboard driven selection menu.

MenuController is a small state machine over a fixed list of items.
The transition logic in handle() and the line building in render_lines()
are pure; run() is the only part that touches a Terminal, drawing the
items at a fixed row and blocking on the next key between renders.

Keyboard controls:
    - Up/Down or k/j: Move the highlight (wraps around)
    - Enter: Select the highlighted item
    - Esc: Cancel
    - 1-9: Select an item directly (when shortcuts are enabled)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from rich.text import Text

from sshhub.ui.keys import Key, KeyEvent

if TYPE_CHECKING:
    from sshhub.ui.terminal import Terminal


class MenuStatus(str, Enum):
    """States of a menu invocation."""

    DISPLAYING = "displaying"
    SELECTED = "selected"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class MenuItem:
    """One selectable line.

    Attributes:
        label: Text shown for the item.
        style: Rich style applied to the whole line.
    """

    label: str
    style: str = ""


class MenuController:
    """Selection state machine for a list of items.

    Args:
        items: Items to choose from, in display order.
        shortcuts: Whether digits 1-9 select items directly.
        anchor_row: Screen row where the first item is drawn.

    Raises:
        ValueError: If items is empty.

    Example:
        >>> menu = MenuController([MenuItem("Connect"), MenuItem("Exit")])
        >>> menu.handle(KeyEvent(Key.DOWN))
        <MenuStatus.DISPLAYING: 'displaying'>
        >>> menu.handle(KeyEvent(Key.ENTER))
        <MenuStatus.SELECTED: 'selected'>
        >>> menu.index
        1
    """

    def __init__(
        self,
        items: Sequence[MenuItem | str],
        shortcuts: bool = True,
        anchor_row: int = 0,
    ) -> None:
        if not items:
            raise ValueError("Menu must have at least one item")

        self.items = [i if isinstance(i, MenuItem) else MenuItem(i) for i in items]
        self.shortcuts = shortcuts
        self.anchor_row = anchor_row
        self.index = 0
        self.status = MenuStatus.DISPLAYING

    @property
    def selected(self) -> int | None:
        """Selected index, or None unless the menu ended in SELECTED."""
        return self.index if self.status is MenuStatus.SELECTED else None

    def handle(self, event: KeyEvent) -> MenuStatus:
        """Apply one key event and return the resulting status.

        Events received after the menu has finished are ignored.
        """
        if self.status is not MenuStatus.DISPLAYING:
            return self.status

        count = len(self.items)
        if event.key is Key.UP:
            self.index = (self.index - 1) % count
        elif event.key is Key.DOWN:
            self.index = (self.index + 1) % count
        elif event.key is Key.ENTER:
            self.status = MenuStatus.SELECTED
        elif event.key is Key.ESCAPE:
            self.status = MenuStatus.CANCELLED
        elif event.key is Key.DIGIT and self.shortcuts and event.digit is not None:
            if event.digit <= count:
                self.index = event.digit - 1
                self.status = MenuStatus.SELECTED

        return self.status

    def render_lines(self) -> list[Text]:
        """Build the lines for the current state, highlight included."""
        lines = []
        for i, item in enumerate(self.items):
            if i == self.index:
                lines.append(Text(f"> {item.label}", style=f"{item.style} reverse".strip()))
            else:
                lines.append(Text(f"  {item.label}", style=item.style))
        return lines

    def render(self, terminal: Terminal) -> None:
        """Draw all items in place starting at the anchor row."""
        terminal.move_to(self.anchor_row)
        for line in self.render_lines():
            terminal.write_line(line)

    def run(self, terminal: Terminal) -> int | None:
        """Render and read keys until an item is selected or the menu is cancelled.

        Returns:
            The selected index, or None if cancelled.
        """
        while self.status is MenuStatus.DISPLAYING:
            self.render(terminal)
            self.handle(terminal.read_key())
        return self.selected


def select(
    terminal: Terminal,
    items: Sequence[MenuItem | str],
    shortcuts: bool = True,
    anchor_row: int = 0,
) -> int | None:
    """Show a one-off menu and return the chosen index (None if cancelled)."""
    return MenuController(items, shortcuts=shortcuts, anchor_row=anchor_row).run(terminal)
