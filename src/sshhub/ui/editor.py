"""Interactive form for creating and editing targets.

The editor asks for each field in a fixed order, re-prompting on invalid
input. It never touches the registry: it only returns a new candidate
Target (or None when the user cancels), which the caller commits.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sshhub.core.exceptions import FieldValidationError, PromptCancelled
from sshhub.core.validator import CANCEL_SENTINEL, FieldKind, validate_field
from sshhub.models.target import DEFAULT_PORT, Target
from sshhub.ui.terminal import ERROR
from sshhub.utils.logging import get_logger

if TYPE_CHECKING:
    from sshhub.ui.terminal import Input, Terminal

logger = get_logger("editor")

CANCEL_HINT = f'(Cancel with "{CANCEL_SENTINEL}")'


class TargetEditor:
    """Prompts for target fields one by one.

    Args:
        terminal: Where error messages are written.
        input: Source of typed lines.

    Example:
        >>> editor = TargetEditor(terminal, terminal)
        >>> new_target = editor.create(registry.list())
        >>> if new_target is not None:
        ...     registry.add(new_target)
    """

    def __init__(self, terminal: Terminal, input: Input) -> None:
        self.terminal = terminal
        self.input = input

    def _ask(
        self,
        prompt: str,
        kind: FieldKind,
        current: Any = None,
        required: bool = False,
    ) -> Any:
        """Prompt until the input validates. PromptCancelled passes through."""
        while True:
            raw = self.input.read_line(prompt)
            try:
                return validate_field(kind, raw, current=current, required=required)
            except FieldValidationError as e:
                self.terminal.write_line(f"{e.message}. Please try again. {CANCEL_HINT}", ERROR)

    def _ask_id(self, prompt: str, current: int | None, taken: set[int]) -> int:
        while True:
            new_id = self._ask(prompt, FieldKind.INTEGER, current, required=current is None)
            if new_id not in taken:
                return new_id
            self.terminal.write_line(f"Duplicate ID ({new_id}). {CANCEL_HINT}", ERROR)

    def create(self, existing: Sequence[Target]) -> Target | None:
        """Ask for all fields of a new target.

        Args:
            existing: Targets already in the registry, for the id check.

        Returns:
            The new Target, or None if the user cancelled.
        """
        taken = {t.id for t in existing}
        try:
            target_id = self._ask_id("Enter Target ID", None, taken)
            name = self._ask("Enter Target Name", FieldKind.TEXT, required=True)
            host = self._ask("Enter Target IP (or HostName)", FieldKind.TEXT, required=True)
            port = self._ask(
                f"Enter Target Port (default {DEFAULT_PORT})", FieldKind.PORT, DEFAULT_PORT
            )
            username = self._ask("Enter Target Username", FieldKind.TEXT, required=True)
            scan_online = self._ask(
                "Scan Online Status? (y/n)", FieldKind.BOOLEAN, required=True
            )
        except PromptCancelled:
            logger.debug("Target creation cancelled")
            return None

        return Target(
            id=target_id,
            name=name,
            host=host,
            port=port,
            username=username,
            scan_online=scan_online,
        )

    def edit(self, target: Target, existing: Sequence[Target]) -> Target | None:
        """Ask for new values of every field, keeping the current one on empty input.

        Args:
            target: The target being edited (left unchanged).
            existing: Targets in the registry, for the id check.

        Returns:
            A new Target with the edited values, or None if cancelled.
        """
        taken = {t.id for t in existing if t.id != target.id}
        try:
            target_id = self._ask_id(f"Current ID ({target.id})", target.id, taken)
            name = self._ask(f"Current Name ({target.name})", FieldKind.TEXT, target.name)
            host = self._ask(f"Current IP ({target.host})", FieldKind.TEXT, target.host)
            port = self._ask(f"Current Port ({target.port})", FieldKind.PORT, target.port)
            username = self._ask(
                f"Current Username ({target.username})", FieldKind.TEXT, target.username
            )
            flag = "y" if target.scan_online else "n"
            scan_online = self._ask(
                f"Current Scan Online Status ({flag}) (y/n)",
                FieldKind.BOOLEAN,
                target.scan_online,
            )
        except PromptCancelled:
            logger.debug(f"Editing target {target.id} cancelled")
            return None

        return Target(
            id=target_id,
            name=name,
            host=host,
            port=port,
            username=username,
            scan_online=scan_online,
        )
