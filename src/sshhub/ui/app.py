"""Main menu loop of the interactive application.

Each action runs to completion and returns to the loop, which redraws
the main menu. Registry and launch errors are shown in the error style
and never end the session; only Exit does.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.text import Text

from sshhub.core.config import dump_registry
from sshhub.core.exceptions import FieldValidationError, PromptCancelled, SshhubError
from sshhub.core.launcher import PLACEHOLDERS, launch, render_command
from sshhub.core.validator import FieldKind, validate_field
from sshhub.models.target import ProbeResult, Target
from sshhub.ui.editor import CANCEL_HINT, TargetEditor
from sshhub.ui.menu import MenuItem, select
from sshhub.ui.terminal import ERROR, INFO, SUCCESS, WARNING
from sshhub.utils.logging import get_logger

if TYPE_CHECKING:
    from sshhub.core.session import Session
    from sshhub.ui.terminal import Input, Terminal

logger = get_logger("app")

TITLE = "SSH Hub (sshhub)"
RULE = "=" * 60
HALF_RULE = "-" * 60


class SshHubApp:
    """Interactive front-end over a session.

    Args:
        session: Registry, prober and runner to operate on.
        terminal: Screen and key input.
        input: Line input for prompts (defaults to terminal).
    """

    def __init__(self, session: Session, terminal: Terminal, input: Input | None = None) -> None:
        self.session = session
        self.terminal = terminal
        self.input: Input = input if input is not None else terminal  # type: ignore[assignment]
        self.editor = TargetEditor(terminal, self.input)
        self._running = False

    @property
    def actions(self) -> list[tuple[MenuItem, Callable[[], None]]]:
        return [
            (MenuItem("1. Connect", "bright_green"), self.connect),
            (MenuItem("2. List Targets / Settings", "bright_cyan"), self.list_targets),
            (MenuItem("3. Add Target", "bright_yellow"), self.add_target),
            (MenuItem("4. Edit Target", "bright_yellow"), self.edit_target),
            (MenuItem("5. Delete Target", "bright_magenta"), self.delete_target),
            (MenuItem("6. Edit Execution Option", "bright_magenta"), self.edit_exec),
            (MenuItem("7. Exit", "bright_red"), self.confirm_exit),
        ]

    def run(self) -> None:
        """Show the main menu until the user confirms Exit."""
        self._running = True
        while self._running:
            self.terminal.clear()
            self.terminal.write_line(RULE, SUCCESS)
            self.terminal.write_line(f"  {TITLE}", SUCCESS)
            self.terminal.write_line(RULE, SUCCESS)
            self.terminal.write_line()

            actions = self.actions
            choice = select(self.terminal, [item for item, _ in actions], anchor_row=4)
            handler = self.confirm_exit if choice is None else actions[choice][1]

            try:
                handler()
            except PromptCancelled:
                pass
            except SshhubError as e:
                logger.error(str(e))
                self.terminal.write_line(str(e), ERROR)
                self.pause()

    def pause(self, message: str = "Press any key to return to the menu...") -> None:
        self.terminal.write_line(message, INFO)
        self.terminal.read_key()

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; only 'y' confirms."""
        self.terminal.clear()
        self.terminal.write_line(f"{message}, Confirm?", WARNING)
        answer = self.input.read_line("y=Yes / Other=Cancel")
        return answer.strip().lower() == "y"

    def select_target(
        self, title: str, style: str, scan: bool = False
    ) -> Target | None:
        """Let the user pick a target, optionally showing online status.

        The list is re-read from the registry on every pass; a selection
        that no longer matches a target redraws from current state.
        """
        while True:
            self.terminal.clear()
            self.terminal.write_line(f"{title} (Press ESC to cancel)", INFO)
            self.terminal.write_line("Choose with Up/Down arrows or numbers 1-9", INFO)

            targets = self.session.registry.list()
            if not targets:
                self.terminal.write_line("No targets available.", f"{ERROR} reverse")
                self.terminal.write_line()
                self.pause()
                return None

            status: dict[int, ProbeResult] = {}
            if scan:
                self.terminal.write_line("Scanning online status, please wait...", f"{INFO} reverse")
                status = self.session.prober.probe_all(targets)

            items = [self._target_item(t, style, status.get(t.id)) for t in targets]
            anchor = 3 if scan else 2
            choice = select(self.terminal, items, anchor_row=anchor)
            if choice is None:
                return None

            current = self.session.registry.list()
            if choice < len(current) and current[choice].id == targets[choice].id:
                return current[choice]
            logger.debug("Target list changed during selection, redrawing")

    @staticmethod
    def _target_item(target: Target, style: str, result: ProbeResult | None) -> MenuItem:
        label = target.display_name
        if result is None or result is ProbeResult.NOT_SCANNED:
            return MenuItem(label, style)
        label = f"{label}, {result.value}"
        if result is ProbeResult.ONLINE:
            return MenuItem(label, style)
        return MenuItem(label, result.color)

    def connect(self) -> None:
        target = self.select_target("Select Target to Connect", "bright_green", scan=True)
        if target is None:
            return

        template = self.session.registry.exec_template
        command = render_command(template, target)

        self.terminal.write_line(HALF_RULE)
        self.terminal.write_line(f"Running ssh to {target.address}", SUCCESS)
        self.terminal.write_line(f"({command})", INFO)
        self.terminal.write_line()
        self.terminal.write_line(RULE)

        exit_code = launch(template, target, self.session.runner)

        self.terminal.write_line(RULE)
        self.terminal.write_line()
        self.terminal.write_line(f"SSH session ended (exit status {exit_code})", WARNING)
        self.pause()

    def list_targets(self) -> None:
        self.terminal.clear()
        self.terminal.write_line("Select option (Press ESC to cancel)", INFO)
        self.terminal.write_line("Choose with Up/Down arrows or numbers 1-2", INFO)

        items = [
            MenuItem("1. List Targets", "bright_green"),
            MenuItem("2. List Settings", "bright_yellow"),
        ]
        choice = select(self.terminal, items, anchor_row=2)
        if choice is None:
            return

        self.terminal.write_line()
        if choice == 0:
            self.terminal.write_line("Targets:")
            for t in self.session.registry.list():
                self.terminal.write_line(
                    Text(
                        f"ID: {t.id}, Name: {t.name}, IP: {t.host}, Port: {t.port}, "
                        f"Username: {t.username}, ScanOnline: {t.scan_online}"
                    )
                )
        else:
            self.terminal.write_line("Current Configuration:")
            for line in dump_registry(self.session.registry.snapshot()).splitlines():
                self.terminal.write_line(line)

        self.terminal.write_line()
        self.pause()

    def add_target(self) -> None:
        self.terminal.clear()
        self.terminal.write_line(f"Add Target {CANCEL_HINT}", INFO)
        candidate = self.editor.create(self.session.registry.list())
        if candidate is None:
            return

        stored = self.session.registry.add(candidate)
        self.terminal.write_line(f"Added target {stored.id} ({stored.address})", SUCCESS)
        self.pause()

    def edit_target(self) -> None:
        target = self.select_target("Select Target to edit", "bright_yellow")
        if target is None:
            return

        self.terminal.clear()
        self.terminal.write_line(f"Editing {target.display_name}", INFO)
        self.terminal.write_line(f"Leave a field empty to keep its value {CANCEL_HINT}", INFO)
        candidate = self.editor.edit(target, self.session.registry.list())
        if candidate is None:
            return

        updated = self.session.registry.replace(target.id, candidate)
        self.terminal.write_line(f"Updated target {updated.id} ({updated.address})", SUCCESS)
        self.pause()

    def delete_target(self) -> None:
        target = self.select_target("Select Target to Delete", "bright_magenta")
        if target is None:
            return

        if not self.confirm(f"Delete target '{target.address}'"):
            return

        self.session.registry.remove(target.id)
        self.terminal.write_line("Target deleted.", SUCCESS)
        self.pause()

    def edit_exec(self) -> None:
        self.terminal.clear()
        self.terminal.write_line("Parameter-List")
        for placeholder, meaning in PLACEHOLDERS.items():
            self.terminal.write_line(f"{placeholder:<12}{meaning}")

        template = self.session.registry.exec_template
        while True:
            raw = self.input.read_line(f"Current Exec ({template})")
            try:
                new_template = validate_field(FieldKind.TEXT, raw, required=True)
                break
            except FieldValidationError as e:
                self.terminal.write_line(f"{e.message}. Please try again. {CANCEL_HINT}", ERROR)

        self.session.registry.set_exec_template(new_template)
        self.terminal.write_line("Done!!", SUCCESS)
        self.pause()

    def confirm_exit(self) -> None:
        if self.confirm("Exit"):
            self._running = False
