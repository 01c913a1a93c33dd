"""Tests for the interactive application flows."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sshhub.core.config import ConfigStore
from sshhub.core.exceptions import LaunchError
from sshhub.core.launcher import SubprocessRunner
from sshhub.core.session import Session
from sshhub.models.target import ProbeResult
from sshhub.ui.app import SshHubApp
from sshhub.ui.terminal import ERROR

# Main menu shortcuts
CONNECT, LIST, ADD, EDIT, DELETE, EXEC, EXIT = "1234567"
ANY_KEY = "x"


def run_app(session: Session, make_terminal: type, keys: list[str], lines: list[str]):
    terminal = make_terminal(keys=keys, lines=lines)
    SshHubApp(session, terminal).run()
    assert terminal.keys == [], "not all scripted keys were consumed"
    assert terminal.inputs == [], "not all scripted lines were consumed"
    return terminal


def before_key(terminal, number: int, action: Callable[[], None]) -> None:
    """Run ``action`` just before the terminal hands out its Nth key."""
    read_key = terminal.read_key
    reads = 0

    def wrapped():
        nonlocal reads
        reads += 1
        if reads == number:
            action()
        return read_key()

    terminal.read_key = wrapped


def stored_ids(session: Session) -> list[int]:
    data = json.loads(session.store.path.read_text())
    return [t["id"] for t in data["targets"]]


class TestExit:
    """Tests for leaving the main loop."""

    def test_escape_then_confirm(self, session: Session, make_terminal: type) -> None:
        """Test that Escape on the main menu asks to exit."""
        terminal = run_app(session, make_terminal, ["esc"], ["y"])
        assert terminal.prompts == ["y=Yes / Other=Cancel"]

    def test_declined_exit_returns_to_menu(self, session: Session, make_terminal: type) -> None:
        """Test that anything but 'y' keeps the session running."""
        terminal = run_app(session, make_terminal, [EXIT, EXIT], ["n", "Y"])
        assert terminal.prompts == ["y=Yes / Other=Cancel"] * 2
        assert "Exit, Confirm?" in terminal.output

    def test_menu_drawn_after_header(self, session: Session, make_terminal: type) -> None:
        """Test that the main menu is anchored below the title block."""
        terminal = run_app(session, make_terminal, ["down", "up", EXIT], ["y"])
        assert terminal.moves[:3] == [4, 4, 4]
        assert "  SSH Hub (sshhub)" in terminal.lines
        assert "> 1. Connect" in terminal.lines


class TestConnect:
    """Tests for the connect flow."""

    def test_connect_runs_exec_command(
        self, session: Session, make_terminal: type, runner
    ) -> None:
        """Test that choosing a target launches the rendered command."""
        status = {1: ProbeResult.ONLINE, 3: ProbeResult.OFFLINE}
        with patch.object(session.prober, "probe_all", return_value=status) as mock_probe:
            terminal = run_app(session, make_terminal, [CONNECT, "2", ANY_KEY, EXIT], ["y"])

        mock_probe.assert_called_once()
        assert runner.calls == [("ssh", "admin@db.internal -p 2200")]
        assert "Running ssh to admin@db.internal:2200" in terminal.output
        assert "SSH session ended (exit status 0)" in terminal.output

    def test_status_shown_in_list(self, session: Session, make_terminal: type) -> None:
        """Test that probe results are appended to scanned targets."""
        status = {1: ProbeResult.NOT_SCANNED, 3: ProbeResult.OFFLINE}
        with patch.object(session.prober, "probe_all", return_value=status):
            terminal = run_app(session, make_terminal, [CONNECT, "esc", EXIT], ["y"])

        assert "> ID: 1, Name: web, root @10.0.0.5 :22" in terminal.lines
        assert "  ID: 3, Name: db, admin @db.internal :2200, Offline" in terminal.lines

    def test_cancel_target_selection(
        self, session: Session, make_terminal: type, runner
    ) -> None:
        """Test that Escape in the target list launches nothing."""
        with patch.object(session.prober, "probe_all", return_value={}):
            run_app(session, make_terminal, [CONNECT, "esc", EXIT], ["y"])
        assert runner.calls == []

    def test_launch_error_is_reported(self, session: Session, make_terminal: type) -> None:
        """Test that a failed launch is shown and the loop continues."""

        class FailingRunner:
            def run(self, executable: str, args: str) -> int:
                raise LaunchError(executable, "executable not found")

        session.runner = FailingRunner()
        with patch.object(session.prober, "probe_all", return_value={}):
            terminal = run_app(session, make_terminal, [CONNECT, "1", ANY_KEY, EXIT], ["y"])

        index = terminal.lines.index("Failed to launch 'ssh': executable not found (command=ssh)")
        assert terminal.styles[index] == ERROR

    def test_quote_in_username(self, session: Session, make_terminal: type) -> None:
        """Test that an apostrophe in a username still reaches ssh as one argument."""
        session.registry.update(1, lambda t: setattr(t, "username", "o'brien"))
        session.runner = SubprocessRunner()
        completed = MagicMock(returncode=0)
        with patch.object(session.prober, "probe_all", return_value={}):
            with patch("sshhub.core.launcher.subprocess.run", return_value=completed) as mock_run:
                terminal = run_app(session, make_terminal, [CONNECT, "1", ANY_KEY, EXIT], ["y"])

        mock_run.assert_called_once_with(["ssh", "o'brien@10.0.0.5", "-p", "22"], check=False)
        assert "SSH session ended (exit status 0)" in terminal.output

    def test_no_targets(self, temp_config_dir: Path, make_terminal: type) -> None:
        """Test the message shown when the registry is empty."""
        session = Session.open(ConfigStore(temp_config_dir / "config.json"))
        terminal = run_app(session, make_terminal, [CONNECT, ANY_KEY, EXIT], ["y"])
        assert "No targets available." in terminal.lines


class TestAddEditDelete:
    """Tests for the editing flows."""

    def test_add_target(self, session: Session, make_terminal: type) -> None:
        """Test that a new target is stored and persisted."""
        run_app(
            session,
            make_terminal,
            [ADD, ANY_KEY, EXIT],
            ["2", "cache", "10.0.0.9", "", "ops", "n", "y"],
        )

        added = session.registry.get(2)
        assert added.name == "cache"
        assert added.port == 22
        assert stored_ids(session) == [1, 2, 3]

    def test_add_cancelled(self, session: Session, make_terminal: type) -> None:
        """Test that cancelling the form stores nothing."""
        run_app(session, make_terminal, [ADD, EXIT], ["2", "!cancel", "y"])
        assert [t.id for t in session.registry.list()] == [1, 3]

    def test_edit_target(self, session: Session, make_terminal: type) -> None:
        """Test renaming a target and changing its id."""
        run_app(
            session,
            make_terminal,
            [EDIT, "1", ANY_KEY, EXIT],
            ["9", "renamed", "", "", "", "", "y"],
        )

        edited = session.registry.get(9)
        assert edited.name == "renamed"
        assert edited.host == "10.0.0.5"
        assert stored_ids(session) == [3, 9]

    def test_delete_confirmed(self, session: Session, make_terminal: type) -> None:
        """Test deleting the selected target."""
        terminal = run_app(session, make_terminal, [DELETE, "1", ANY_KEY, EXIT], ["y", "y"])
        assert [t.id for t in session.registry.list()] == [3]
        assert stored_ids(session) == [3]
        assert "Delete target 'root@10.0.0.5:22', Confirm?" in terminal.output

    def test_delete_declined(self, session: Session, make_terminal: type) -> None:
        """Test that declining the confirmation keeps the target."""
        run_app(session, make_terminal, [DELETE, "1", EXIT], ["n", "y"])
        assert len(session.registry) == 2


class TestStaleSelection:
    """Tests for target lists that change while a menu is open."""

    def test_changed_target_redraws(self, session: Session, make_terminal: type) -> None:
        """Test that a row now holding another target is not acted on blindly."""
        terminal = make_terminal(keys=[DELETE, "enter", "enter", ANY_KEY, EXIT], lines=["y", "y"])
        before_key(terminal, 2, lambda: session.registry.remove(1))

        SshHubApp(session, terminal).run()

        assert terminal.keys == []
        assert terminal.lines.count("Select Target to Delete (Press ESC to cancel)") == 2
        assert "Delete target 'admin@db.internal:2200', Confirm?" in terminal.output
        assert len(session.registry) == 0
        assert stored_ids(session) == []

    def test_vanished_row_redraws(self, session: Session, make_terminal: type) -> None:
        """Test that selecting a row past the end of the current list redraws."""
        terminal = make_terminal(keys=[DELETE, "down", "enter", "esc", EXIT], lines=["y"])
        before_key(terminal, 3, lambda: session.registry.remove(3))

        SshHubApp(session, terminal).run()

        assert terminal.keys == []
        assert terminal.inputs == []
        assert terminal.lines.count("Select Target to Delete (Press ESC to cancel)") == 2
        assert "> ID: 1, Name: web, root @10.0.0.5 :22" in terminal.lines
        assert stored_ids(session) == [1]


class TestSettings:
    """Tests for listing and the exec template."""

    def test_list_targets(self, session: Session, make_terminal: type) -> None:
        """Test the plain target listing."""
        terminal = run_app(session, make_terminal, [LIST, "1", ANY_KEY, EXIT], ["y"])
        assert (
            "ID: 3, Name: db, IP: db.internal, Port: 2200, Username: admin, ScanOnline: True"
            in terminal.lines
        )

    def test_list_settings_shows_json(self, session: Session, make_terminal: type) -> None:
        """Test that the settings view prints the stored document."""
        terminal = run_app(session, make_terminal, [LIST, "2", ANY_KEY, EXIT], ["y"])
        assert '  "exec": "ssh {$Username}@{$IP} -p {$Port}",' in terminal.lines

    def test_edit_exec(self, session: Session, make_terminal: type) -> None:
        """Test replacing the exec template after an empty attempt."""
        terminal = run_app(
            session, make_terminal, [EXEC, ANY_KEY, EXIT], ["", "mosh {$Username}@{$IP}", "y"]
        )

        assert session.registry.exec_template == "mosh {$Username}@{$IP}"
        assert "Done!!" in terminal.lines
        assert any(line.startswith("Input cannot be empty") for line in terminal.lines)
        data = json.loads(session.store.path.read_text())
        assert data["exec"] == "mosh {$Username}@{$IP}"

    @pytest.mark.parametrize("sentinel", ["!cancel", "!Cancel"])
    def test_edit_exec_cancel(self, session: Session, make_terminal: type, sentinel: str) -> None:
        """Test that cancelling keeps the old template."""
        run_app(session, make_terminal, [EXEC, EXIT], [sentinel, "y"])
        assert session.registry.exec_template == "ssh {$Username}@{$IP} -p {$Port}"
