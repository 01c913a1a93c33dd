"""Pytest configuration and fixtures for sshhub tests.

This module provides shared fixtures for testing sshhub components
including sample targets, temporary config files, and a scripted
terminal that replays key presses and typed lines.
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from sshhub.core.config import ConfigStore
from sshhub.core.registry import TargetRegistry
from sshhub.core.session import Session
from sshhub.models.target import Registry, Target
from sshhub.ui.keys import Key, KeyEvent

if TYPE_CHECKING:
    from collections.abc import Generator

    from click.testing import CliRunner
    from rich.text import Text


class ScriptedTerminal:
    """Terminal and Input that replay prepared keys and lines.

    Keys may be KeyEvents or the shorthands "up", "down", "enter",
    "esc" and "1"-"9". Everything written is kept in ``lines``.
    """

    def __init__(self, keys: Iterable[KeyEvent | str] = (), lines: Iterable[str] = ()) -> None:
        self.keys = [self._event(k) for k in keys]
        self.inputs = list(lines)
        self.lines: list[str] = []
        self.styles: list[str | None] = []
        self.prompts: list[str] = []
        self.clears = 0
        self.moves: list[int] = []

    @staticmethod
    def _event(key: KeyEvent | str) -> KeyEvent:
        if isinstance(key, KeyEvent):
            return key
        named = {"up": Key.UP, "down": Key.DOWN, "enter": Key.ENTER, "esc": Key.ESCAPE}
        if key in named:
            return KeyEvent(named[key])
        if key.isdigit():
            return KeyEvent.number(int(key))
        return KeyEvent(Key.OTHER)

    def clear(self) -> None:
        self.clears += 1

    def move_to(self, row: int) -> None:
        self.moves.append(row)

    def write_line(self, text: str | Text = "", style: str | None = None) -> None:
        self.lines.append(str(text))
        self.styles.append(style)

    def read_key(self) -> KeyEvent:
        if not self.keys:
            raise AssertionError("No more scripted keys")
        return self.keys.pop(0)

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise AssertionError(f"No more scripted input for prompt {prompt!r}")
        return self.inputs.pop(0)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class RecordingRunner:
    """CommandRunner that records calls instead of starting processes."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.calls: list[tuple[str, str]] = []

    def run(self, executable: str, args: str) -> int:
        self.calls.append((executable, args))
        return self.exit_code


@pytest.fixture
def sample_target() -> Target:
    """Create a sample Target for testing."""
    return Target(
        id=1,
        name="web",
        host="10.0.0.5",
        port=22,
        username="root",
        scan_online=False,
    )


@pytest.fixture
def sample_targets() -> list[Target]:
    """Create a list of sample targets, deliberately out of id order."""
    return [
        Target(id=3, name="db", host="db.internal", port=2200, username="admin", scan_online=True),
        Target(id=1, name="web", host="10.0.0.5", username="root"),
    ]


@pytest.fixture
def temp_config_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_data(sample_targets: list[Target]) -> dict:
    """Create sample configuration data."""
    return {
        "exec": "ssh {$Username}@{$IP} -p {$Port}",
        "targets": [t.to_dict() for t in sample_targets],
    }


@pytest.fixture
def temp_config_file(temp_config_dir: Path, sample_config_data: dict) -> Path:
    """Create a temporary config file with sample data."""
    config_path = temp_config_dir / "config.json"
    config_path.write_text(json.dumps(sample_config_data, indent=2))
    return config_path


@pytest.fixture
def config_store(temp_config_file: Path) -> ConfigStore:
    """Create a ConfigStore on the temporary config file."""
    return ConfigStore(temp_config_file)


@pytest.fixture
def registry(sample_targets: list[Target]) -> TargetRegistry:
    """Create an in-memory registry without a store."""
    return TargetRegistry(Registry(targets=sample_targets))


@pytest.fixture
def runner() -> RecordingRunner:
    """Create a recording command runner."""
    return RecordingRunner()


@pytest.fixture
def session(config_store: ConfigStore, runner: RecordingRunner) -> Session:
    """Create a session backed by the temporary config file."""
    session = Session.open(config_store, probe_timeout=0.2)
    session.runner = runner
    return session


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def make_terminal() -> type[ScriptedTerminal]:
    """Factory for scripted terminals: make_terminal(keys=[...], lines=[...])."""
    return ScriptedTerminal
