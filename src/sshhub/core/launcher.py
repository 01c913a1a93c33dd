"""Launching an SSH session for a target.

The exec template is rendered with the target's values, split into an
executable and its argument string, and handed to a CommandRunner which
runs the process in the foreground until it exits.
"""

from __future__ import annotations

import shlex
import subprocess
from typing import Protocol

from sshhub.core.exceptions import LaunchError
from sshhub.models.target import Target
from sshhub.utils.logging import get_logger

logger = get_logger("launcher")

PLACEHOLDERS = {
    "{$IP}": "Configured host",
    "{$Port}": "Configured port",
    "{$Username}": "Configured username",
}


class CommandRunner(Protocol):
    """Runs an external command and returns its exit status."""

    def run(self, executable: str, args: str) -> int: ...


def render_command(template: str, target: Target) -> str:
    """Substitute target values into an exec template.

    Example:
        >>> render_command("ssh {$Username}@{$IP} -p {$Port}", target)
        'ssh u@h -p 2200'
    """
    return (
        template.replace("{$IP}", target.host)
        .replace("{$Port}", str(target.port))
        .replace("{$Username}", target.username)
    )


def split_command(command: str) -> tuple[str, str]:
    """Split a command line into executable and argument string.

    Args:
        command: Rendered command line.

    Returns:
        Tuple of (executable, remaining arguments).

    Raises:
        LaunchError: If the command is empty.
    """
    parts = command.split(None, 1)
    if not parts:
        raise LaunchError(command, "command is empty")
    return parts[0], parts[1] if len(parts) > 1 else ""


def split_args(args: str) -> list[str]:
    """Tokenize an argument string for exec without a shell.

    Quotes group words as in a POSIX shell, but backslashes are kept
    literally so paths like ``C:\\keys\\id`` reach the program unchanged.
    A lone quote (e.g. in a username like ``o'brien``) cannot open a
    group, so unbalanced input is split on whitespace only.

    Example:
        >>> split_args("u@h -o 'ProxyCommand=nc %h %p'")
        ['u@h', '-o', 'ProxyCommand=nc %h %p']
        >>> split_args("o'brien@h -p 22")
        ["o'brien@h", '-p', '22']
    """
    lexer = shlex.shlex(args, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    try:
        return list(lexer)
    except ValueError as e:
        logger.debug(f"Unbalanced quotes in {args!r} ({e}), splitting on whitespace")
        return args.split()


class SubprocessRunner:
    """CommandRunner that starts a real process attached to this terminal."""

    def run(self, executable: str, args: str) -> int:
        """Run executable with args and wait for it to exit.

        Raises:
            LaunchError: If the executable cannot be started.
        """
        argv = [executable, *split_args(args)]
        logger.debug(f"Running {argv}")
        try:
            completed = subprocess.run(argv, check=False)
        except FileNotFoundError as e:
            raise LaunchError(executable, "executable not found") from e
        except OSError as e:
            raise LaunchError(executable, str(e)) from e
        logger.info(f"{executable} exited with status {completed.returncode}")
        return completed.returncode


def launch(template: str, target: Target, runner: CommandRunner) -> int:
    """Render the template for target and run it.

    Returns:
        Exit status of the launched process.
    """
    command = render_command(template, target)
    executable, args = split_command(command)
    logger.info(f"Launching session to {target.address}: {command}")
    return runner.run(executable, args)
