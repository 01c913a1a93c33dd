"""Rich terminal output utilities for sshhub.

This module provides formatted output using the Rich library,
including target tables, a scan spinner, and color-coded status.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

import yaml
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from sshhub.models.target import ProbeResult, Target

# Global console instance
console = Console()
error_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Supported output formats."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


class OutputFormatter:
    """Handles formatting and outputting data in various formats.

    Args:
        format_type: Output format to use (table, json, yaml).
        output_console: Rich console instance for output.

    Example:
        >>> formatter = OutputFormatter(OutputFormat.TABLE)
        >>> formatter.print_targets(registry.list())
    """

    def __init__(
        self,
        format_type: OutputFormat = OutputFormat.TABLE,
        output_console: Console | None = None,
    ) -> None:
        self.format_type = format_type
        self.console = output_console or console

    def print_targets(
        self,
        targets: list[Target],
        status: Mapping[int, ProbeResult] | None = None,
    ) -> None:
        """Print a list of targets.

        Args:
            targets: Targets to display.
            status: Optional probe results keyed by target id.
        """
        if self.format_type == OutputFormat.TABLE:
            self.console.print(targets_table(targets, status))
            return

        data = []
        for target in targets:
            entry = target.to_dict()
            if status is not None and target.id in status:
                entry["status"] = status[target.id].value
            data.append(entry)
        self._print_data(data)

    def print_dict(self, data: dict[str, Any], title: str | None = None) -> None:
        """Print a dictionary in the configured format.

        Args:
            data: Dictionary to display.
            title: Optional title for table format.
        """
        if self.format_type != OutputFormat.TABLE:
            self._print_data(data)
            return

        table = Table(title=title, show_header=True)
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="white")
        for key, value in data.items():
            table.add_row(str(key), str(value))
        self.console.print(table)

    def _print_data(self, data: Any) -> None:
        if self.format_type == OutputFormat.JSON:
            self.console.print_json(json.dumps(data, indent=2, default=str))
        else:
            self.console.print(
                yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
                markup=False,
            )


def targets_table(
    targets: list[Target],
    status: Mapping[int, ProbeResult] | None = None,
) -> Table:
    """Build a Rich table of targets, with a status column when probed."""
    table = Table(title="Targets", show_header=True)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Host", style="white")
    table.add_column("Port", justify="right", style="dim")
    table.add_column("Username", style="yellow")
    table.add_column("Scan", justify="center")
    if status is not None:
        table.add_column("Status", justify="center")

    for target in targets:
        row: list[str | Text] = [
            str(target.id),
            target.name,
            target.host,
            str(target.port),
            target.username,
            "y" if target.scan_online else "n",
        ]
        if status is not None:
            row.append(format_probe_result(status.get(target.id, ProbeResult.NOT_SCANNED)))
        table.add_row(*row)

    return table


def format_probe_result(result: ProbeResult) -> Text:
    """Format a probe result with color coding."""
    text = Text(f"{result.symbol} {result.value}")
    text.stylize(result.color)
    return text


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def create_spinner_progress() -> Progress:
    """Create a simple spinner progress for indeterminate operations.

    Returns:
        Progress instance with just spinner and description.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
