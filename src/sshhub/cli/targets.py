"""Target management commands for sshhub.

This module provides non-interactive CLI commands for managing
targets in the sshhub configuration.
"""

from __future__ import annotations

import click

from sshhub.cli.context import Context, pass_context
from sshhub.core.exceptions import RegistryError
from sshhub.models.target import DEFAULT_PORT, Target
from sshhub.utils.output import (
    OutputFormat,
    OutputFormatter,
    create_spinner_progress,
    print_error,
    print_info,
    print_success,
)


@click.group()
def targets() -> None:
    """Manage SSH targets.

    Commands for listing, adding, removing and probing targets
    without opening the interactive menu.
    """


@targets.command("list")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    help="Output format.",
)
@click.option(
    "--scan",
    "-s",
    is_flag=True,
    help="Probe targets that have online scanning enabled.",
)
@pass_context
def targets_list(ctx: Context, fmt: str, scan: bool) -> None:
    """List all configured targets.

    Examples:

        $ sshhub targets list

        $ sshhub targets list --scan

        $ sshhub targets list -f json
    """
    session = ctx.init_session()
    all_targets = session.registry.list()

    if not all_targets:
        print_info("No targets configured. Use 'sshhub targets add' to add a target.")
        return

    status = None
    if scan:
        with create_spinner_progress() as progress:
            progress.add_task("Scanning online status...", total=None)
            status = session.prober.probe_all(all_targets)

    OutputFormatter(OutputFormat(fmt)).print_targets(all_targets, status)


@targets.command("show")
@click.argument("target_id", type=int)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    help="Output format.",
)
@pass_context
def targets_show(ctx: Context, target_id: int, fmt: str) -> None:
    """Show details for a specific target.

    TARGET_ID is the numeric id of the target.
    """
    session = ctx.init_session()

    try:
        target = session.registry.get(target_id)
    except RegistryError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    OutputFormatter(OutputFormat(fmt)).print_dict(target.to_dict(), title=f"Target: {target.name}")


@targets.command("add")
@click.argument("target_id", type=int)
@click.argument("name")
@click.argument("host")
@click.option("--username", "-u", required=True, help="SSH username.")
@click.option(
    "--port",
    "-p",
    default=DEFAULT_PORT,
    type=click.IntRange(1, 65535),
    help=f"SSH port (default: {DEFAULT_PORT}).",
)
@click.option(
    "--scan/--no-scan",
    default=True,
    help="Include this target in online status scans.",
)
@pass_context
def targets_add(
    ctx: Context,
    target_id: int,
    name: str,
    host: str,
    username: str,
    port: int,
    scan: bool,
) -> None:
    """Add a new target.

    TARGET_ID is a unique number, NAME a display name and HOST the
    IP address or DNS name.

    Examples:

        $ sshhub targets add 1 web 10.0.0.5 -u root

        $ sshhub targets add 2 db db.internal -u admin -p 2200 --no-scan
    """
    session = ctx.init_session()

    try:
        target = Target(
            id=target_id,
            name=name,
            host=host,
            port=port,
            username=username,
            scan_online=scan,
        )
    except ValueError as e:
        print_error(f"Invalid target: {e}")
        raise SystemExit(1) from e

    try:
        session.registry.add(target)
    except RegistryError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    print_success(f"Added target {target_id} '{name}' ({target.address})")


@targets.command("remove")
@click.argument("target_id", type=int)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@pass_context
def targets_remove(ctx: Context, target_id: int, yes: bool) -> None:
    """Remove a target.

    Examples:

        $ sshhub targets remove 1

        $ sshhub targets remove 1 --yes
    """
    session = ctx.init_session()

    try:
        target = session.registry.get(target_id)
    except RegistryError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    if not yes:
        click.confirm(f"Remove target {target_id} ({target.address})?", abort=True)

    session.registry.remove(target_id)
    print_success(f"Removed target {target_id}")


@targets.command("probe")
@click.argument("target_ids", nargs=-1, type=int)
@pass_context
def targets_probe(ctx: Context, target_ids: tuple[int, ...]) -> None:
    """Check which targets accept TCP connections.

    Probes the given targets, or every target when no ids are given.
    The scan flag is ignored for targets named explicitly.

    Examples:

        $ sshhub targets probe

        $ sshhub targets probe 1 3
    """
    session = ctx.init_session()

    try:
        if target_ids:
            selected = [
                session.registry.get(i).model_copy(update={"scan_online": True})
                for i in target_ids
            ]
        else:
            selected = session.registry.list()
    except RegistryError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    if not selected:
        print_info("No targets configured.")
        return

    with create_spinner_progress() as progress:
        progress.add_task("Probing...", total=None)
        status = session.prober.probe_all(selected)

    OutputFormatter(OutputFormat.TABLE).print_targets(selected, status)
