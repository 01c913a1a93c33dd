"""Configuration management commands for sshhub.

This module provides CLI commands for viewing and managing
the sshhub configuration file.
"""

from __future__ import annotations

import click

from sshhub.cli.context import Context, pass_context
from sshhub.core.exceptions import ConfigurationError
from sshhub.core.launcher import PLACEHOLDERS
from sshhub.utils.output import (
    OutputFormat,
    OutputFormatter,
    console,
    print_error,
    print_info,
    print_success,
)


@click.group()
def config() -> None:
    """Manage sshhub configuration.

    Commands for viewing and validating the configuration file
    and changing the launch command template.
    """


@config.command("show")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format.",
)
@pass_context
def config_show(ctx: Context, fmt: str) -> None:
    """Show current configuration.

    Examples:

        $ sshhub config show

        $ sshhub config show --format yaml
    """
    session = ctx.init_session()
    data = session.registry.snapshot().to_dict()

    OutputFormatter(OutputFormat(fmt)).print_dict(data)
    console.print(f"\n[dim]Config file: {session.store.path}[/dim]")


@config.command("validate")
@pass_context
def config_validate(ctx: Context) -> None:
    """Validate the configuration file.

    Checks that the configuration file exists and contains
    a valid target list.

    Examples:

        $ sshhub config validate
    """
    store = ctx.init_store()

    if not store.exists:
        print_error(f"Configuration file not found: {store.path}")
        print_info("Run 'sshhub' once to create a default config.")
        raise SystemExit(1)

    try:
        registry = store.load()
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    print_success(f"Configuration is valid: {store.path}")
    console.print(f"  Targets: {len(registry.targets)}")
    console.print(f"  Exec: {registry.exec_template}", markup=False)


@config.command("path")
@pass_context
def config_path(ctx: Context) -> None:
    """Show the configuration file path.

    Examples:

        $ sshhub config path
    """
    store = ctx.init_store()
    console.print(str(store.path))

    if store.exists:
        console.print("[dim](file exists)[/dim]")
    else:
        console.print("[dim](file does not exist)[/dim]")


@config.command("set-exec")
@click.argument("template")
@pass_context
def config_set_exec(ctx: Context, template: str) -> None:
    """Change the command used to launch a session.

    TEMPLATE may use the placeholders {$IP}, {$Port} and {$Username}.

    Examples:

        $ sshhub config set-exec 'ssh -A {$Username}@{$IP} -p {$Port}'
    """
    session = ctx.init_session()

    try:
        session.registry.set_exec_template(template)
    except ValueError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    print_success("Exec template updated")
    if not any(p in template for p in PLACEHOLDERS):
        print_info("Template uses no placeholders: " + ", ".join(PLACEHOLDERS))
