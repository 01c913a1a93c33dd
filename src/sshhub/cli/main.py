"""Main CLI entry point for sshhub.

This module defines the main CLI group and global options that are
shared across all commands. Run without a subcommand to open the
interactive menu.
"""

from __future__ import annotations

import os
import sys

import click
from rich.console import Console

from sshhub import __version__
from sshhub.cli.config_cmd import config
from sshhub.cli.context import Context, pass_context
from sshhub.cli.targets import targets
from sshhub.core.config import DEFAULT_PROBE_TIMEOUT_MS, get_default_config_path
from sshhub.core.exceptions import CorruptConfigError, RegistryError, SshhubError
from sshhub.core.launcher import launch, render_command
from sshhub.core.session import Session
from sshhub.ui.app import SshHubApp
from sshhub.ui.terminal import RichTerminal
from sshhub.utils.logging import configure_logging, get_logger
from sshhub.utils.output import error_console, print_error, print_info, print_warning

logger = get_logger("cli")


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console = Console()
    console.print(f"sshhub version [cyan]{__version__}[/cyan]")
    ctx.exit()


def open_interactive_session(ctx: Context) -> Session:
    """Load the session for the interactive menu.

    A missing config is created with defaults. A corrupt one is moved
    aside and the session starts from an empty registry.
    """
    store = ctx.init_store()
    try:
        session = ctx.init_session()
    except CorruptConfigError as e:
        print_error(str(e))
        moved_to = store.quarantine()
        print_warning(f"Starting with an empty registry; old file kept at {moved_to}")
        session = Session.open(store, probe_timeout=ctx.probe_timeout_ms / 1000)
        ctx.session = session

    if not store.exists:
        store.save(session.registry.snapshot())
        logger.info(f"Created default configuration at {store.path}")
    return session


@click.group(invoke_without_command=True)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v, -vv for more).",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show full error tracebacks.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="SSHHUB_CONFIG",
    help=f"Path to config file (default: {get_default_config_path()}).",
)
@click.option(
    "--probe-timeout",
    type=click.IntRange(min=1),
    default=DEFAULT_PROBE_TIMEOUT_MS,
    envvar="SSHHUB_PROBE_TIMEOUT",
    show_default=True,
    help="Online status probe timeout in milliseconds.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    envvar="SSHHUB_LOG_FILE",
    help="Also write debug logs to this file.",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def cli(
    click_ctx: click.Context,
    verbose: int,
    debug: bool,
    config_path: str | None,
    probe_timeout: int,
    log_file: str | None,
) -> None:
    """sshhub - Pick an SSH target from a menu and connect.

    Run without a command to open the interactive menu: select
    targets with the arrow keys or 1-9, see which ones are online,
    and add, edit or delete targets.

    Examples:

        # Open the interactive menu

        $ sshhub

        # List targets with their online status

        $ sshhub targets list --scan

        # Connect to target 3 directly

        $ sshhub connect 3
    """
    ctx = click_ctx.ensure_object(Context)
    ctx.verbose = verbose
    ctx.debug = debug
    ctx.probe_timeout_ms = probe_timeout

    configure_logging(
        verbosity=verbose,
        log_file=log_file,
        interactive=click_ctx.invoked_subcommand is None,
    )

    if config_path:
        ctx.init_store(config_path)

    if click_ctx.invoked_subcommand is None:
        session = open_interactive_session(ctx)
        SshHubApp(session, RichTerminal()).run()


@cli.command("connect")
@click.argument("target_id", type=int)
@pass_context
def connect(ctx: Context, target_id: int) -> None:
    """Connect to a target without opening the menu.

    TARGET_ID is the numeric id of the target.

    Examples:

        $ sshhub connect 1
    """
    session = ctx.init_session()
    registry = session.registry

    try:
        target = registry.get(target_id)
    except RegistryError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    print_info(f"Running {render_command(registry.exec_template, target)}")
    exit_code = launch(registry.exec_template, target, session.runner)
    raise SystemExit(exit_code)


# Register subcommand groups
cli.add_command(targets)
cli.add_command(config)


def main() -> None:
    """Main entry point with error handling."""
    try:
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        error_console.print("[dim]Aborted[/dim]")
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except SshhubError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        error_console.print("\n[dim]Interrupted[/dim]")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("SSHHUB_DEBUG") or "--debug" in sys.argv:
            import traceback

            traceback.print_exc()
        else:
            print_error(f"Unexpected error: {e}")
            error_console.print("[dim]Use --debug for full traceback[/dim]")
        sys.exit(1)


if __name__ == "__main__":
    main()
