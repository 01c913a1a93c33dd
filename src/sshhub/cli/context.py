"""CLI context for sshhub.

This module defines the shared context object passed to all CLI commands,
extracted to avoid circular imports.
"""

from __future__ import annotations

from pathlib import Path

import click

from sshhub.core.config import DEFAULT_PROBE_TIMEOUT_MS, ConfigStore
from sshhub.core.session import Session


class Context:
    """CLI context object passed to all commands.

    Holds shared state including the config store, the session,
    and CLI options like verbosity and probe timeout.

    Attributes:
        store: ConfigStore instance.
        session: Session instance.
        verbose: Verbosity level.
        debug: Whether to show debug tracebacks.
        probe_timeout_ms: Probe timeout in milliseconds.
    """

    def __init__(self) -> None:
        self.store: ConfigStore | None = None
        self.session: Session | None = None
        self.verbose: int = 0
        self.debug: bool = False
        self.probe_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS

    def init_store(self, path: Path | str | None = None) -> ConfigStore:
        """Initialize the config store.

        Returns:
            ConfigStore instance.
        """
        if self.store is None:
            self.store = ConfigStore(path)
        return self.store

    def init_session(self) -> Session:
        """Load the registry and build the session.

        Returns:
            Session instance.

        Raises:
            CorruptConfigError: If the config file cannot be parsed.
        """
        if self.session is None:
            self.session = Session.open(
                self.init_store(),
                probe_timeout=self.probe_timeout_ms / 1000,
            )
        return self.session


pass_context = click.make_pass_decorator(Context, ensure=True)
