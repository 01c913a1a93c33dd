"""Session object shared by the interactive UI and CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from sshhub.core.config import ConfigStore
from sshhub.core.launcher import CommandRunner, SubprocessRunner
from sshhub.core.prober import Prober
from sshhub.core.registry import TargetRegistry


@dataclass
class Session:
    """Everything a running sshhub process operates on.

    Args:
        store: Persistence for the registry.
        registry: The loaded targets.
        prober: Online status checker.
        runner: Launcher for the exec command.
    """

    store: ConfigStore
    registry: TargetRegistry
    prober: Prober = field(default_factory=Prober)
    runner: CommandRunner = field(default_factory=SubprocessRunner)

    @classmethod
    def open(
        cls,
        store: ConfigStore,
        probe_timeout: float | None = None,
    ) -> Session:
        """Load the registry from store and build a session around it.

        Raises:
            CorruptConfigError: If the stored registry cannot be parsed.
        """
        registry = TargetRegistry(store.load(), store=store)
        prober = Prober(probe_timeout) if probe_timeout else Prober()
        return cls(store=store, registry=registry, prober=prober)
