"""Configuration storage for sshhub.

This module persists the target registry as a JSON document:
- Pydantic validation of the stored record
- Deterministic output with targets ordered by id
- Automatic directory creation

The default config location is ~/.sshhub/config.json, which can be
overridden with the SSHHUB_CONFIG environment variable.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from sshhub.core.exceptions import ConfigIOError, CorruptConfigError
from sshhub.models.target import Registry
from sshhub.utils.logging import get_logger

logger = get_logger("config")

DEFAULT_PROBE_TIMEOUT_MS = 600


def get_default_config_path() -> Path:
    """Get the default configuration file path.

    The path can be overridden by setting the SSHHUB_CONFIG
    environment variable.

    Returns:
        Path to the configuration file.
    """
    env_path = os.environ.get("SSHHUB_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".sshhub" / "config.json"


def dump_registry(registry: Registry) -> str:
    """Serialize a registry to its stored JSON text.

    Args:
        registry: Registry to serialize.

    Returns:
        Indented JSON with targets in ascending id order.
    """
    return json.dumps(registry.to_dict(), indent=2, ensure_ascii=False) + "\n"


class ConfigStore:
    """Reads and writes the registry JSON file.

    Args:
        path: Optional path to config file. Uses default if not specified.

    Attributes:
        path: Path to the configuration file.

    Example:
        >>> store = ConfigStore()
        >>> registry = store.load()
        >>> store.save(registry)
    """

    def __init__(self, path: Path | str | None = None) -> None:
        if path is None:
            self.path = get_default_config_path()
        else:
            self.path = Path(path).expanduser()

    @property
    def exists(self) -> bool:
        """Whether the config file is present on disk."""
        return self.path.exists()

    def load(self) -> Registry:
        """Load and validate the registry from file.

        Returns:
            The stored Registry, or an empty default one if the file is absent.

        Raises:
            CorruptConfigError: If the file cannot be parsed into a Registry.
        """
        if not self.path.exists():
            logger.debug(f"No config at {self.path}, using empty registry")
            return Registry()

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise CorruptConfigError(str(self.path), str(e)) from e

        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            raise CorruptConfigError(str(self.path), f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CorruptConfigError(str(self.path), "expected a JSON object")

        try:
            registry = Registry.model_validate(data)
        except ValidationError as e:
            raise CorruptConfigError(
                str(self.path), f"{e.error_count()} validation error(s)"
            ) from e

        logger.debug(f"Loaded {len(registry.targets)} target(s) from {self.path}")
        return registry

    def save(self, registry: Registry) -> None:
        """Write the registry to file.

        Args:
            registry: Registry to persist.

        Raises:
            ConfigIOError: If writing fails.
        """
        text = dump_registry(registry)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(text, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise ConfigIOError(str(self.path), str(e)) from e

        logger.debug(f"Saved {len(registry.targets)} target(s) to {self.path}")

    def quarantine(self) -> Path:
        """Move an unreadable config file aside so it is not overwritten.

        Returns:
            The path the file was moved to.

        Raises:
            ConfigIOError: If the file cannot be renamed.
        """
        target = self.path.with_name(self.path.name + ".corrupt")
        try:
            self.path.replace(target)
        except OSError as e:
            raise ConfigIOError(str(self.path), str(e)) from e
        logger.warning(f"Moved unreadable config to {target}")
        return target
