"""Target models for sshhub.

This module defines the data models for SSH targets and the
registry record that is persisted to disk.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_EXEC_TEMPLATE = "ssh {$Username}@{$IP} -p {$Port}"
DEFAULT_PORT = 22


class ProbeResult(str, Enum):
    """Reachability of a target as seen by the prober."""

    ONLINE = "Online"
    OFFLINE = "Offline"
    ERROR = "Error"
    NOT_SCANNED = "NotScanned"

    @property
    def color(self) -> str:
        """Rich color for this result.

        Returns:
            Color name for Rich console output.
        """
        colors = {
            ProbeResult.ONLINE: "green",
            ProbeResult.OFFLINE: "bright_red",
            ProbeResult.ERROR: "red",
            ProbeResult.NOT_SCANNED: "dim",
        }
        return colors.get(self, "white")

    @property
    def symbol(self) -> str:
        """Status symbol for this result."""
        symbols = {
            ProbeResult.ONLINE: "●",
            ProbeResult.OFFLINE: "○",
            ProbeResult.ERROR: "✗",
            ProbeResult.NOT_SCANNED: "-",
        }
        return symbols.get(self, "?")


class Target(BaseModel):
    """A single SSH destination.

    Args:
        id: User-assigned identifier, unique within a registry.
        name: Display name.
        host: Hostname or IP address.
        port: SSH port number.
        username: Login name.
        scan_online: Whether the prober checks this target.

    Example:
        >>> target = Target(
        ...     id=1,
        ...     name="web",
        ...     host="10.0.0.5",
        ...     username="root",
        ... )
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: int = Field(description="Unique target id")
    name: Annotated[str, Field(min_length=1, description="Display name")]
    host: Annotated[str, Field(min_length=1, description="IP address or hostname")]
    port: Annotated[int, Field(ge=1, le=65535)] = Field(
        default=DEFAULT_PORT, description="SSH port"
    )
    username: Annotated[str, Field(min_length=1, description="SSH username")]
    scan_online: bool = Field(
        default=False, alias="scanOnline", description="Probe this target"
    )

    @property
    def address(self) -> str:
        """Connection string like ``user@host:port``."""
        return f"{self.username}@{self.host}:{self.port}"

    @property
    def display_name(self) -> str:
        """Single-line description used in menus."""
        return (
            f"ID: {self.id}, Name: {self.name}, "
            f"{self.username} @{self.host} :{self.port}"
        )

    def to_dict(self) -> dict:
        """Convert to the persisted dictionary form."""
        return self.model_dump(by_alias=True)


class Registry(BaseModel):
    """All configured targets plus the launch command template.

    Args:
        exec_template: Command template with {$IP}, {$Port} and
            {$Username} placeholders.
        targets: Configured targets.
    """

    model_config = ConfigDict(populate_by_name=True)

    exec_template: Annotated[str, Field(min_length=1)] = Field(
        default=DEFAULT_EXEC_TEMPLATE, alias="exec", description="Launch template"
    )
    targets: list[Target] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> Registry:
        """Reject registries that contain the same id twice."""
        seen: set[int] = set()
        for target in self.targets:
            if target.id in seen:
                raise ValueError(f"duplicate target id {target.id}")
            seen.add(target.id)
        return self

    def sorted(self) -> Registry:
        """Return a copy with targets ordered by ascending id."""
        return Registry(
            exec_template=self.exec_template,
            targets=sorted(
                (t.model_copy() for t in self.targets), key=lambda t: t.id
            ),
        )

    def to_dict(self) -> dict:
        """Convert to the persisted dictionary form, targets ordered by id."""
        return self.sorted().model_dump(by_alias=True)
