"""In-memory target registry with write-through persistence.

The registry owns the session's targets and exec template. Every
mutation is checked against the id uniqueness invariant, applied under
a lock, and saved through the attached ConfigStore. A failed save rolls
the in-memory state back so memory and disk never diverge.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from sshhub.core.exceptions import DuplicateIDError, TargetNotFoundError
from sshhub.models.target import Registry, Target
from sshhub.utils.logging import get_logger

if TYPE_CHECKING:
    from sshhub.core.config import ConfigStore

logger = get_logger("registry")


class TargetRegistry:
    """Holds the configured targets and enforces their invariants.

    Args:
        registry: Initial registry state, usually from ConfigStore.load().
        store: Optional store that receives every successful mutation.

    Example:
        >>> registry = TargetRegistry(Registry(), store=ConfigStore())
        >>> registry.add(Target(id=1, name="web", host="10.0.0.5", username="root"))
        >>> [t.id for t in registry.list()]
        [1]
    """

    def __init__(
        self,
        registry: Registry | None = None,
        store: ConfigStore | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._state = (registry or Registry()).sorted()
        self.store = store

    def _find_index(self, target_id: int) -> int | None:
        for i, target in enumerate(self._state.targets):
            if target.id == target_id:
                return i
        return None

    def _commit(self, new_state: Registry) -> None:
        """Swap in a new state and persist it, restoring the old one on failure."""
        old_state = self._state
        self._state = new_state.sorted()
        if self.store is None:
            return
        try:
            self.store.save(self._state)
        except Exception:
            self._state = old_state
            raise

    def add(self, candidate: Target) -> Target:
        """Add a new target.

        Args:
            candidate: Target to insert.

        Returns:
            A copy of the stored target.

        Raises:
            DuplicateIDError: If a target with the same id exists.
            ConfigIOError: If persisting the change fails.
        """
        with self._lock:
            if self._find_index(candidate.id) is not None:
                raise DuplicateIDError(candidate.id)

            stored = candidate.model_copy()
            self._commit(
                Registry(
                    exec_template=self._state.exec_template,
                    targets=[*self._state.targets, stored],
                )
            )
            logger.info(f"Added target {stored.id} ({stored.address})")
            return stored.model_copy()

    def update(self, target_id: int, mutator: Callable[[Target], None]) -> Target:
        """Change an existing target.

        The mutator receives a copy of the target and edits it in place;
        the result replaces the original only if it is valid and its id
        does not collide with another target.

        Args:
            target_id: Id of the target to change.
            mutator: Callable applying the field changes.

        Returns:
            A copy of the updated target.

        Raises:
            TargetNotFoundError: If no target has target_id.
            DuplicateIDError: If the new id belongs to another target.
            ConfigIOError: If persisting the change fails.
        """
        with self._lock:
            index = self._find_index(target_id)
            if index is None:
                raise TargetNotFoundError(target_id)

            draft = self._state.targets[index].model_copy()
            mutator(draft)
            updated = Target.model_validate(draft.model_dump())

            other = self._find_index(updated.id)
            if other is not None and other != index:
                raise DuplicateIDError(updated.id)

            targets = list(self._state.targets)
            targets[index] = updated
            self._commit(
                Registry(exec_template=self._state.exec_template, targets=targets)
            )
            logger.info(f"Updated target {target_id} -> {updated.id} ({updated.address})")
            return updated.model_copy()

    def replace(self, target_id: int, candidate: Target) -> Target:
        """Replace a target with an edited candidate.

        Args:
            target_id: Id of the target being edited.
            candidate: New field values, possibly with a new id.

        Returns:
            A copy of the updated target.
        """

        def apply(draft: Target) -> None:
            for field in Target.model_fields:
                setattr(draft, field, getattr(candidate, field))

        return self.update(target_id, apply)

    def remove(self, target_id: int) -> None:
        """Remove a target.

        Args:
            target_id: Id of the target to remove.

        Raises:
            TargetNotFoundError: If no target has target_id.
            ConfigIOError: If persisting the change fails.
        """
        with self._lock:
            index = self._find_index(target_id)
            if index is None:
                raise TargetNotFoundError(target_id)

            targets = [t for i, t in enumerate(self._state.targets) if i != index]
            self._commit(
                Registry(exec_template=self._state.exec_template, targets=targets)
            )
            logger.info(f"Removed target {target_id}")

    def get(self, target_id: int) -> Target:
        """Get a copy of a target by id.

        Raises:
            TargetNotFoundError: If no target has target_id.
        """
        with self._lock:
            index = self._find_index(target_id)
            if index is None:
                raise TargetNotFoundError(target_id)
            return self._state.targets[index].model_copy()

    def list(self) -> list[Target]:
        """Snapshot of all targets in ascending id order."""
        with self._lock:
            return [t.model_copy() for t in sorted(self._state.targets, key=lambda t: t.id)]

    @property
    def exec_template(self) -> str:
        """Command template used to launch a session."""
        return self._state.exec_template

    def set_exec_template(self, template: str) -> None:
        """Replace the exec template.

        Args:
            template: New template; surrounding whitespace is removed.

        Raises:
            ValueError: If the template is empty.
            ConfigIOError: If persisting the change fails.
        """
        template = template.strip()
        if not template:
            raise ValueError("Exec template cannot be empty")
        with self._lock:
            self._commit(
                Registry(exec_template=template, targets=list(self._state.targets))
            )
            logger.info(f"Exec template set to '{template}'")

    def snapshot(self) -> Registry:
        """Copy of the whole registry, targets ordered by id."""
        with self._lock:
            return self._state.sorted()

    def __len__(self) -> int:
        with self._lock:
            return len(self._state.targets)
