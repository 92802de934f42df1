"""Cloning tables: per-object registries of slot key -> cloning policy.

Two variants share one interface. Which one a hierarchy uses is fixed when
the configuration is compiled; ``clone()`` then implements how the table is
propagated to each new object.

Usage:
    table = CopyingCloningTable()
    table.declare("items", shallow_copy)
    child = table.clone()      # independent copy of every entry
    child.declare("extra", deep_copy)
    assert "extra" not in table
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from protoclone.core.types import CloningPolicy, SlotKey


class CloningTable(ABC):
    """Registry of explicit per-slot cloning policies.

    Children only ever add entries to their own table; a parent's entries are
    never removed or replaced through a child.
    """

    def __init__(self) -> None:
        self._entries: dict[SlotKey, CloningPolicy] = {}

    def declare(self, key: SlotKey, policy: CloningPolicy) -> None:
        """Record the cloning policy for a slot in this table.

        Args:
            key: Slot key.
            policy: Policy applied to the slot's value at clone time.
        """
        self._entries[key] = policy

    @abstractmethod
    def lookup(self, key: SlotKey) -> CloningPolicy | None:
        """Resolve the explicit policy for a slot.

        Args:
            key: Slot key.

        Returns:
            The declared policy, or None if the slot was never declared.
        """
        ...

    @abstractmethod
    def clone(self) -> CloningTable:
        """Produce the table for a new clone of the owning object."""
        ...

    def __contains__(self, key: object) -> bool:
        return self.lookup(key) is not None  # type: ignore[arg-type]

    def __getitem__(self, key: SlotKey) -> CloningPolicy:
        policy = self.lookup(key)
        if policy is None:
            raise KeyError(key)
        return policy

    def __setitem__(self, key: SlotKey, policy: CloningPolicy) -> None:
        self.declare(key, policy)

    def own_keys(self) -> Iterator[SlotKey]:
        """Iterate over keys declared directly in this table."""
        return iter(self._entries)


class CopyingCloningTable(CloningTable):
    """Table owning an independent mapping, copied eagerly on clone."""

    def lookup(self, key: SlotKey) -> CloningPolicy | None:
        return self._entries.get(key)

    def clone(self) -> CopyingCloningTable:
        """Copy every entry into a fresh table.

        Returns:
            New table sharing no state with this one.
        """
        table = CopyingCloningTable()
        table._entries.update(self._entries)
        return table


class DelegatingCloningTable(CloningTable):
    """Table holding overrides only, falling back to a parent table.

    Args:
        parent: Table consulted for keys not declared here.
    """

    def __init__(self, parent: DelegatingCloningTable | None = None) -> None:
        super().__init__()
        self._parent = parent

    @property
    def parent(self) -> DelegatingCloningTable | None:
        """Table this one delegates to, None at the root."""
        return self._parent

    def lookup(self, key: SlotKey) -> CloningPolicy | None:
        table: DelegatingCloningTable | None = self
        while table is not None:
            policy = table._entries.get(key)
            if policy is not None:
                return policy
            table = table._parent
        return None

    def clone(self) -> DelegatingCloningTable:
        """Create an empty table delegating to this one.

        Returns:
            New table; later declarations here stay visible through it.
        """
        return DelegatingCloningTable(parent=self)
