"""Object metadata and where it is kept.

Delegation and protection need a small record per object: the parent to fall
back to on read misses and the guard consulted on writes. The record lives in
one of three stores, chosen once per configuration:

- ColocatedMetadata: in the object's own slots under ``META_SLOT``. No side
  structure, but the key shows up among the object's slots.
- WeakMetadata: in a WeakKeyDictionary keyed by object identity. Keeps the
  slot namespace clean and never keeps an object alive.
- SharedMetadata: one record for the whole hierarchy. Only valid when no
  record carries per-object data (protection without delegation).
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from protoclone.core.policy.operations import no_copy
from protoclone.core.types import SlotKey
from protoclone.runtime.object import META_SLOT, cloning_table_of, own_slots

if TYPE_CHECKING:
    from protoclone.runtime.object import ProtoObject
    from protoclone.tables import CloningTable

type WriteGuard = Callable[[ProtoObject, SlotKey], bool]
"""Signature: (object, key) -> True if the write may proceed."""


@dataclass(slots=True)
class ObjectMeta:
    """Per-object delegation and protection metadata."""

    parent: ProtoObject | None = None
    """Object consulted when a read misses the object's own slots."""

    guard: WriteGuard | None = None
    """Predicate every write must pass."""


def guard_declared_slots(obj: ProtoObject, key: SlotKey) -> bool:
    """Allow writes only to slots declared in the object's cloning table.

    Args:
        obj: Object being written.
        key: Slot key being written.

    Returns:
        True if the key has a cloning table entry.
    """
    return key in cloning_table_of(obj)


class MetadataStore(ABC):
    """Where ObjectMeta records are kept for one prototype hierarchy."""

    def reserve(self, table: CloningTable) -> None:
        """Prepare the root cloning table for this store. No-op by default."""

    def prepare(self, slots: dict[SlotKey, Any], meta: ObjectMeta) -> None:
        """Place metadata into a draft slot dict before the object exists."""

    def attach(self, obj: ProtoObject, meta: ObjectMeta) -> None:
        """Associate metadata with a newly built object."""

    @abstractmethod
    def get(self, obj: ProtoObject) -> ObjectMeta | None:
        """Look up the metadata of an object."""
        ...


class ColocatedMetadata(MetadataStore):
    """Metadata stored in the object's own slots."""

    def reserve(self, table: CloningTable) -> None:
        # Every clone gets freshly wired metadata, never a propagated one.
        table.declare(META_SLOT, no_copy)

    def prepare(self, slots: dict[SlotKey, Any], meta: ObjectMeta) -> None:
        slots[META_SLOT] = meta

    def get(self, obj: ProtoObject) -> ObjectMeta | None:
        return own_slots(obj).get(META_SLOT)


class WeakMetadata(MetadataStore):
    """Metadata stored in a side-record weakly keyed by object identity."""

    def __init__(self) -> None:
        self._records: weakref.WeakKeyDictionary[ProtoObject, ObjectMeta] = (
            weakref.WeakKeyDictionary()
        )

    def attach(self, obj: ProtoObject, meta: ObjectMeta) -> None:
        self._records[obj] = meta

    def get(self, obj: ProtoObject) -> ObjectMeta | None:
        return self._records.get(obj)

    def __len__(self) -> int:
        return len(self._records)


class SharedMetadata(MetadataStore):
    """Single metadata record shared by every object of the hierarchy.

    Args:
        meta: The shared record.
    """

    def __init__(self, meta: ObjectMeta) -> None:
        self._meta = meta

    def get(self, obj: ProtoObject) -> ObjectMeta | None:
        return self._meta
