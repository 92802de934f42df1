"""Specification compiler: Configuration -> CloneStrategy.

The structural flags are resolved once, into a fixed pipeline that every
``clone()`` call of the hierarchy runs:

    resolve policy -> apply policy -> propagate table -> wire metadata

Per-slot policy resolution order, highest priority first:
1. Explicit entry in the object's cloning table (``slot()``).
2. Per-type policy for the runtime type of the current value.
3. Configuration ``default`` (folded into 2 at compile time).

Usage:
    strategy = compile_configuration(Configuration(default=assignment_copy))
    root = strategy.new_root()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from protoclone.compiler.metadata import (
    ColocatedMetadata,
    MetadataStore,
    ObjectMeta,
    SharedMetadata,
    WeakMetadata,
    guard_declared_slots,
)
from protoclone.config.models import Configuration
from protoclone.core.errors import NoPolicyError
from protoclone.core.policy.operations import assignment_copy, no_copy
from protoclone.core.types import ABSENT, CloningPolicy, SlotKey, TypeTag, type_tag
from protoclone.runtime.object import ProtoObject, cloning_table_of, own_slots
from protoclone.tables import CloningTable, CopyingCloningTable, DelegatingCloningTable

logger = logging.getLogger(__name__)

type WiringStep = Callable[[ObjectMeta, ProtoObject | None], None]
"""Signature: (new_object_meta, source_or_None_for_root) -> None"""


def wire_delegation(meta: ObjectMeta, source: ProtoObject | None) -> None:
    """Make the source object the fallback for unresolved reads."""
    meta.parent = source


def wire_protection(meta: ObjectMeta, source: ProtoObject | None) -> None:
    """Install the write guard that rejects undeclared slots."""
    meta.guard = guard_declared_slots


@dataclass(frozen=True, slots=True)
class CloneStrategy:
    """Executable cloning recipe compiled from a Configuration.

    Shared by every object of one hierarchy.
    """

    configuration: Configuration
    type_policies: Mapping[TypeTag, CloningPolicy]
    """Effective per-type policies, ``default`` already folded in."""

    metadata: MetadataStore | None
    """Metadata store, None when neither delegation nor protection is used."""

    wiring: tuple[WiringStep, ...]
    """Steps filling in each new object's metadata."""

    table_variant: type[CloningTable]
    """Root cloning table class; its ``clone()`` decides propagation."""

    function_policy: CloningPolicy
    """Policy declared for mixin forwarding methods."""

    def metadata_of(self, obj: ProtoObject) -> ObjectMeta | None:
        """Look up an object's metadata in this hierarchy's store."""
        if self.metadata is None:
            return None
        return self.metadata.get(obj)

    def resolve_policy(self, table: CloningTable, key: SlotKey, value: Any) -> CloningPolicy:
        """Resolve the effective cloning policy of one slot.

        Args:
            table: Cloning table of the object being cloned.
            key: Slot key.
            value: Current slot value.

        Returns:
            Declared policy, else the per-type (or default) policy.

        Raises:
            NoPolicyError: If neither resolves.
        """
        policy = table.lookup(key)
        if policy is not None:
            return policy
        tag = type_tag(value)
        policy = self.type_policies.get(tag)
        if policy is None:
            raise NoPolicyError(key, tag)
        return policy

    def execute(self, source: ProtoObject) -> ProtoObject:
        """Clone an object.

        Slot values are produced into a local draft; nothing is built until
        every policy has succeeded, and the source is never written.

        Args:
            source: Object to clone.

        Returns:
            New object with its own cloning table and wired metadata.
        """
        table = cloning_table_of(source)
        draft: dict[SlotKey, Any] = {}
        for key, value in list(own_slots(source).items()):
            copied = self.resolve_policy(table, key, value)(value)
            if copied is not ABSENT:
                draft[key] = copied
        return self._assemble(draft, table.clone(), source)

    def new_root(self) -> ProtoObject:
        """Create the root object of a new hierarchy.

        Returns:
            Root object with an empty slot set.
        """
        table = self.table_variant()
        if self.metadata is not None:
            self.metadata.reserve(table)
        return self._assemble({}, table, None)

    def _assemble(
        self,
        slots: dict[SlotKey, Any],
        table: CloningTable,
        source: ProtoObject | None,
    ) -> ProtoObject:
        if self.metadata is None:
            return ProtoObject(self, table, slots)
        meta = ObjectMeta()
        for step in self.wiring:
            step(meta, source)
        self.metadata.prepare(slots, meta)
        obj = ProtoObject(self, table, slots)
        self.metadata.attach(obj, meta)
        return obj


def _select_metadata_store(config: Configuration) -> MetadataStore | None:
    if not (config.use_delegation or config.use_slot_protection):
        return None
    if not config.use_extra_metadata:
        return ColocatedMetadata()
    if not config.use_delegation:
        # Protection alone carries no per-object data.
        return SharedMetadata(ObjectMeta(guard=guard_declared_slots))
    return WeakMetadata()


def _select_wiring(config: Configuration) -> tuple[WiringStep, ...]:
    steps: list[WiringStep] = []
    if config.use_delegation:
        steps.append(wire_delegation)
    if config.use_slot_protection:
        steps.append(wire_protection)
    return tuple(steps)


def compile_configuration(config: Configuration) -> CloneStrategy:
    """Compile a Configuration into a reusable CloneStrategy.

    Args:
        config: Configuration to compile.

    Returns:
        Strategy shared by every object created from it.
    """
    type_policies: dict[TypeTag, CloningPolicy] = {}
    for tag in TypeTag:
        policy = config.policy_for(tag)
        if policy is not None:
            type_policies[tag] = policy

    function_policy = config.function
    if function_policy is None:
        function_policy = no_copy if config.use_delegation else assignment_copy

    metadata = _select_metadata_store(config)
    table_variant: type[CloningTable] = (
        DelegatingCloningTable if config.use_clone_delegation else CopyingCloningTable
    )
    strategy = CloneStrategy(
        configuration=config,
        type_policies=type_policies,
        metadata=metadata,
        wiring=_select_wiring(config),
        table_variant=table_variant,
        function_policy=function_policy,
    )
    logger.debug(
        "Compiled clone strategy: metadata=%s wiring=%s table=%s typed=%s",
        type(metadata).__name__ if metadata is not None else None,
        [step.__name__ for step in strategy.wiring],
        table_variant.__name__,
        sorted(tag.value for tag in type_policies),
    )
    return strategy
