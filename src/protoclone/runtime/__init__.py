"""Prototype object runtime: objects, slot resolution and mixins."""

from protoclone.runtime.mixin import MixinKey, attach_mixin
from protoclone.runtime.object import (
    META_SLOT,
    RESERVED_NAMES,
    ProtoObject,
    cloning_table_of,
    metadata_of,
    own_slots,
    parent_of,
)

__all__ = [
    "ProtoObject",
    "RESERVED_NAMES",
    "META_SLOT",
    "own_slots",
    "cloning_table_of",
    "metadata_of",
    "parent_of",
    "MixinKey",
    "attach_mixin",
]
