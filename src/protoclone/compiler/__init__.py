"""Specification compiler: clone strategies and metadata placement."""

from protoclone.compiler.metadata import (
    ColocatedMetadata,
    MetadataStore,
    ObjectMeta,
    SharedMetadata,
    WeakMetadata,
    WriteGuard,
    guard_declared_slots,
)
from protoclone.compiler.strategy import (
    CloneStrategy,
    WiringStep,
    compile_configuration,
    wire_delegation,
    wire_protection,
)

__all__ = [
    # Strategy
    "CloneStrategy",
    "WiringStep",
    "compile_configuration",
    "wire_delegation",
    "wire_protection",
    # Metadata
    "ObjectMeta",
    "WriteGuard",
    "MetadataStore",
    "ColocatedMetadata",
    "WeakMetadata",
    "SharedMetadata",
    "guard_declared_slots",
]
