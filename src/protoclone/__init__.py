"""protoclone: prototype objects with configurable, policy-driven cloning.

Usage:
    from protoclone import assignment_copy, create_prototype, deep_copy, shallow_copy

    root = create_prototype({"default": assignment_copy, "table": shallow_copy})
    obj = root.clone()
    obj.arr = [1, 2, 3]
    obj.slot("tree", deep_copy)
    obj.tree = {"children": []}

    copy = obj.clone()
    copy.arr[0] = 1000
    assert obj.arr[0] == 1
"""

__version__ = "0.1.0"

# Compiler
from protoclone.compiler import CloneStrategy, ObjectMeta, compile_configuration

# Configuration
from protoclone.config import Configuration, PrototypeSettings

# Core primitives
from protoclone.core import (
    ABSENT,
    Cloneable,
    CloningPolicy,
    InvalidConfigurationError,
    Method,
    MissingCloneCapabilityError,
    NoPolicyError,
    PrototypeError,
    TypeMismatchError,
    TypeTag,
    UndeclaredSlotError,
    assignment_copy,
    clone_delegated_copy,
    deep_copy,
    delegate_copy,
    no_copy,
    shallow_copy,
    type_tag,
)
from protoclone.factory import create_prototype

# Runtime
from protoclone.runtime import (
    ProtoObject,
    cloning_table_of,
    metadata_of,
    own_slots,
    parent_of,
)

# Cloning tables
from protoclone.tables import CloningTable, CopyingCloningTable, DelegatingCloningTable

__all__ = [
    # Version
    "__version__",
    # Entry point
    "create_prototype",
    # Policies
    "no_copy",
    "assignment_copy",
    "shallow_copy",
    "delegate_copy",
    "deep_copy",
    "clone_delegated_copy",
    # Core types
    "ABSENT",
    "CloningPolicy",
    "Cloneable",
    "Method",
    "TypeTag",
    "type_tag",
    # Errors
    "PrototypeError",
    "InvalidConfigurationError",
    "TypeMismatchError",
    "MissingCloneCapabilityError",
    "UndeclaredSlotError",
    "NoPolicyError",
    # Configuration
    "Configuration",
    "PrototypeSettings",
    # Compiler
    "CloneStrategy",
    "ObjectMeta",
    "compile_configuration",
    # Runtime
    "ProtoObject",
    "own_slots",
    "cloning_table_of",
    "metadata_of",
    "parent_of",
    # Tables
    "CloningTable",
    "CopyingCloningTable",
    "DelegatingCloningTable",
]
