"""Core functionalities: stateless policies, type tags and errors.

Architecture Note:
    core/ contains pure, stateless building blocks with no runtime state.
    For stateful pieces, see tables/, compiler/ and runtime/.
"""

from protoclone.core.errors import (
    InvalidConfigurationError,
    MissingCloneCapabilityError,
    NoPolicyError,
    PrototypeError,
    TypeMismatchError,
    UndeclaredSlotError,
)
from protoclone.core.policy import (
    Cloneable,
    DeepCopier,
    Method,
    assignment_copy,
    clone_delegated_copy,
    deep_copy,
    deep_copy_container,
    delegate_copy,
    no_copy,
    shallow_copy,
)
from protoclone.core.types import ABSENT, CloningPolicy, SlotKey, TypeTag, is_container, type_tag

__all__ = [
    # Types
    "ABSENT",
    "CloningPolicy",
    "SlotKey",
    "TypeTag",
    "is_container",
    "type_tag",
    # Errors
    "PrototypeError",
    "InvalidConfigurationError",
    "TypeMismatchError",
    "MissingCloneCapabilityError",
    "UndeclaredSlotError",
    "NoPolicyError",
    # Policy
    "Cloneable",
    "Method",
    "DeepCopier",
    "deep_copy_container",
    "no_copy",
    "assignment_copy",
    "shallow_copy",
    "delegate_copy",
    "deep_copy",
    "clone_delegated_copy",
]
