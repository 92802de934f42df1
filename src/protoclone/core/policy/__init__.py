"""Policy functionality: built-in cloning policies and the deep-copy engine."""

from protoclone.core.policy.deep_copy import DeepCopier, deep_copy_container
from protoclone.core.policy.models import Cloneable, Method
from protoclone.core.policy.operations import (
    assignment_copy,
    clone_delegated_copy,
    deep_copy,
    delegate_copy,
    no_copy,
    shallow_copy,
)

__all__ = [
    # Models
    "Cloneable",
    "Method",
    # Deep copy
    "DeepCopier",
    "deep_copy_container",
    # Policies
    "no_copy",
    "assignment_copy",
    "shallow_copy",
    "delegate_copy",
    "deep_copy",
    "clone_delegated_copy",
]
