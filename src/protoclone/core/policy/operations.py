"""Built-in cloning policies.

Pure functions mapping a slot's current value to the value its clone gets.
Each is total except where a structural kind is required; those raise
TypeMismatchError instead of guessing.
"""

from __future__ import annotations

import copy
from collections import ChainMap
from collections.abc import MutableMapping
from typing import Any, TypeVar

from protoclone.core.errors import MissingCloneCapabilityError, TypeMismatchError
from protoclone.core.policy.deep_copy import deep_copy_container
from protoclone.core.types import ABSENT, is_container

T = TypeVar("T")


def _require_container(value: Any, policy: str) -> None:
    if not is_container(value):
        raise TypeMismatchError(f"{policy} requires a container, got {type(value).__name__}")


def no_copy(value: Any) -> Any:
    """Leave the slot out of the clone.

    Args:
        value: Current slot value (ignored).

    Returns:
        ABSENT, so the clone does not populate the slot. Under delegation the
        slot then resolves through the parent object.
    """
    return ABSENT


def assignment_copy(value: T) -> T:
    """Share the value (or reference) between parent and clone.

    Args:
        value: Current slot value.

    Returns:
        The value unchanged.
    """
    return value


def shallow_copy(value: T) -> T:
    """Copy one level of a container.

    Args:
        value: Container to copy.

    Returns:
        New container of the same type with the same keys and values.

    Raises:
        TypeMismatchError: If value is not a container.
    """
    _require_container(value, "shallow_copy")
    return copy.copy(value)


def delegate_copy(value: MutableMapping[Any, Any]) -> ChainMap[Any, Any]:
    """Layer an empty mapping over the original.

    Writes land in the new layer; unresolved reads fall back to the original,
    which stays live.

    Args:
        value: Mapping to delegate to.

    Returns:
        ChainMap whose first map is empty and whose parent is ``value``.

    Raises:
        TypeMismatchError: If value is not a mutable mapping.
    """
    if not isinstance(value, MutableMapping):
        raise TypeMismatchError(
            f"delegate_copy requires a mapping, got {type(value).__name__}"
        )
    return ChainMap({}, value)


def deep_copy(value: T) -> T:
    """Copy a container graph, preserving shared and cyclic references.

    Args:
        value: Container to copy.

    Returns:
        Structural duplicate sharing no containers with the original.

    Raises:
        TypeMismatchError: If value is not a container.
    """
    _require_container(value, "deep_copy")
    return deep_copy_container(value)


def clone_delegated_copy(value: Any) -> Any:
    """Let the value clone itself through its own ``clone`` operation.

    Args:
        value: Object exposing ``clone()``.

    Returns:
        Result of ``value.clone()``.

    Raises:
        MissingCloneCapabilityError: If value has no callable ``clone``.
    """
    clone = getattr(value, "clone", None)
    if not callable(clone):
        raise MissingCloneCapabilityError(
            f"clone_delegated_copy requires a value with a clone() operation, "
            f"got {type(value).__name__}"
        )
    return clone()
