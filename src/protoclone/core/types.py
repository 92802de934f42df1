"""Core type definitions for protoclone."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Hashable, MutableMapping, MutableSequence, MutableSet
from enum import Enum
from numbers import Number
from typing import Any, Final


class _Absent:
    """Sentinel type for a slot that a policy chose not to populate."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()
"""Returned by a cloning policy to leave the slot out of the clone.

Under delegation an omitted slot is then resolved through the parent object.
"""

type SlotKey = Hashable
"""Slot names: identifier strings for attribute access, any hashable for item access."""

type CloningPolicy = Callable[[Any], Any]
"""Signature: (current_value) -> value_for_clone, or ABSENT to omit the slot."""


class TypeTag(Enum):
    """Primitive type tags used to pick a per-type cloning policy."""

    NONE = "none"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    TABLE = "table"
    RESOURCE = "resource"
    FUNCTION = "function"
    COROUTINE = "coroutine"


def is_container(value: Any) -> bool:
    """Check whether a value is a mutable container (a "table").

    Args:
        value: Value to classify.

    Returns:
        True for mutable mappings, sequences and sets, False otherwise.
    """
    return isinstance(value, (MutableMapping, MutableSequence, MutableSet))


def type_tag(value: Any) -> TypeTag:
    """Classify a runtime value into its TypeTag.

    Order matters: bool is checked before Number, and containers before
    callables so that callable containers still count as tables.

    Args:
        value: Value to classify.

    Returns:
        The TypeTag for the value.
    """
    # Late import to avoid circular dependency
    from protoclone.core.policy.models import Method

    if value is None:
        return TypeTag.NONE
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, Number):
        return TypeTag.NUMBER
    if isinstance(value, (str, bytes)):
        return TypeTag.STRING
    if is_container(value):
        return TypeTag.TABLE
    if inspect.isgenerator(value) or inspect.iscoroutine(value) or inspect.isasyncgen(value):
        return TypeTag.COROUTINE
    if inspect.isroutine(value) or isinstance(value, (functools.partial, Method)):
        return TypeTag.FUNCTION
    return TypeTag.RESOURCE
