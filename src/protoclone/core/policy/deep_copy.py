"""Cycle-safe structural duplication of containers.

The engine keeps an identity-keyed memo for the duration of one top-level
call. A copy is registered before it is populated, so self references and
shared substructure met during population resolve to the same copy.
"""

from __future__ import annotations

import copy
from collections import ChainMap, deque
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import Any, TypeVar

from protoclone.core.types import is_container

T = TypeVar("T")


def _empty_like(container: Any) -> Any:
    """Allocate an empty container of the same kind.

    Builtin containers and anything defining ``__copy__`` keep their exact
    type and extra state (a defaultdict factory, a deque maxlen). Other
    containers may share their storage with a shallow copy, so they fall back
    to the builtin of their abstract kind rather than being cleared.

    Args:
        container: Container to mirror.

    Returns:
        New, empty container.
    """
    if isinstance(container, (dict, list, set, deque)) or hasattr(type(container), "__copy__"):
        empty = copy.copy(container)
        empty.clear()
        return empty
    if isinstance(container, MutableMapping):
        return {}
    if isinstance(container, MutableSet):
        return set()
    return []


class DeepCopier:
    """Deep copy of container graphs with a single call-scoped memo."""

    def __init__(self) -> None:
        self._memo: dict[int, Any] = {}
        # Originals must outlive the copier so their ids cannot be recycled.
        self._keepalive: list[Any] = []

    def copy(self, value: T) -> T:
        """Copy ``value`` if it is a container, otherwise return it unchanged.

        Args:
            value: Container or leaf value.

        Returns:
            The memoized copy for containers, the value itself for leaves.
        """
        if not is_container(value):
            return value
        existing = self._memo.get(id(value))
        if existing is not None:
            return existing  # type: ignore[no-any-return]

        if isinstance(value, ChainMap):
            return self._copy_chain(value)  # type: ignore[return-value]

        duplicate = _empty_like(value)
        self._memo[id(value)] = duplicate
        self._keepalive.append(value)

        if isinstance(duplicate, MutableMapping):
            for key, item in value.items():
                duplicate[self.copy(key)] = self.copy(item)
        elif isinstance(duplicate, MutableSet):
            for item in value:
                duplicate.add(self.copy(item))
        elif isinstance(duplicate, MutableSequence):
            for item in value:
                duplicate.append(self.copy(item))
        return duplicate  # type: ignore[no-any-return]

    def _copy_chain(self, chain: ChainMap[Any, Any]) -> ChainMap[Any, Any]:
        # Each layer is copied on its own so the fallback structure survives.
        duplicate = copy.copy(chain)
        self._memo[id(chain)] = duplicate
        self._keepalive.append(chain)
        duplicate.maps = [self.copy(layer) for layer in chain.maps]
        return duplicate


def deep_copy_container(value: T) -> T:
    """Deep copy a container graph, preserving shared and cyclic references.

    Args:
        value: Container to copy.

    Returns:
        Structural duplicate; the memo is discarded on return.
    """
    return DeepCopier().copy(value)
