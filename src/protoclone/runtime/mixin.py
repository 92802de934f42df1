"""Mixin adapter: wires an external cloneable resource into a prototype object.

Usage:
    class Counter:
        def __init__(self) -> None:
            self.value = 0

        def bump(self) -> int:
            self.value += 1
            return self.value

        def clone(self) -> "Counter":
            copy = Counter()
            copy.value = self.value
            return copy

    obj.mixin(Counter(), "bump")
    obj.bump()           # forwards to the object's own Counter
    other = obj.clone()  # other gets Counter.clone(), not a shared instance
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from protoclone.core.policy.models import Method
from protoclone.core.policy.operations import clone_delegated_copy
from protoclone.core.types import CloningPolicy

if TYPE_CHECKING:
    from protoclone.runtime.object import ProtoObject

logger = logging.getLogger(__name__)


class MixinKey:
    """Private slot key holding a mixed-in resource.

    Compares by identity, so it never collides with a public slot name or
    with the key of another mixin.

    Args:
        label: Human-readable label for repr only.
    """

    __slots__ = ("label",)

    def __init__(self, label: str) -> None:
        self.label = label

    def __repr__(self) -> str:
        return f"<MixinKey {self.label} at {id(self):#x}>"


def _forwarder(key: MixinKey, name: str) -> Method:
    def forward(obj: ProtoObject, *args: Any, **kwargs: Any) -> Any:
        resource = obj[key]
        return getattr(resource, name)(*args, **kwargs)

    forward.__name__ = forward.__qualname__ = name
    return Method(forward)


def attach_mixin(
    obj: ProtoObject,
    resource: Any,
    names: Iterable[str],
    policy: CloningPolicy,
) -> MixinKey:
    """Store a resource under a fresh private key and forward operations to it.

    The resource is only required to implement ``clone()`` when ``obj`` is
    cloned; a missing capability surfaces then as MissingCloneCapabilityError.

    Args:
        obj: Prototype object receiving the resource.
        resource: Cloneable resource.
        names: Operation names to forward.
        policy: Cloning policy declared for each forwarding slot.

    Returns:
        Private key the resource is stored under.
    """
    key = MixinKey(type(resource).__name__)
    obj.slot(key, clone_delegated_copy)
    obj[key] = resource

    forwarded = []
    for name in names:
        if name == "clone":
            warnings.warn(
                "mixin() never forwards 'clone'; the object's own clone() is kept.",
                stacklevel=3,
            )
            continue
        obj.slot(name, policy)
        obj[name] = _forwarder(key, name)
        forwarded.append(name)

    logger.debug("Mixed %r into %r forwarding %s", resource, obj, forwarded)
    return key
