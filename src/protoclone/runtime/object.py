"""Prototype objects with configurable cloning.

Usage:
    root = create_prototype(Configuration(default=assignment_copy, table=shallow_copy))
    point = root.clone()
    point.slot("coords", deep_copy)
    point.coords = {"x": 0, "y": 0}

    moved = point.clone()
    moved.coords["x"] = 10
    assert point.coords["x"] == 0

Slots are read and written with attribute syntax for identifier names and
item syntax for any hashable key. Every read goes through one resolve routine
(own slots, then the delegation parent chain) and every write through one
assign routine (write guard, then own slots).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Self

from protoclone.core.errors import UndeclaredSlotError
from protoclone.core.policy.models import Method
from protoclone.core.policy.operations import assignment_copy
from protoclone.core.types import CloningPolicy, SlotKey
from protoclone.runtime.mixin import MixinKey, attach_mixin

if TYPE_CHECKING:
    from protoclone.compiler.metadata import ObjectMeta
    from protoclone.compiler.strategy import CloneStrategy
    from protoclone.tables import CloningTable

RESERVED_NAMES: Final = frozenset({"clone", "slot", "mixin"})
"""Operations present on every prototype object; never usable as slot names."""

META_SLOT: Final = "__meta__"
"""Slot key holding co-located object metadata."""

_INTERNAL = frozenset({"_slots", "_table", "_strategy"})
_MISSING: Final = object()


def _check_declarable(key: SlotKey) -> None:
    if key in RESERVED_NAMES or key == META_SLOT:
        raise ValueError(f"Cannot declare reserved slot {key!r}")


def _check_writable(key: SlotKey) -> None:
    if key in RESERVED_NAMES or key == META_SLOT:
        raise AttributeError(f"{key!r} is reserved on prototype objects")


class ProtoObject:
    """Object whose slots are propagated to clones by per-slot policies.

    Instances are created by a compiled CloneStrategy, never directly: use
    ``create_prototype`` for a root and ``clone()`` for everything else.

    Args:
        strategy: Compiled strategy shared by the whole hierarchy.
        table: Cloning table owned by this object.
        slots: Initial own slots. Ownership of the dict passes to the object.
    """

    __slots__ = ("_slots", "_table", "_strategy", "__weakref__")

    _slots: dict[SlotKey, Any]
    _table: CloningTable
    _strategy: CloneStrategy

    def __init__(
        self,
        strategy: CloneStrategy,
        table: CloningTable,
        slots: dict[SlotKey, Any] | None = None,
    ) -> None:
        object.__setattr__(self, "_strategy", strategy)
        object.__setattr__(self, "_table", table)
        object.__setattr__(self, "_slots", slots if slots is not None else {})

    # Reserved operations

    def clone(self) -> ProtoObject:
        """Create a new object from this one's slots using the compiled strategy.

        Returns:
            New prototype object; this object is left untouched.

        Raises:
            NoPolicyError: If a slot has no resolvable cloning policy.
            TypeMismatchError: If a policy is applied to the wrong kind of value.
        """
        return self._strategy.execute(self)

    def slot(self, key: SlotKey, policy: CloningPolicy | None = None) -> Self:
        """Declare a slot and its cloning policy.

        Declaring is the only way to make a slot writable on a protected
        object. Redeclaring replaces the policy for this object and its
        future clones. Under clone delegation, existing clones that have not
        declared the key themselves look it up here and see the new policy.

        Args:
            key: Slot key.
            policy: Cloning policy; assignment_copy if omitted.

        Returns:
            This object, for chaining.

        Raises:
            ValueError: If key is a reserved operation name.
            TypeError: If policy is not callable.
        """
        _check_declarable(key)
        if policy is None:
            policy = assignment_copy
        if not callable(policy):
            raise TypeError(f"Cloning policy for {key!r} must be callable")
        self._table.declare(key, policy)
        return self

    def mixin(self, resource: Any, *names: str) -> Self:
        """Bind operations of an external cloneable resource onto this object.

        The resource is stored under a private key and cloned through its own
        ``clone()`` whenever this object is cloned. Each name becomes a
        forwarding method calling the same-named operation of the receiving
        object's resource.

        Args:
            resource: Object exposing ``clone()`` plus the forwarded operations.
            *names: Operations to forward; ``clone`` is never forwarded.

        Returns:
            This object, for chaining.

        Raises:
            ValueError: If a name is reserved; nothing is attached then.
        """
        for name in names:
            if name != "clone":
                _check_declarable(name)
        attach_mixin(self, resource, names, self._strategy.function_policy)
        return self

    # Resolve / assign

    def _find(self, key: SlotKey) -> Any:
        obj: ProtoObject | None = self
        while obj is not None:
            value = obj._slots.get(key, _MISSING)
            if value is not _MISSING:
                return value
            meta = obj._strategy.metadata_of(obj)
            obj = meta.parent if meta is not None else None
        return _MISSING

    def _resolve(self, key: SlotKey) -> Any:
        value = self._find(key)
        if value is _MISSING:
            raise KeyError(key)
        if isinstance(value, Method):
            return value.bind(self)
        return value

    def _assign(self, key: SlotKey, value: Any) -> None:
        _check_writable(key)
        meta = self._strategy.metadata_of(self)
        if meta is not None and meta.guard is not None and not meta.guard(self, key):
            raise UndeclaredSlotError(key)
        self._slots[key] = value

    def _discard(self, key: SlotKey) -> None:
        _check_writable(key)
        del self._slots[key]

    # Attribute access

    def __getattr__(self, name: str) -> Any:
        if name in _INTERNAL or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        try:
            return self._resolve(name)
        except KeyError:
            raise AttributeError(f"Prototype object has no slot {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _INTERNAL:
            raise AttributeError(f"{name!r} is internal to prototype objects")
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(f"{name!r} is a special name; use item syntax for this slot")
        self._assign(name, value)

    def __delattr__(self, name: str) -> None:
        try:
            self._discard(name)
        except KeyError:
            raise AttributeError(f"Prototype object has no own slot {name!r}") from None

    # Item access

    def __getitem__(self, key: SlotKey) -> Any:
        return self._resolve(key)

    def __setitem__(self, key: SlotKey, value: Any) -> None:
        self._assign(key, value)

    def __delitem__(self, key: SlotKey) -> None:
        self._discard(key)

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not _MISSING

    def __iter__(self) -> Iterator[SlotKey]:
        """Iterate over own slot keys (delegated slots are not included)."""
        return iter(list(self._slots))

    def __repr__(self) -> str:
        names = [key for key in self._slots if key != META_SLOT and not isinstance(key, MixinKey)]
        return f"<ProtoObject slots={names!r}>"


def own_slots(obj: ProtoObject) -> Mapping[SlotKey, Any]:
    """Read-only view of the slots stored directly on an object.

    Args:
        obj: Prototype object.

    Returns:
        Live, read-only mapping of own slots.
    """
    return MappingProxyType(obj._slots)


def cloning_table_of(obj: ProtoObject) -> CloningTable:
    """Get the cloning table owned by an object."""
    return obj._table


def metadata_of(obj: ProtoObject) -> ObjectMeta | None:
    """Get an object's metadata record, wherever the strategy keeps it."""
    return obj._strategy.metadata_of(obj)


def parent_of(obj: ProtoObject) -> ProtoObject | None:
    """Get the object a clone delegates unresolved reads to, if any."""
    meta = metadata_of(obj)
    return meta.parent if meta is not None else None

