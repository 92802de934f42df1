"""Policy models: capability protocols and slot methods.

Resources mixed into prototype objects only need to implement ``Cloneable``;
whatever operations get forwarded are looked up by name at call time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import MethodType
from typing import Any, Protocol, Self, runtime_checkable


@runtime_checkable
class Cloneable(Protocol):
    """One instance -> an independent copy of itself."""

    def clone(self) -> Self: ...


@dataclass(frozen=True, slots=True)
class Method:
    """Function stored in a slot that receives the reading object as ``self``.

    Plain functions stored in slots are returned as-is; wrapping one in
    ``Method`` makes it behave like a bound method of whichever object it is
    read through, including delegating children.

    Usage:
        obj.greet = Method(lambda self: f"hi from {self.name}")
        obj.greet()
    """

    func: Callable[..., Any]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)

    def bind(self, obj: Any) -> MethodType:
        """Bind the wrapped function to ``obj``.

        Args:
            obj: Object passed as the first argument on call.

        Returns:
            Bound method.
        """
        return MethodType(self.func, obj)
