"""Error taxonomy for protoclone.

All failures are synchronous and raised at the call site that caused them:
configuration problems at ``create_prototype``, undeclared writes at the write
site, and policy problems at ``clone`` time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from protoclone.core.types import TypeTag


class PrototypeError(Exception):
    """Base class for all protoclone errors."""

    pass


class InvalidConfigurationError(PrototypeError, TypeError):
    """Raised when a configuration is not a well-formed record."""

    pass


class TypeMismatchError(PrototypeError, TypeError):
    """Raised when a built-in policy is applied to a value of the wrong kind."""

    pass


class MissingCloneCapabilityError(TypeMismatchError):
    """Raised when a value that must clone itself has no ``clone`` operation."""

    pass


class UndeclaredSlotError(PrototypeError):
    """Raised when writing an undeclared slot on a protected object."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Undeclared slot {key!r} on protected prototype object")
        self.key = key


class NoPolicyError(PrototypeError):
    """Raised at clone time when a slot has no resolvable cloning policy."""

    def __init__(self, key: Any, tag: TypeTag) -> None:
        super().__init__(
            f"No cloning policy for slot {key!r}: not declared, and no policy "
            f"configured for type '{tag.value}' or as default"
        )
        self.key = key
        self.tag = tag
