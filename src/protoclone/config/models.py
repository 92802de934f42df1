"""Prototype configuration record.

A Configuration names the cloning policies to use per primitive type tag, a
fallback ``default``, and the four structural flags. It is immutable and is
compiled once into a clone strategy.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from protoclone.config.settings import PrototypeSettings
from protoclone.core.errors import InvalidConfigurationError
from protoclone.core.types import CloningPolicy, TypeTag

_FLAG_NAMES = (
    "use_delegation",
    "use_slot_protection",
    "use_extra_metadata",
    "use_clone_delegation",
)


@dataclass(frozen=True, slots=True)
class Configuration:
    """Declarative specification of a prototype hierarchy.

    Per-type policies left as None fall back to ``default`` at compile time.
    If ``default`` is None too, values of that type need an explicit per-slot
    policy or cloning them fails with NoPolicyError.
    """

    default: CloningPolicy | None = None
    """Fallback for every type tag without its own policy."""

    none: CloningPolicy | None = None
    boolean: CloningPolicy | None = None
    number: CloningPolicy | None = None
    string: CloningPolicy | None = None
    table: CloningPolicy | None = None
    """Policy for mutable containers (dicts, lists, sets)."""

    resource: CloningPolicy | None = None
    """Policy for opaque objects, prototype objects included."""

    function: CloningPolicy | None = None
    """Policy for callables. Also used to declare mixin forwarders."""

    coroutine: CloningPolicy | None = None
    """Policy for generators, coroutines and async generators."""

    use_delegation: bool = False
    use_slot_protection: bool = False
    use_extra_metadata: bool = False
    use_clone_delegation: bool = False

    def __post_init__(self) -> None:
        for tag in TypeTag:
            policy = getattr(self, tag.value)
            if policy is not None and not callable(policy):
                raise InvalidConfigurationError(
                    f"Policy for '{tag.value}' must be callable, got {type(policy).__name__}"
                )
        if self.default is not None and not callable(self.default):
            raise InvalidConfigurationError(
                f"Default policy must be callable, got {type(self.default).__name__}"
            )
        for name in _FLAG_NAMES:
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigurationError(f"Flag '{name}' must be a bool")

    def policy_for(self, tag: TypeTag) -> CloningPolicy | None:
        """Get the configured policy for a type tag, falling back to ``default``.

        Args:
            tag: Type tag to look up.

        Returns:
            The per-type policy, else the default, else None.
        """
        policy: CloningPolicy | None = getattr(self, tag.value)
        return policy if policy is not None else self.default

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Configuration:
        """Build a Configuration from a plain mapping of its fields.

        Args:
            mapping: Field names to values.

        Returns:
            New Configuration.

        Raises:
            InvalidConfigurationError: If a key is unknown or a value is malformed.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in mapping if key not in known)
        if unknown:
            raise InvalidConfigurationError(f"Unknown configuration fields: {', '.join(unknown)}")
        return cls(**mapping)

    @classmethod
    def from_settings(
        cls, settings: PrototypeSettings | None = None, **policies: CloningPolicy | None
    ) -> Configuration:
        """Build a Configuration whose flags come from PrototypeSettings.

        Args:
            settings: Flag source; defaults to PrototypeSettings() (environment).
            **policies: ``default`` and per-type policies.

        Returns:
            New Configuration.

        Raises:
            InvalidConfigurationError: If a policy name is unknown or not callable.
        """
        settings = settings or PrototypeSettings()
        flags = {name: getattr(settings, name) for name in _FLAG_NAMES}
        overlap = sorted(set(policies) & set(flags))
        if overlap:
            raise InvalidConfigurationError(
                f"Flags must come from settings, not keyword arguments: {', '.join(overlap)}"
            )
        return cls.from_mapping({**policies, **flags})
