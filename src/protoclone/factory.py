"""Entry point for building prototype hierarchies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from protoclone.compiler import compile_configuration
from protoclone.config import Configuration
from protoclone.core.errors import InvalidConfigurationError
from protoclone.runtime import ProtoObject


def create_prototype(config: Configuration | Mapping[str, Any]) -> ProtoObject:
    """Compile a configuration and return the root object of its hierarchy.

    Args:
        config: Configuration record, or a mapping of its fields.

    Returns:
        Root prototype object. Clone it to create working objects.

    Raises:
        InvalidConfigurationError: If config is not a well-formed record.
    """
    if isinstance(config, Mapping):
        config = Configuration.from_mapping(config)
    elif not isinstance(config, Configuration):
        raise InvalidConfigurationError(
            f"Prototype configuration must be a Configuration or mapping, "
            f"got {type(config).__name__}"
        )
    return compile_configuration(config).new_root()
