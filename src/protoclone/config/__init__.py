"""Configuration module: the Configuration record and Pydantic Settings flags.

Usage:
    from protoclone import assignment_copy, shallow_copy
    from protoclone.config import Configuration, PrototypeSettings

    config = Configuration(default=assignment_copy, table=shallow_copy)
    config = Configuration.from_settings(PrototypeSettings(use_delegation=True))
"""

from protoclone.config.models import Configuration
from protoclone.config.settings import PrototypeSettings

__all__ = [
    "Configuration",
    "PrototypeSettings",
]
