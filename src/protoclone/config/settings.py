"""Configuration settings using Pydantic Settings.

Provides the structural flags of a prototype hierarchy with environment
variable support, so deployments can switch wiring without code changes.

Usage:
    from protoclone.config import PrototypeSettings

    # Load from environment variables (PROTOCLONE_*)
    settings = PrototypeSettings()

    # Or override with explicit values
    settings = PrototypeSettings(use_delegation=True)
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class PrototypeSettings(BaseSettings):  # type: ignore[misc]
    """Structural flags for a prototype hierarchy.

    Attributes:
        use_delegation: Clones fall back to their parent for unresolved slot reads.
        use_slot_protection: Only slots declared with ``slot()`` may be written.
        use_extra_metadata: Keep object metadata in a weak side-record instead
            of the object's own slots.
        use_clone_delegation: Cloning tables delegate to their parent table
            instead of copying every entry.

    Environment Variables:
        PROTOCLONE_USE_DELEGATION
        PROTOCLONE_USE_SLOT_PROTECTION
        PROTOCLONE_USE_EXTRA_METADATA
        PROTOCLONE_USE_CLONE_DELEGATION
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTOCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    use_delegation: bool = False
    use_slot_protection: bool = False
    use_extra_metadata: bool = False
    use_clone_delegation: bool = False
