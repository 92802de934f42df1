"""Cloning tables: copying and delegating variants."""

from protoclone.tables.cloning_table import (
    CloningTable,
    CopyingCloningTable,
    DelegatingCloningTable,
)

__all__ = [
    "CloningTable",
    "CopyingCloningTable",
    "DelegatingCloningTable",
]
