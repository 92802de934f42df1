"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from protoclone import (
    Configuration,
    assignment_copy,
    create_prototype,
    no_copy,
    shallow_copy,
)


class Resource:
    """Opaque cloneable resource: every clone is a new, distinguishable identity."""

    def __init__(self, generation: int = 0) -> None:
        self.generation = generation

    def peek(self) -> "Resource":
        return self

    def describe(self, prefix: str, *, suffix: str = "") -> str:
        return f"{prefix}{self.generation}{suffix}"

    def clone(self) -> "Resource":
        return Resource(self.generation + 1)


class Opaque:
    """Opaque resource without a clone() operation."""

    def peek(self) -> "Opaque":
        return self


@pytest.fixture
def resource():
    """Fresh cloneable resource."""
    return Resource()


@pytest.fixture
def resource_cls():
    return Resource


@pytest.fixture
def opaque_cls():
    return Opaque


@pytest.fixture
def assignment_root():
    """Root of a copy-only hierarchy with shallow-copied containers."""
    return create_prototype(Configuration(default=assignment_copy, table=shallow_copy))


@pytest.fixture
def delegating_root():
    """Root of a delegating hierarchy that never copies by default."""
    return create_prototype(
        Configuration(default=no_copy, table=shallow_copy, use_delegation=True)
    )


@pytest.fixture
def protected_root():
    """Root of a protected, delegating hierarchy with no default policy."""
    return create_prototype(
        Configuration(
            use_delegation=True,
            use_slot_protection=True,
            use_clone_delegation=True,
        )
    )
