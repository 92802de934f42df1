"""Tests for the specification compiler and compiled clone strategies."""

import gc
import weakref

import pytest

from protoclone import (
    Configuration,
    CopyingCloningTable,
    DelegatingCloningTable,
    NoPolicyError,
    TypeMismatchError,
    TypeTag,
    assignment_copy,
    cloning_table_of,
    compile_configuration,
    deep_copy,
    metadata_of,
    no_copy,
    own_slots,
    parent_of,
    shallow_copy,
)
from protoclone.compiler import (
    ColocatedMetadata,
    SharedMetadata,
    WeakMetadata,
    guard_declared_slots,
    wire_delegation,
    wire_protection,
)
from protoclone.runtime import META_SLOT


def test_default_is_folded_into_type_policies():
    strategy = compile_configuration(Configuration(default=no_copy, table=shallow_copy))

    assert strategy.type_policies[TypeTag.TABLE] is shallow_copy
    assert strategy.type_policies[TypeTag.NUMBER] is no_copy
    assert set(strategy.type_policies) == set(TypeTag)


def test_types_without_policy_are_left_out():
    strategy = compile_configuration(Configuration(string=assignment_copy))

    assert set(strategy.type_policies) == {TypeTag.STRING}


@pytest.mark.parametrize(
    ("flags", "store"),
    [
        ({}, None),
        ({"use_extra_metadata": True}, None),
        ({"use_clone_delegation": True}, None),
        ({"use_delegation": True}, ColocatedMetadata),
        ({"use_slot_protection": True}, ColocatedMetadata),
        ({"use_delegation": True, "use_slot_protection": True}, ColocatedMetadata),
        ({"use_delegation": True, "use_extra_metadata": True}, WeakMetadata),
        ({"use_slot_protection": True, "use_extra_metadata": True}, SharedMetadata),
        (
            {"use_delegation": True, "use_slot_protection": True, "use_extra_metadata": True},
            WeakMetadata,
        ),
    ],
)
def test_metadata_store_selection(flags, store):
    strategy = compile_configuration(Configuration(**flags))

    if store is None:
        assert strategy.metadata is None
    else:
        assert type(strategy.metadata) is store


@pytest.mark.parametrize(
    ("flags", "wiring"),
    [
        ({}, ()),
        ({"use_delegation": True}, (wire_delegation,)),
        ({"use_slot_protection": True}, (wire_protection,)),
        ({"use_delegation": True, "use_slot_protection": True}, (wire_delegation, wire_protection)),
    ],
)
def test_wiring_selection(flags, wiring):
    assert compile_configuration(Configuration(**flags)).wiring == wiring


@pytest.mark.parametrize(
    ("use_clone_delegation", "variant"),
    [(False, CopyingCloningTable), (True, DelegatingCloningTable)],
)
def test_table_variant_applies_to_whole_hierarchy(use_clone_delegation, variant):
    strategy = compile_configuration(Configuration(use_clone_delegation=use_clone_delegation))
    root = strategy.new_root()
    grandchild = root.clone().clone()

    assert strategy.table_variant is variant
    assert type(cloning_table_of(root)) is variant
    assert type(cloning_table_of(grandchild)) is variant


def test_function_policy_selection():
    explicit = compile_configuration(Configuration(function=deep_copy, use_delegation=True))
    delegating = compile_configuration(Configuration(default=assignment_copy, use_delegation=True))
    copying = compile_configuration(Configuration(default=no_copy))

    assert explicit.function_policy is deep_copy
    assert delegating.function_policy is no_copy
    assert copying.function_policy is assignment_copy


def test_resolution_order_declared_then_type_then_default():
    strategy = compile_configuration(Configuration(default=no_copy, table=shallow_copy))
    table = CopyingCloningTable()
    table.declare("tree", deep_copy)

    assert strategy.resolve_policy(table, "tree", [1]) is deep_copy
    assert strategy.resolve_policy(table, "items", [1]) is shallow_copy
    assert strategy.resolve_policy(table, "count", 1) is no_copy


def test_type_policy_follows_runtime_value():
    strategy = compile_configuration(Configuration(number=assignment_copy, table=deep_copy))
    table = CopyingCloningTable()

    assert strategy.resolve_policy(table, "value", 1) is assignment_copy
    assert strategy.resolve_policy(table, "value", [1]) is deep_copy


def test_unresolvable_slot_raises_no_policy():
    strategy = compile_configuration(Configuration(number=assignment_copy))

    with pytest.raises(NoPolicyError, match="'name'") as exc_info:
        strategy.resolve_policy(CopyingCloningTable(), "name", "text")

    assert exc_info.value.key == "name"
    assert exc_info.value.tag is TypeTag.STRING


def test_colocated_metadata_lives_in_slots():
    strategy = compile_configuration(Configuration(default=assignment_copy, use_delegation=True))
    root = strategy.new_root()
    child = root.clone()

    assert META_SLOT in own_slots(child)
    assert own_slots(child)[META_SLOT] is metadata_of(child)
    assert parent_of(child) is root
    assert parent_of(root) is None
    assert cloning_table_of(root).lookup(META_SLOT) is no_copy


def test_weak_metadata_keeps_slot_namespace_clean():
    strategy = compile_configuration(
        Configuration(default=assignment_copy, use_delegation=True, use_extra_metadata=True)
    )
    root = strategy.new_root()
    child = root.clone()

    assert META_SLOT not in own_slots(child)
    assert parent_of(child) is root


def test_weak_metadata_does_not_keep_objects_alive():
    strategy = compile_configuration(
        Configuration(default=assignment_copy, use_delegation=True, use_extra_metadata=True)
    )
    root = strategy.new_root()
    child = root.clone()
    assert len(strategy.metadata) == 2

    del child
    gc.collect()

    assert len(strategy.metadata) == 1


def test_delegation_parent_stays_alive_while_child_exists():
    strategy = compile_configuration(
        Configuration(default=no_copy, use_delegation=True, use_extra_metadata=True)
    )
    parent = strategy.new_root().clone()
    parent.value = 1
    child = parent.clone()
    parent_ref = weakref.ref(parent)

    del parent
    gc.collect()

    assert parent_ref() is not None
    assert child.value == 1


def test_shared_metadata_has_one_record():
    strategy = compile_configuration(
        Configuration(default=assignment_copy, use_slot_protection=True, use_extra_metadata=True)
    )
    root = strategy.new_root()
    child = root.clone()

    assert metadata_of(root) is metadata_of(child)
    assert metadata_of(root).guard is guard_declared_slots
    assert metadata_of(root).parent is None


def test_failed_clone_builds_no_object():
    """CRITICAL: A failing policy aborts the clone before any object exists.

    Why: Callers must never observe a half-populated clone.
    """
    strategy = compile_configuration(
        Configuration(default=assignment_copy, use_delegation=True, use_extra_metadata=True)
    )
    obj = strategy.new_root().clone()
    obj.slot("items", shallow_copy)
    obj.count = 1
    obj.items = 42
    before = len(strategy.metadata)

    with pytest.raises(TypeMismatchError):
        obj.clone()

    gc.collect()
    assert len(strategy.metadata) == before
    assert dict(own_slots(obj)) == {"count": 1, "items": 42}
