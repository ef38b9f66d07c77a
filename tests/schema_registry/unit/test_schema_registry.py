"""Schema registry tests."""

from __future__ import annotations

import pytest
from struct_flattener.schema_registry import Field, SchemaRegistry


def _fields(*names: str) -> tuple[Field, ...]:
    return tuple(Field(name=name, type_name="f32") for name in names)


def test_lookup_returns_registered_fields_until_overwritten() -> None:
    registry = SchemaRegistry()
    first = _fields("x", "y")
    registry.register("Point", first)

    assert registry.lookup("Point") == first
    assert registry.lookup("Point") == first

    second = _fields("x", "y", "z")
    registry.register("Point", second)

    assert registry.lookup("Point") == second
    assert len(registry) == 1


def test_lookup_of_unknown_name_returns_none() -> None:
    registry = SchemaRegistry()

    assert registry.lookup("Missing") is None
    assert registry.entry("Missing") is None
    assert "Missing" not in registry


def test_names_follow_registration_order() -> None:
    registry = SchemaRegistry()
    registry.register("B", _fields("b"))
    registry.register("A", _fields("a"))
    registry.register("B", _fields("b2"))

    assert registry.names() == ("B", "A")
    assert [entry.name for entry in registry] == ["B", "A"]
    assert [entry.name for entry in registry.entries()] == ["B", "A"]


def test_register_accepts_any_iterable_and_stores_tuple() -> None:
    registry = SchemaRegistry()
    entry = registry.register("Gen", (field for field in _fields("a", "b")))

    assert entry.flat_fields == _fields("a", "b")
    assert isinstance(registry.lookup("Gen"), tuple)


def test_register_rejects_unresolved_flatten_markers() -> None:
    registry = SchemaRegistry()
    unresolved = (Field(name="nested", type_name="Inner", is_flatten_marker=True),)

    with pytest.raises(ValueError, match="must not contain flatten markers"):
        registry.register("Outer", unresolved)
    assert "Outer" not in registry


def test_separate_registries_are_isolated() -> None:
    first = SchemaRegistry()
    second = SchemaRegistry()
    first.register("Only", _fields("a"))

    assert second.lookup("Only") is None
