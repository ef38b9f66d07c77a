"""Flattening engine tests."""

from __future__ import annotations

import logging

import pytest
from struct_flattener.flattening import (
    DuplicateDefinition,
    DuplicatePolicy,
    FlatteningEngine,
    UnknownFlattenTarget,
    flatten_definition,
    resolve_type_identifier,
)
from struct_flattener.schema_registry import Field, SchemaRegistry, StructDefinition


def _field(name: str, type_name: str = "f32", *attributes: str) -> Field:
    return Field(name=name, type_name=type_name, attributes=attributes)


def _flatten(name: str, type_name: str) -> Field:
    return Field(name=name, type_name=type_name, is_flatten_marker=True)


def _names(fields: tuple[Field, ...]) -> list[str]:
    return [field.name for field in fields]


def test_flatten_marker_is_replaced_in_place() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    engine.flatten(StructDefinition(name="T", fields=(_field("x"), _field("y"))))

    result = engine.flatten(
        StructDefinition(name="Host", fields=(_field("a"), _flatten("t", "T"), _field("b")))
    )

    assert _names(result) == ["a", "x", "y", "b"]
    assert registry.lookup("Host") == result


def test_host_field_name_and_type_are_discarded() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    engine.flatten(
        StructDefinition(
            name="NestedStruct", fields=(_field("value_0"), _field("value_1"))
        )
    )

    result = engine.flatten(
        StructDefinition(
            name="BaseStruct",
            visibility="pub",
            fields=(_field("enable", "bool"), _flatten("nested", "NestedStruct")),
        )
    )

    assert result == (
        Field(name="enable", type_name="bool"),
        Field(name="value_0", type_name="f32"),
        Field(name="value_1", type_name="f32"),
    )
    assert "nested" not in _names(result)
    assert all(field.type_name != "NestedStruct" for field in result)


def test_flattening_is_transitive_and_leaves_no_markers() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    engine.flatten(StructDefinition(name="T0", fields=(_field("p"), _field("q"))))
    engine.flatten(StructDefinition(name="T1", fields=(_flatten("t0", "T0"), _field("r"))))

    result = engine.flatten(
        StructDefinition(name="T2", fields=(_flatten("t1", "T1"), _field("s")))
    )

    assert _names(result) == ["p", "q", "r", "s"]
    for entry in registry:
        assert not any(field.is_flatten_marker for field in entry.flat_fields)


def test_definition_without_markers_passes_through_unchanged() -> None:
    registry = SchemaRegistry()
    fields = (_field("a", "u8", "doc = \"first\""), _field("b", "String"), _field("c", "bool"))

    result = flatten_definition(StructDefinition(name="Plain", fields=fields), registry)

    assert result == fields


def test_target_fields_keep_their_attributes_verbatim() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    inner = _field("max", "Option<f32>", 'serde(skip_serializing_if = "Option::is_none")')
    engine.flatten(StructDefinition(name="Inner", fields=(inner,)))

    result = engine.flatten(
        StructDefinition(
            name="Outer",
            fields=(
                Field(
                    name="inner",
                    type_name="Inner",
                    attributes=("doc = \"dropped\"",),
                    is_flatten_marker=True,
                ),
            ),
        )
    )

    assert result == (inner,)


def test_unknown_target_fails_without_registering_host() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)

    with pytest.raises(UnknownFlattenTarget) as exc_info:
        engine.flatten(
            StructDefinition(name="Host", fields=(_field("a"), _flatten("m", "Missing")))
        )

    assert exc_info.value.type_name == "Missing"
    assert exc_info.value.host == "Host"
    assert exc_info.value.field == "m"
    assert "Host" not in registry
    assert len(registry) == 0


def test_forward_reference_fails_as_unknown_target() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)

    with pytest.raises(UnknownFlattenTarget):
        engine.flatten(StructDefinition(name="Base", fields=(_flatten("later", "Later"),)))
    engine.flatten(StructDefinition(name="Later", fields=(_field("x"),)))

    assert registry.names() == ("Later",)


def test_self_reference_fails_as_unknown_target() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)

    with pytest.raises(UnknownFlattenTarget, match="'Loop'"):
        engine.flatten(StructDefinition(name="Loop", fields=(_flatten("me", "Loop"),)))
    assert "Loop" not in registry


def test_mutual_reference_cannot_form_a_cycle() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)

    with pytest.raises(UnknownFlattenTarget, match="'B'"):
        engine.flatten(StructDefinition(name="A", fields=(_flatten("b", "B"),)))
    with pytest.raises(UnknownFlattenTarget, match="'A'"):
        engine.flatten(StructDefinition(name="B", fields=(_flatten("a", "A"),)))
    assert len(registry) == 0


def test_duplicate_definition_is_rejected_by_default() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    original = engine.flatten(StructDefinition(name="Dup", fields=(_field("a"),)))

    with pytest.raises(DuplicateDefinition, match="'Dup'"):
        engine.flatten(StructDefinition(name="Dup", fields=(_field("b"),)))
    assert registry.lookup("Dup") == original


def test_duplicate_definition_overwrites_under_overwrite_policy(caplog) -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry, duplicate_policy=DuplicatePolicy.OVERWRITE)
    engine.flatten(StructDefinition(name="Dup", fields=(_field("a"),)))

    with caplog.at_level(logging.WARNING, logger="struct_flattener.flattening"):
        result = engine.flatten(StructDefinition(name="Dup", fields=(_field("b"),)))

    assert _names(result) == ["b"]
    assert _names(registry.lookup("Dup")) == ["b"]
    assert "redefined" in caplog.text


def test_redefinition_cannot_flatten_its_previous_version() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry, duplicate_policy=DuplicatePolicy.OVERWRITE)
    original = engine.flatten(StructDefinition(name="A", fields=(_field("x"),)))

    with pytest.raises(UnknownFlattenTarget, match="'A'"):
        engine.flatten(StructDefinition(name="A", fields=(_flatten("a", "crate::A"),)))
    assert registry.lookup("A") == original


def test_shared_target_can_be_flattened_into_several_hosts() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    engine.flatten(StructDefinition(name="Common", fields=(_field("id", "u64"),)))

    first = engine.flatten(StructDefinition(name="A", fields=(_flatten("c", "Common"),)))
    second = engine.flatten(
        StructDefinition(name="B", fields=(_field("x"), _flatten("c", "Common")))
    )

    assert _names(first) == ["id"]
    assert _names(second) == ["x", "id"]


def test_path_qualified_type_reference_resolves_to_identifier() -> None:
    registry = SchemaRegistry()
    engine = FlatteningEngine(registry)
    engine.flatten(StructDefinition(name="Inner", fields=(_field("v"),)))

    result = engine.flatten(
        StructDefinition(name="Outer", fields=(_flatten("i", "crate::nested::Inner"),))
    )

    assert _names(result) == ["v"]


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("Inner", "Inner"),
        ("  Inner ", "Inner"),
        ("crate::nested::Inner", "Inner"),
        ("package.module.Inner", "Inner"),
        ("self :: Inner", "Inner"),
    ],
)
def test_resolve_type_identifier(reference: str, expected: str) -> None:
    assert resolve_type_identifier(reference) == expected
