"""Struct schema entities."""

from __future__ import annotations

from dataclasses import dataclass

Attribute = str


@dataclass(frozen=True)
class Field:
    """One struct field as declared or as carried into a flat layout."""

    name: str
    type_name: str
    attributes: tuple[Attribute, ...] = ()
    is_flatten_marker: bool = False


@dataclass(frozen=True)
class StructDefinition:
    """Structural type definition consumed by the flattening engine."""

    name: str
    fields: tuple[Field, ...]
    visibility: str = ""
    outer_attributes: tuple[Attribute, ...] = ()

    def flatten_targets(self) -> tuple[str, ...]:
        """Return the type references of flatten-marked fields in declared order."""
        return tuple(field.type_name for field in self.fields if field.is_flatten_marker)


@dataclass(frozen=True)
class RegistryEntry:
    """Fully resolved field list registered under a type name."""

    name: str
    flat_fields: tuple[Field, ...]
