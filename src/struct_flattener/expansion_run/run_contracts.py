"""Expansion run entities."""

from __future__ import annotations

from dataclasses import dataclass

from struct_flattener.schema_registry import Field, SchemaRegistry, StructDefinition


@dataclass(frozen=True)
class ResolvedStruct:
    """Definition together with its resolved flat field list."""

    definition: StructDefinition
    flat_fields: tuple[Field, ...]

    @property
    def name(self) -> str:
        return self.definition.name


@dataclass(frozen=True)
class DefinitionFailure:
    """Definition that could not be flattened during a lenient run."""

    name: str
    error: str
    message: str


@dataclass(frozen=True)
class ExpansionReport:
    """Outcome of processing one batch of definitions."""

    resolved: tuple[ResolvedStruct, ...]
    failures: tuple[DefinitionFailure, ...]
    registry: SchemaRegistry

    @property
    def is_ok(self) -> bool:
        """Return True when every definition was flattened."""
        return not self.failures

    def resolved_struct(self, name: str) -> ResolvedStruct | None:
        """Return the last resolved struct registered under `name`."""
        for resolved in reversed(self.resolved):
            if resolved.name == name:
                return resolved
        return None
