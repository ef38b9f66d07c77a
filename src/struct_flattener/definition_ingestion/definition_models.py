"""Definition ingestion entities."""

from __future__ import annotations

from dataclasses import dataclass

from struct_flattener.flattening import FlattenError
from struct_flattener.schema_registry import StructDefinition


@dataclass(frozen=True)
class DefinitionRejection:
    """Definition that was read but cannot reach the flattening engine."""

    name: str
    position: int
    error: FlattenError


@dataclass(frozen=True)
class DefinitionDocument:
    """Result of ingesting a definition document."""

    definitions: tuple[StructDefinition, ...]
    rejections: tuple[DefinitionRejection, ...] = ()
