"""Definition ordering strategies."""

from __future__ import annotations

from collections.abc import Sequence

from struct_flattener.configuration.runtime_settings import ProcessingOrder
from struct_flattener.flattening import resolve_type_identifier
from struct_flattener.schema_registry import StructDefinition


def order_definitions(
    definitions: Sequence[StructDefinition], processing_order: ProcessingOrder
) -> tuple[StructDefinition, ...]:
    """Return definitions in the sequence they should reach the engine."""
    if processing_order is ProcessingOrder.SOURCE:
        return tuple(definitions)
    return _dependency_order(definitions)


def _dependency_order(definitions: Sequence[StructDefinition]) -> tuple[StructDefinition, ...]:
    """Stable topological order over flatten references.

    A definition is emitted once every flatten target it names that is defined in
    the same batch has been emitted. Whatever remains (cycles, or definitions
    waiting on a blocked one) follows in source order so the engine reports it.
    """
    defined = {definition.name for definition in definitions}
    pending = list(definitions)
    emitted: list[StructDefinition] = []
    emitted_names: set[str] = set()

    progressed = True
    while pending and progressed:
        progressed = False
        remaining: list[StructDefinition] = []
        for definition in pending:
            targets = {resolve_type_identifier(target) for target in definition.flatten_targets()}
            waiting_on = {
                target
                for target in targets
                if target in defined and target not in emitted_names and target != definition.name
            }
            if waiting_on:
                remaining.append(definition)
                continue
            emitted.append(definition)
            emitted_names.add(definition.name)
            progressed = True
        pending = remaining

    return tuple(emitted + pending)
