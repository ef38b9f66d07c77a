"""Expansion run use-case service."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from struct_flattener.configuration import Configuration, FailureMode, default_configuration
from struct_flattener.definition_ingestion import DefinitionRejection
from struct_flattener.flattening import FlattenError, FlatteningEngine
from struct_flattener.schema_registry import SchemaRegistry, StructDefinition

from .processing_order import order_definitions
from .run_contracts import DefinitionFailure, ExpansionReport, ResolvedStruct

_LOGGER = logging.getLogger("struct_flattener.expansion_run")


class ExpansionRunError(Exception):
    """Raised when a strict expansion run stops at a failing definition."""

    def __init__(self, name: str, error: FlattenError) -> None:
        self.name = name
        self.error = error
        super().__init__(f"Failed to flatten '{name}': {error}")


def execute_expansion_run(
    definitions: Sequence[StructDefinition],
    *,
    configuration: Configuration | None = None,
    registry: SchemaRegistry | None = None,
    rejections: Sequence[DefinitionRejection] = (),
) -> ExpansionReport:
    """Flatten every definition in processing order and return the run report.

    A caller-supplied registry keeps entries from earlier runs visible, which is
    how separately processed batches can flatten each other's types. Rejections
    from ingestion are reported before any definition is flattened.
    """
    settings = configuration or default_configuration()
    resolved_registry = registry if registry is not None else SchemaRegistry()
    engine = FlatteningEngine(
        resolved_registry, duplicate_policy=settings.registry.duplicate_policy
    )
    ordered = order_definitions(definitions, settings.run.processing_order)

    resolved: list[ResolvedStruct] = []
    failures: list[DefinitionFailure] = []
    for rejection in rejections:
        failures.append(_record_failure(rejection.name, rejection.error, settings))
    for definition in ordered:
        try:
            flat_fields = engine.flatten(definition)
        except FlattenError as exc:
            failures.append(_record_failure(definition.name, exc, settings))
            continue
        resolved.append(ResolvedStruct(definition=definition, flat_fields=flat_fields))

    _LOGGER.info(
        "expansion finished: %d resolved, %d failed", len(resolved), len(failures)
    )
    return ExpansionReport(
        resolved=tuple(resolved),
        failures=tuple(failures),
        registry=resolved_registry,
    )


def _record_failure(name: str, error: FlattenError, settings: Configuration) -> DefinitionFailure:
    if settings.run.failure_mode is FailureMode.STRICT:
        raise ExpansionRunError(name, error) from error
    _LOGGER.warning("skipping '%s': %s", name, error)
    return DefinitionFailure(name=name, error=error.kind, message=str(error))
