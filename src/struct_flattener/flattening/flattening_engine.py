"""Flatten marker resolution service."""

from __future__ import annotations

import logging
from enum import Enum

from struct_flattener.schema_registry import Field, SchemaRegistry, StructDefinition

from .flatten_errors import DuplicateDefinition, UnknownFlattenTarget

_LOGGER = logging.getLogger("struct_flattener.flattening")

_PATH_SEPARATORS = ("::", ".")


class DuplicatePolicy(str, Enum):
    """What to do when a definition reuses an already registered type name."""

    ERROR = "error"
    OVERWRITE = "overwrite"


def resolve_type_identifier(type_name: str) -> str:
    """Reduce a type reference such as `crate::nested::Inner` to its identifier."""
    identifier = type_name.strip()
    for separator in _PATH_SEPARATORS:
        if separator in identifier:
            identifier = identifier.rsplit(separator, 1)[-1]
    return identifier.strip()


class FlatteningEngine:
    """Expand struct definitions against a registry and record the results.

    Targets are always read pre-flattened from the registry, so a definition is
    walked exactly once and a flatten cycle can never be built: the cyclic
    partner is simply not registered yet.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        *,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR,
    ) -> None:
        self._registry = registry
        self._duplicate_policy = duplicate_policy

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def flatten(self, definition: StructDefinition) -> tuple[Field, ...]:
        """Resolve every flatten marker of `definition` and register the result.

        Raises:
          DuplicateDefinition: If the name is registered and the policy is ERROR.
          UnknownFlattenTarget: If a marker names a type that is not registered.
        """
        self._check_duplicate(definition.name)

        output: list[Field] = []
        for field in definition.fields:
            if not field.is_flatten_marker:
                output.append(field)
                continue
            output.extend(self._resolve_target(definition.name, field))

        entry = self._registry.register(definition.name, output)
        _LOGGER.debug("registered '%s' with %d flat fields", entry.name, len(entry.flat_fields))
        return entry.flat_fields

    def _check_duplicate(self, name: str) -> None:
        if name not in self._registry:
            return
        if self._duplicate_policy is DuplicatePolicy.ERROR:
            raise DuplicateDefinition(name)
        _LOGGER.warning("type '%s' is redefined; replacing its registered fields", name)

    def _resolve_target(self, host: str, field: Field) -> tuple[Field, ...]:
        identifier = resolve_type_identifier(field.type_name)
        target_fields = (
            self._registry.lookup(identifier) if identifier and identifier != host else None
        )
        if target_fields is None:
            raise UnknownFlattenTarget(field.type_name, host=host, field=field.name)
        _LOGGER.debug(
            "splicing %d fields of '%s' into '%s' in place of '%s'",
            len(target_fields),
            identifier,
            host,
            field.name,
        )
        return target_fields


def flatten_definition(
    definition: StructDefinition,
    registry: SchemaRegistry,
    *,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> tuple[Field, ...]:
    """Flatten one definition against `registry`."""
    engine = FlatteningEngine(registry, duplicate_policy=duplicate_policy)
    return engine.flatten(definition)
