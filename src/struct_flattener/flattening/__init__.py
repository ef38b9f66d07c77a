"""Flattening engine exports."""

from .flatten_errors import (
    DuplicateDefinition,
    FlattenError,
    MalformedFlattenMarker,
    UnknownFlattenTarget,
)
from .flattening_engine import (
    DuplicatePolicy,
    FlatteningEngine,
    flatten_definition,
    resolve_type_identifier,
)

__all__ = [
    "DuplicateDefinition",
    "DuplicatePolicy",
    "FlattenError",
    "FlatteningEngine",
    "MalformedFlattenMarker",
    "UnknownFlattenTarget",
    "flatten_definition",
    "resolve_type_identifier",
]
