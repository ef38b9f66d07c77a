"""Schema registry exports."""

from .schema_models import Attribute, Field, RegistryEntry, StructDefinition
from .schema_registry import SchemaRegistry

__all__ = [
    "Attribute",
    "Field",
    "RegistryEntry",
    "SchemaRegistry",
    "StructDefinition",
]
