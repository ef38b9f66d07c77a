"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from struct_flattener.flattening import DuplicatePolicy


class FailureMode(str, Enum):
    """How an expansion run reacts to a definition that fails to flatten."""

    STRICT = "strict"
    LENIENT = "lenient"


class ProcessingOrder(str, Enum):
    """Order in which definitions are handed to the flattening engine."""

    SOURCE = "source"
    DEPENDENCY = "dependency"


class OutputFormat(str, Enum):
    """Serialization format of the expansion report."""

    YAML = "yaml"
    JSON = "json"


@dataclass(frozen=True)
class FlattenMarkerSettings:
    """How flatten markers are recognized in field attribute lists."""

    name: str = "flatten"
    require_first: bool = False


@dataclass(frozen=True)
class RegistrySettings:
    """Registry write policy."""

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR


@dataclass(frozen=True)
class RunSettings:
    """Expansion run behaviour."""

    failure_mode: FailureMode = FailureMode.STRICT
    processing_order: ProcessingOrder = ProcessingOrder.SOURCE


@dataclass(frozen=True)
class OutputSettings:
    """Report writing defaults."""

    format: OutputFormat = OutputFormat.YAML


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    flatten_marker: FlattenMarkerSettings = field(default_factory=FlattenMarkerSettings)
    registry: RegistrySettings = field(default_factory=RegistrySettings)
    run: RunSettings = field(default_factory=RunSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
