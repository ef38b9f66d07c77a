"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from struct_flattener.flattening import DuplicatePolicy

from .runtime_settings import (
    Configuration,
    FailureMode,
    FlattenMarkerSettings,
    OutputFormat,
    OutputSettings,
    ProcessingOrder,
    RegistrySettings,
    RunSettings,
)

_MARKER_NAME_REGEX = re.compile(r"^[A-Za-z_][A-Za-z0-9_:]*$")

_EnumT = TypeVar("_EnumT", bound=Enum)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_configuration() -> Configuration:
    """Return the configuration used when no settings file is given."""
    return Configuration()


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        flatten_marker=_parse_flatten_marker_section(parsed.get("flatten_marker")),
        registry=_parse_registry_section(parsed.get("registry")),
        run=_parse_run_section(parsed.get("run")),
        output=_parse_output_section(parsed.get("output")),
    )


def _parse_flatten_marker_section(value: Any) -> FlattenMarkerSettings:
    section = _optional_mapping(value, "flatten_marker")
    name = _require_non_empty_string(section.get("name", "flatten"), "flatten_marker.name")
    if not _MARKER_NAME_REGEX.match(name):
        raise ConfigurationError(f"flatten_marker.name '{name}' is not a valid attribute name.")
    require_first = _require_bool(
        section.get("require_first", False), "flatten_marker.require_first"
    )
    return FlattenMarkerSettings(name=name, require_first=require_first)


def _parse_registry_section(value: Any) -> RegistrySettings:
    section = _optional_mapping(value, "registry")
    duplicate_policy = _require_choice(
        section.get("duplicate_policy", DuplicatePolicy.ERROR.value),
        DuplicatePolicy,
        "registry.duplicate_policy",
    )
    return RegistrySettings(duplicate_policy=duplicate_policy)


def _parse_run_section(value: Any) -> RunSettings:
    section = _optional_mapping(value, "run")
    failure_mode = _require_choice(
        section.get("failure_mode", FailureMode.STRICT.value), FailureMode, "run.failure_mode"
    )
    processing_order = _require_choice(
        section.get("processing_order", ProcessingOrder.SOURCE.value),
        ProcessingOrder,
        "run.processing_order",
    )
    return RunSettings(failure_mode=failure_mode, processing_order=processing_order)


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    output_format = _require_choice(
        section.get("format", OutputFormat.YAML.value), OutputFormat, "output.format"
    )
    return OutputSettings(format=output_format)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_choice(value: Any, choices: type[_EnumT], field_name: str) -> _EnumT:
    text = _require_non_empty_string(value, field_name).lower()
    try:
        return choices(text)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in choices)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc
