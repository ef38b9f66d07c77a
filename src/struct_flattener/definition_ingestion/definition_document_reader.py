"""Definition document ingestion and validation service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from struct_flattener.configuration.runtime_settings import FlattenMarkerSettings
from struct_flattener.flattening import MalformedFlattenMarker
from struct_flattener.schema_registry import Field, StructDefinition

from .definition_models import DefinitionDocument, DefinitionRejection
from .flatten_marker import detect_flatten_marker

IDENTIFIER_REGEX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DefinitionDocumentError(Exception):
    """Raised when a definition document is invalid."""


def read_definition_document(
    document_path: Path | str, marker_settings: FlattenMarkerSettings | None = None
) -> DefinitionDocument:
    """Read a YAML/JSON definition document and return its definitions in order."""
    path = Path(document_path)
    if not path.exists():
        raise DefinitionDocumentError(f"Definition document not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DefinitionDocumentError(f"Failed to parse definition document: {exc}") from exc

    return parse_definition_document(payload, marker_settings)


def parse_definition_document(
    payload: Any, marker_settings: FlattenMarkerSettings | None = None
) -> DefinitionDocument:
    """Validate a decoded definition document.

    A definition with a misplaced flatten marker is returned as a rejection
    instead of a definition; the rest of the document is still read.

    Raises:
      DefinitionDocumentError: If the document structure is invalid.
    """
    settings = marker_settings or FlattenMarkerSettings()
    if not isinstance(payload, Mapping):
        raise DefinitionDocumentError("Definition document root must be a mapping.")
    structs = payload.get("structs")
    if not isinstance(structs, Sequence) or isinstance(structs, str):
        raise DefinitionDocumentError("Definition document requires a 'structs' list.")
    if not structs:
        raise DefinitionDocumentError("Definition document does not contain any structs.")

    definitions: list[StructDefinition] = []
    rejections: list[DefinitionRejection] = []
    for index, raw in enumerate(structs):
        try:
            definitions.append(_build_definition(raw, f"structs[{index}]", settings))
        except MalformedFlattenMarker as exc:
            rejections.append(
                DefinitionRejection(name=exc.host or "", position=index, error=exc)
            )
    return DefinitionDocument(definitions=tuple(definitions), rejections=tuple(rejections))


def _build_definition(
    raw: Any, location: str, settings: FlattenMarkerSettings
) -> StructDefinition:
    section = _require_mapping(raw, location)
    name = _require_identifier(section.get("name"), f"{location}.name")
    visibility = _optional_string(section.get("visibility"), f"{location}.visibility")
    outer_attributes = _string_tuple(section.get("attributes"), f"{location}.attributes")

    raw_fields = section.get("fields")
    if raw_fields is None:
        raw_fields = []
    if not isinstance(raw_fields, Sequence) or isinstance(raw_fields, str):
        raise DefinitionDocumentError(f"{location}.fields must be a list.")

    fields: list[Field] = []
    seen_names: dict[str, int] = {}
    marker_error: MalformedFlattenMarker | None = None
    for field_index, raw_field in enumerate(raw_fields):
        field_location = f"{location}.fields[{field_index}]"
        try:
            field = _build_field(raw_field, field_location, host=name, settings=settings)
        except MalformedFlattenMarker as exc:
            marker_error = marker_error or exc
            continue
        previous = seen_names.get(field.name)
        if previous is not None:
            raise DefinitionDocumentError(
                f"Duplicate field name '{field.name}' in struct '{name}' "
                f"(fields[{previous}] and fields[{field_index}])."
            )
        seen_names[field.name] = field_index
        fields.append(field)

    if marker_error is not None:
        raise marker_error
    return StructDefinition(
        name=name,
        fields=tuple(fields),
        visibility=visibility,
        outer_attributes=outer_attributes,
    )


def _build_field(
    raw: Any, location: str, *, host: str, settings: FlattenMarkerSettings
) -> Field:
    section = _require_mapping(raw, location)
    name = _require_identifier(section.get("name"), f"{location}.name")
    type_name = _require_non_empty_string(section.get("type"), f"{location}.type")
    attributes = _string_tuple(section.get("attributes"), f"{location}.attributes")
    explicit_flatten = section.get("flatten", False)
    if not isinstance(explicit_flatten, bool):
        raise DefinitionDocumentError(f"{location}.flatten must be a boolean.")

    detection = detect_flatten_marker(
        attributes,
        marker=settings.name,
        require_first=settings.require_first,
        field=name,
        host=host,
    )
    return Field(
        name=name,
        type_name=type_name,
        attributes=detection.attributes,
        is_flatten_marker=explicit_flatten or detection.is_flatten_marker,
    )


def _require_mapping(value: Any, location: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DefinitionDocumentError(f"{location} must be a mapping.")
    return value


def _require_non_empty_string(value: Any, location: str) -> str:
    if not isinstance(value, str):
        raise DefinitionDocumentError(f"{location} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise DefinitionDocumentError(f"{location} must not be empty.")
    return stripped


def _require_identifier(value: Any, location: str) -> str:
    text = _require_non_empty_string(value, location)
    if not IDENTIFIER_REGEX.match(text):
        raise DefinitionDocumentError(f"{location} '{text}' is not a valid identifier.")
    return text


def _optional_string(value: Any, location: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DefinitionDocumentError(f"{location} must be a string.")
    return value.strip()


def _string_tuple(value: Any, location: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise DefinitionDocumentError(f"{location} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise DefinitionDocumentError(f"{location} must be a string or list of strings.")
