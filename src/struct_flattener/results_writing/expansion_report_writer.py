"""Expansion report serialization service."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from struct_flattener.configuration.runtime_settings import OutputFormat
from struct_flattener.expansion_run.run_contracts import (
    DefinitionFailure,
    ExpansionReport,
    ResolvedStruct,
)
from struct_flattener.schema_registry import Field


def build_report_document(report: ExpansionReport) -> dict[str, Any]:
    """Return the plain-data form of an expansion report."""
    return {
        "structs": [_struct_entry(resolved) for resolved in report.resolved],
        "failures": [_failure_entry(failure) for failure in report.failures],
    }


def render_expansion_report(report: ExpansionReport, output_format: OutputFormat) -> str:
    """Serialize an expansion report as YAML or JSON text."""
    document = build_report_document(report)
    if output_format is OutputFormat.JSON:
        return json.dumps(document, indent=2) + "\n"
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


def write_expansion_report(
    report: ExpansionReport, output_path: Path | str, output_format: OutputFormat
) -> Path:
    """Write the serialized report and return the resolved destination path."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_expansion_report(report, output_format), encoding="utf-8")
    return destination.resolve()


def _struct_entry(resolved: ResolvedStruct) -> dict[str, Any]:
    definition = resolved.definition
    return {
        "name": definition.name,
        "visibility": definition.visibility,
        "attributes": list(definition.outer_attributes),
        "fields": [_field_entry(field) for field in resolved.flat_fields],
    }


def _field_entry(field: Field) -> dict[str, Any]:
    return {
        "name": field.name,
        "type": field.type_name,
        "attributes": list(field.attributes),
    }


def _failure_entry(failure: DefinitionFailure) -> dict[str, str]:
    return {"name": failure.name, "error": failure.error, "message": failure.message}
