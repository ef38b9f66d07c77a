"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "flattener.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings for struct-flattener.
# Every key is optional; the values below are the defaults.

flatten_marker:
  # Attribute text that marks a field for flattening, e.g. `#[flatten]`.
  name: "flatten"
  # Only accept the marker as the first attribute of a field.
  require_first: false

registry:
  # What happens when a type name is defined twice (error or overwrite).
  duplicate_policy: "error"

run:
  # strict aborts on the first failure, lenient reports and continues.
  failure_mode: "strict"
  # source keeps document order, dependency places flatten targets first.
  processing_order: "source"

output:
  # Report format (yaml or json).
  format: "yaml"
"""


def build_placeholder_configuration() -> str:
    """Build the commented settings template."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
