"""Results writing exports."""

from .expansion_report_writer import (
    build_report_document,
    render_expansion_report,
    write_expansion_report,
)

__all__ = ["build_report_document", "render_expansion_report", "write_expansion_report"]
