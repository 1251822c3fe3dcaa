"""Format dispatch for graph export."""

from __future__ import annotations

import logging
from pathlib import Path

from oas_schema_graph.graph_building.graph_models import SchemaGraphContent

from .export_models import ExportFormat, GraphExportError
from .graph_serialization import write_graph_json
from .graph_workbook_writer import write_graph_workbook

LOGGER = logging.getLogger(__name__)


def parse_export_format(value: str | ExportFormat) -> ExportFormat:
    if isinstance(value, ExportFormat):
        return value
    try:
        return ExportFormat(str(value).strip().lower())
    except ValueError as exc:
        supported = ", ".join(item.value for item in ExportFormat)
        raise GraphExportError(
            f"Unsupported output format '{value}'. Expected one of: {supported}."
        ) from exc


def export_graph(
    content: SchemaGraphContent,
    output_path: Path | str,
    export_format: str | ExportFormat = ExportFormat.JSON,
) -> Path:
    """Write the graph in the requested format and return the written path."""
    resolved_format = parse_export_format(export_format)
    if resolved_format is ExportFormat.XLSX:
        written = write_graph_workbook(content, output_path)
    else:
        written = write_graph_json(content, output_path)
    LOGGER.debug("Exported graph as %s to %s", resolved_format.value, written)
    return written
