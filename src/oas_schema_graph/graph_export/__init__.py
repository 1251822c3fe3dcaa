"""Graph export exports."""

from .export_models import ExportFormat, GraphExportError
from .graph_exporter import export_graph, parse_export_format
from .graph_serialization import graph_to_dict, write_graph_json
from .graph_workbook_writer import (
    CLASSES_SHEET_NAME,
    PROPERTIES_SHEET_NAME,
    RELATIONS_SHEET_NAME,
    write_graph_workbook,
)

__all__ = [
    "ExportFormat",
    "GraphExportError",
    "export_graph",
    "parse_export_format",
    "graph_to_dict",
    "write_graph_json",
    "CLASSES_SHEET_NAME",
    "PROPERTIES_SHEET_NAME",
    "RELATIONS_SHEET_NAME",
    "write_graph_workbook",
]
