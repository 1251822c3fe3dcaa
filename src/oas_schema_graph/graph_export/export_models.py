"""Graph export entities."""

from __future__ import annotations

from enum import Enum


class ExportFormat(str, Enum):
    """Supported output file formats."""

    JSON = "json"
    XLSX = "xlsx"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


class GraphExportError(Exception):
    """Raised when a graph cannot be exported."""
