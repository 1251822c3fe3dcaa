"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from oas_schema_graph.graph_export.export_models import ExportFormat


@dataclass(frozen=True)
class DocumentSettings:
    """OpenAPI document to read."""

    path: Path


@dataclass(frozen=True)
class OutputSettings:
    """Where and how diagram graphs are written."""

    export_format: ExportFormat
    directory: Path


@dataclass(frozen=True)
class LoggingSettings:
    level: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    document: DocumentSettings
    output: OutputSettings
    logging: LoggingSettings
