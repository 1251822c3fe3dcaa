"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from oas_schema_graph.graph_export.export_models import ExportFormat

from .runtime_settings import Configuration, DocumentSettings, LoggingSettings, OutputSettings

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


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

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        document=_parse_document_section(parsed.get("document"), base_path),
        output=_parse_output_section(parsed.get("output"), base_path),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_document_section(value: Any, base_path: Path) -> DocumentSettings:
    section = _require_mapping(value, "document")
    raw_path = _require_non_empty_string(section.get("path"), "document.path")
    document_path = _resolve_path(base_path, raw_path)
    if not document_path.exists():
        raise ConfigurationError(f"OpenAPI document not found: {document_path}")
    return DocumentSettings(path=document_path)


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    raw_format = _require_non_empty_string(
        section.get("format", ExportFormat.JSON.value), "output.format"
    ).lower()
    try:
        export_format = ExportFormat(raw_format)
    except ValueError as exc:
        supported = ", ".join(item.value for item in ExportFormat)
        raise ConfigurationError(f"output.format must be one of: {supported}.") from exc
    raw_directory = _optional_string(section.get("directory"), "output.directory")
    directory = _resolve_path(base_path, raw_directory) if raw_directory else base_path
    return OutputSettings(export_format=export_format, directory=directory)


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(
        section.get("level", DEFAULT_LOG_LEVEL), "logging.level"
    ).upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of: {', '.join(LOG_LEVELS)}.")
    return LoggingSettings(level=level)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


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


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
