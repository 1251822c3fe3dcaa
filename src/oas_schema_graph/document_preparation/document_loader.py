"""OpenAPI document file loading."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml


class DocumentLoadError(Exception):
    """Raised when an OpenAPI document file cannot be read."""


def load_document(document_path: Path | str) -> Mapping[str, Any]:
    """Read a YAML or JSON OpenAPI document into plain mappings and lists."""
    path = Path(document_path)
    if not path.exists():
        raise DocumentLoadError(f"OpenAPI document not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise DocumentLoadError(f"Failed to parse OpenAPI document {path}: {exc}") from exc

    if not isinstance(parsed, Mapping):
        raise DocumentLoadError(f"OpenAPI document root must be a mapping: {path}")
    return parsed
