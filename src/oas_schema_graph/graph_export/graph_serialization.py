"""JSON rendition of a class-diagram graph."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from oas_schema_graph.graph_building.graph_models import (
    SchemaClass,
    SchemaGraphContent,
    SchemaProperty,
    SchemaRelation,
)


def graph_to_dict(content: SchemaGraphContent) -> dict[str, Any]:
    """Return a JSON-ready dict; schema objects are reduced to shared schema titles."""
    return {
        "classes": [_class_to_dict(schema_class) for schema_class in content.classes],
        "relations": [_relation_to_dict(relation) for relation in content.relations],
    }


def write_graph_json(content: SchemaGraphContent, output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(graph_to_dict(content), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output


def shared_schema_titles(shared_schemas: Sequence[Any]) -> list[str]:
    return [
        str(schema.get("title"))
        for schema in shared_schemas
        if isinstance(schema, Mapping) and schema.get("title")
    ]


def _class_to_dict(schema_class: SchemaClass) -> dict[str, Any]:
    return {
        "key": schema_class.key,
        "name": schema_class.name,
        "is_class": schema_class.is_class,
        "deprecated": schema_class.deprecated,
        "synthetic_name": schema_class.synthetic_name,
        "same_hash_objects": len(schema_class.same_hash_objects),
        "shared_schemas": shared_schema_titles(schema_class.shared_schema_objects),
        "properties": [_property_to_dict(item) for item in schema_class.properties],
    }


def _property_to_dict(schema_property: SchemaProperty) -> dict[str, Any]:
    return {
        "key": schema_property.key,
        "name": schema_property.name,
        "synthetic_name": schema_property.synthetic_name,
        "type": schema_property.property_type,
        "required": schema_property.required,
        "deprecated": schema_property.deprecated,
        "type_deprecated": schema_property.property_type_deprecated,
        "shared_schemas": shared_schema_titles(schema_property.shared_schema_objects),
    }


def _relation_to_dict(relation: SchemaRelation) -> dict[str, Any]:
    return {
        "leaf_property_key": relation.leaf_property_key,
        "reference_class_key": relation.reference_class_key,
        "primary": relation.primary,
    }
