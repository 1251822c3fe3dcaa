"""Display naming rules and array unwrapping for schemas."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

TYPE_ARRAY = "array"
TYPE_OBJECT = "object"
SYNTHETIC_TYPE_ANY = "any"
SYNTHETIC_TYPE_NOTHING = "nothing"
UNKNOWN_TYPE_NAME = "unknown"

ONE_OF = "oneOf"
ANY_OF = "anyOf"
ALL_OF = "allOf"
COMBINER_KINDS: tuple[str, ...] = (ALL_OF, ONE_OF, ANY_OF)

PRIMITIVE_TYPES = frozenset(
    {"boolean", "integer", "number", "string", SYNTHETIC_TYPE_NOTHING, SYNTHETIC_TYPE_ANY}
)


@dataclass(frozen=True)
class TargetValue:
    """Element schema reached by unwrapping nested arrays."""

    schema: Mapping[str, Any]
    depth: float


def schema_type(schema: Mapping[str, Any]) -> str | None:
    """Return the declared type, picking the first non-null entry of a type list."""
    declared = schema.get("type")
    if isinstance(declared, str):
        return declared
    if isinstance(declared, list):
        for candidate in declared:
            if isinstance(candidate, str) and candidate != "null":
                return candidate
    return None


def is_array(schema: Mapping[str, Any]) -> bool:
    return schema_type(schema) == TYPE_ARRAY


def is_object(schema: Mapping[str, Any]) -> bool:
    return schema_type(schema) == TYPE_OBJECT


def is_primitive(schema: Mapping[str, Any]) -> bool:
    return schema_type(schema) in PRIMITIVE_TYPES


def extract_target_value(schema: Any, path: tuple[Any, ...] = ()) -> TargetValue:
    """Follow ``items`` until a non-array schema is reached, counting the nesting depth.

    The depth is infinite when the chain revisits a schema already seen on this
    unwrap path. A missing element schema is treated as ``any``.
    """
    if not isinstance(schema, Mapping):
        return TargetValue(schema={"type": SYNTHETIC_TYPE_ANY}, depth=len(path))
    if any(visited is schema for visited in path):
        return TargetValue(schema=schema, depth=math.inf)
    if is_array(schema):
        return extract_target_value(schema.get("items"), (*path, schema))
    return TargetValue(schema=schema, depth=len(path))


def array_suffix(depth: float) -> str:
    """Render ``[]`` per nesting level, or ``[]...`` for a self-referential array."""
    if math.isinf(depth):
        return "[]..."
    return "[]" * int(depth)


def collect_combiner_names(schema: Mapping[str, Any]) -> str | None:
    names = [kind for kind in (ONE_OF, ANY_OF) if isinstance(schema.get(kind), list)]
    return ", ".join(names) if names else None


def has_combiners(schema: Mapping[str, Any]) -> bool:
    return any(kind in schema for kind in COMBINER_KINDS)


def type_name(schema: Mapping[str, Any], alternative_title: str | None = None) -> str:
    """Return the class display name of a schema."""
    title = schema.get("title")
    if title is not None:
        return str(title)
    if alternative_title:
        return alternative_title
    return collect_combiner_names(schema) or schema_type(schema) or UNKNOWN_TYPE_NAME


def property_type_name(schema: Mapping[str, Any]) -> str:
    """Return the rendered type of a property, ``type<format>`` when a format is declared."""
    title = schema.get("title")
    if title is not None:
        return str(title)
    combiner_names = collect_combiner_names(schema)
    if combiner_names:
        return combiner_names
    declared_type = schema_type(schema)
    declared_format = schema.get("format")
    if declared_type and declared_format:
        return f"{declared_type}<{declared_format}>"
    return declared_type or UNKNOWN_TYPE_NAME
