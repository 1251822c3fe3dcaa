"""Class-diagram graph entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class SchemaProperty:  # pylint: disable=too-many-instance-attributes
    """Leaf row of a class: one property, primitive value or combiner alternative."""

    key: str
    name: str
    synthetic_name: bool
    property_type: str
    required: bool
    deprecated: bool
    property_type_deprecated: bool
    schema_object: Any
    shared_schema_objects: list[Any] = field(default_factory=list)


@dataclass(eq=False)
class SchemaClass:  # pylint: disable=too-many-instance-attributes
    """One node per distinct (structural hash, title) pair."""

    key: str
    name: str
    is_class: bool
    deprecated: bool
    synthetic_name: bool = False
    properties: list[SchemaProperty] = field(default_factory=list)
    same_hash_objects: list[Any] = field(default_factory=list)
    shared_schema_objects: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class SchemaRelation:
    """Directed edge from a leaf property to the class it references."""

    leaf_property_key: str
    reference_class_key: str
    primary: bool = True


@dataclass(frozen=True)
class SchemaGraphContent:
    """Transformation output consumed by diagram renderers."""

    classes: list[SchemaClass]
    relations: list[SchemaRelation]

    def find_class(self, key: str) -> SchemaClass | None:
        return next(
            (schema_class for schema_class in self.classes if schema_class.key == key), None
        )

    def find_classes_by_name(self, name: str) -> list[SchemaClass]:
        return [schema_class for schema_class in self.classes if schema_class.name == name]
