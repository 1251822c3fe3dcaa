"""Stateful class-diagram graph builder driven by walker hooks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from oas_schema_graph.document_walking.walker_contracts import Descent
from oas_schema_graph.schema_metadata.metadata_models import PreparedDocument
from oas_schema_graph.schema_metadata.schema_hashing import (
    lookup_shared_schema,
    resolve_shared_schema_names,
    schema_hash_with_title,
)
from oas_schema_graph.schema_metadata.schema_naming import (
    UNKNOWN_TYPE_NAME,
    array_suffix,
    collect_combiner_names,
    extract_target_value,
    has_combiners,
    is_array,
    is_object,
    is_primitive,
    property_type_name,
    schema_type,
    type_name,
)

from .graph_models import SchemaClass, SchemaGraphContent, SchemaProperty, SchemaRelation
from .traversal_context import NO_UNDO, TraversalContext, UndoAction

VALUE_PROPERTY_KEY = "value"
VALUE_PROPERTY_NAME = ""
ALTERNATIVE_PROPERTY_NAME = "-"


@dataclass(frozen=True)
class _ClassNode:
    """Class resolved for a schema, with its synthesized primitive row if any."""

    schema_class: SchemaClass
    primitive: SchemaProperty | None
    is_new: bool


class GraphBuilder:
    """Accumulates classes, properties and relations while a walk drives it.

    One instance serves exactly one transformation. Every ``create_*`` call
    records a single undo action and the matching end hook must call
    ``back()`` once, whether or not the start hook chose to recurse.
    Calls made without an enclosing class are silent no-ops.
    """

    def __init__(self, document: PreparedDocument) -> None:
        self._document_root = document.root
        self._metadata = document.metadata
        self._classes: list[SchemaClass] = []
        self._relations: list[SchemaRelation] = []
        self._classes_by_hash: dict[str, _ClassNode] = {}
        self._context = TraversalContext()

    @property
    def is_root(self) -> bool:
        """True while no property is being defined."""
        return not self._context.properties

    @property
    def last_available_class(self) -> SchemaClass | None:
        return self._context.last_available_class

    @property
    def pending_undo_actions(self) -> int:
        return self._context.depth

    def build(self) -> SchemaGraphContent:
        return SchemaGraphContent(classes=list(self._classes), relations=list(self._relations))

    def back(self) -> None:
        self._context.undo()

    def create_root_schema(
        self, schema: Mapping[str, Any], alternative_title: str | None = None
    ) -> None:
        """Open the class of a parameter, request or response schema."""
        node = self._get_or_create_class(schema, alternative_title)
        self._context.record(self._open_class(node))

    def create_property_and_connection(
        self,
        name: str,
        key: str,
        schema: Mapping[str, Any],
        is_synthetic: bool,
        extra_array_depth: bool = False,
    ) -> Descent:
        container = self._context.top_container
        owner = self._context.last_available_class
        if container is None or owner is None:
            self._context.record(NO_UNDO)
            return Descent.when(is_array(schema))

        target = extract_target_value(schema)
        depth = target.depth + 1 if extra_array_depth else target.depth
        property_node = SchemaProperty(
            key=_property_key(container, key),
            name=name,
            synthetic_name=is_synthetic,
            property_type=property_type_name(target.schema) + array_suffix(depth),
            # aliases share a hash, which covers `required`, so they agree on it
            required=any(_declares_required(alias, name) for alias in owner.same_hash_objects),
            deprecated=self._is_own_deprecation(schema),
            property_type_deprecated=bool(schema.get("deprecated"))
            or bool(target.schema.get("deprecated")),
            schema_object=schema,
        )
        self._fill_shared_schemas(schema, property_node.shared_schema_objects)
        self._context.properties.append(property_node)
        container.properties.append(property_node)

        descent = self.create_nested_schema_and_connection(schema)
        nested_undo = self._context.take_last_action()
        self._context.record(nested_undo.combine(UndoAction(properties=1)))
        return descent

    def create_nested_schema_and_connection(self, schema: Mapping[str, Any]) -> Descent:
        """Connect the current property to the class of ``schema`` when it warrants one."""
        last_property = self._context.top_property
        connectable = (
            resolve_shared_schema_names(schema, self._metadata) is not None
            or is_object(schema)
            or has_combiners(schema)
        )
        if last_property is None or not connectable:
            self._context.record(NO_UNDO)
            return Descent.when(is_array(schema) or is_object(schema))

        node = self._get_or_create_class(schema)
        self._context.record(self._open_class(node))
        self._relations.append(
            SchemaRelation(
                leaf_property_key=last_property.key,
                reference_class_key=node.schema_class.key,
            )
        )
        return Descent.when(node.is_new)

    def create_root_array_property_and_connection(self, schema: Mapping[str, Any]) -> Descent:
        """Render a root-level array as a non-object class with one element row."""
        owner = self._context.last_available_class
        if owner is not None:
            owner.is_class = False
        return self.create_property_and_connection(
            VALUE_PROPERTY_NAME, VALUE_PROPERTY_KEY, schema, True, extra_array_depth=True
        )

    def create_alternative_combiner_property_and_connection(
        self, index: int, schema: Mapping[str, Any]
    ) -> Descent:
        return self.create_property_and_connection(
            ALTERNATIVE_PROPERTY_NAME, f"{self._context.top_combiner}-{index}", schema, True
        )

    def create_combiner(self, combiner_kind: str) -> None:
        self._context.combiners.append(combiner_kind)
        self._context.record(UndoAction(combiners=1))

    def _open_class(self, node: _ClassNode) -> UndoAction:
        self._context.containers.append(node.schema_class)
        if node.primitive is None:
            return UndoAction(containers=1)
        self._context.properties.append(node.primitive)
        return UndoAction(containers=1, properties=1)

    def _get_or_create_class(
        self, schema: Mapping[str, Any], alternative_title: str | None = None
    ) -> _ClassNode:
        class_hash = schema_hash_with_title(schema, self._metadata)
        existing = self._classes_by_hash.get(class_hash)
        if existing is not None:
            aliases = existing.schema_class.same_hash_objects
            if not any(alias is schema for alias in aliases):
                aliases.append(schema)
            return replace(existing, is_new=False)

        target = extract_target_value(schema)
        primitive = is_primitive(target.schema)
        schema_class = SchemaClass(
            key=class_hash,
            name=type_name(schema, alternative_title),
            is_class=not collect_combiner_names(schema) and not primitive,
            deprecated=bool(schema.get("deprecated")),
            same_hash_objects=[schema],
        )
        self._fill_shared_schemas(schema, schema_class.shared_schema_objects)
        self._classes.append(schema_class)

        primitive_property = None
        if primitive and not has_combiners(schema):
            if target.schema is schema:
                property_type = schema_type(schema) or UNKNOWN_TYPE_NAME
            else:
                property_type = type_name(target.schema) + array_suffix(target.depth)
            primitive_property = SchemaProperty(
                key=_property_key(schema_class, VALUE_PROPERTY_KEY),
                name=VALUE_PROPERTY_NAME,
                synthetic_name=True,
                property_type=property_type,
                required=False,
                deprecated=self._is_own_deprecation(target.schema),
                property_type_deprecated=bool(target.schema.get("deprecated")),
                schema_object=schema,
            )
            self._fill_shared_schemas(schema, primitive_property.shared_schema_objects)
            schema_class.properties.append(primitive_property)

        node = _ClassNode(schema_class=schema_class, primitive=primitive_property, is_new=True)
        self._classes_by_hash[class_hash] = node
        return node

    def _fill_shared_schemas(self, schema: Mapping[str, Any], shared_schemas: list[Any]) -> None:
        for name in resolve_shared_schema_names(schema, self._metadata) or ():
            shared_schema = lookup_shared_schema(self._document_root, name)
            if shared_schema is None:
                continue
            if not any(existing is shared_schema for existing in shared_schemas):
                shared_schemas.append(shared_schema)

    def _is_own_deprecation(self, schema: Mapping[str, Any]) -> bool:
        # A deprecated shared schema marks the type, not the property using it.
        return (
            resolve_shared_schema_names(schema, self._metadata) is None
            and bool(schema.get("deprecated"))
        )


def _property_key(owner: SchemaClass, property_key: str) -> str:
    return f"{owner.key}[{property_key}]"


def _declares_required(alias: Any, property_name: str) -> bool:
    required = alias.get("required") if isinstance(alias, Mapping) else None
    return isinstance(required, list) and property_name in required
