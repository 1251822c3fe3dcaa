"""OpenAPI document to class-diagram graph transformation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from oas_schema_graph.document_preparation.document_normalizer import prepare_document
from oas_schema_graph.document_walking.document_walker import (
    ADDITIONAL_PROPERTIES_ALIAS,
    walk_document,
)
from oas_schema_graph.document_walking.json_paths import (
    declaration_paths_to_string,
    scope_to_string,
)
from oas_schema_graph.document_walking.walker_contracts import (
    CombinerItemVisit,
    CombinerVisit,
    Descent,
    HeaderVisit,
    MediaTypeVisit,
    ParameterVisit,
    RequestBodyVisit,
    ResponseVisit,
    SchemaPropertyVisit,
    SchemaVisit,
    WalkerHooks,
)
from oas_schema_graph.graph_building.graph_builder import GraphBuilder
from oas_schema_graph.graph_building.graph_models import SchemaGraphContent
from oas_schema_graph.schema_metadata.metadata_models import JsonPath, PreparedDocument
from oas_schema_graph.schema_metadata.schema_naming import ANY_OF, ONE_OF

LOGGER = logging.getLogger(__name__)

ADDITIONAL_PROPERTIES_NAME = "additionalProperties"

Scope = str | Sequence[str | int]


def transform(document: PreparedDocument, scope: Scope) -> SchemaGraphContent:
    """Build the class-diagram graph of one operation parameter, request or response."""
    scope_path = scope_to_string(scope)
    builder = GraphBuilder(document)
    walk_document(document, DiagramHooks(builder, scope_path))
    content = builder.build()
    LOGGER.debug(
        "Transformed scope %s into %d classes and %d relations",
        scope_path,
        len(content.classes),
        len(content.relations),
    )
    return content


def transform_document(raw_document: Mapping[str, Any], scope: Scope) -> SchemaGraphContent:
    """Prepare a raw document and transform it."""
    return transform(prepare_document(raw_document), scope)


class DiagramHooks(WalkerHooks):
    """Walker hooks restricting the graph to one scope and feeding the builder."""

    def __init__(self, builder: GraphBuilder, scope_path: str) -> None:
        self._builder = builder
        self._scope_path = scope_path
        self._synthetic_names: list[str] = []

    def response_start(self, visit: ResponseVisit) -> Descent:
        if visit.value_already_visited:
            return Descent.SKIP
        self._synthetic_names.append(f"Response {visit.response_code}")
        return Descent.RECURSE

    def response_end(self, visit: ResponseVisit) -> None:
        if not visit.value_already_visited:
            self._synthetic_names.pop()

    def request_body_start(self, visit: RequestBodyVisit) -> Descent:
        if visit.value_already_visited:
            return Descent.SKIP
        self._synthetic_names.append("Request")
        return Descent.RECURSE

    def request_body_end(self, visit: RequestBodyVisit) -> None:
        if not visit.value_already_visited:
            self._synthetic_names.pop()

    def header_start(self, visit: HeaderVisit) -> Descent:
        self._synthetic_names.append(f"Header {visit.header}")
        return self._in_scope(visit.declaration_paths)

    def header_end(self, visit: HeaderVisit) -> None:
        self._synthetic_names.pop()

    def parameter_start(self, visit: ParameterVisit) -> Descent:
        self._synthetic_names.append(f"Parameter {visit.value.get('name')}")
        return self._in_scope(visit.declaration_paths)

    def parameter_end(self, visit: ParameterVisit) -> None:
        self._synthetic_names.pop()

    def media_type_start(self, visit: MediaTypeVisit) -> Descent:
        self._synthetic_names.append(f"({visit.media_type})")
        return self._in_scope(visit.declaration_paths)

    def media_type_end(self, visit: MediaTypeVisit) -> None:
        self._synthetic_names.pop()

    def schema_root_start(self, visit: SchemaVisit) -> Descent:
        self._builder.create_root_schema(visit.value, self._alternative_title())
        return Descent.when(not visit.value_already_visited)

    def schema_root_end(self, visit: SchemaVisit) -> None:
        self._builder.back()

    def schema_property_start(self, visit: SchemaPropertyVisit) -> Descent:
        is_additional = visit.property_name == ADDITIONAL_PROPERTIES_ALIAS
        return self._builder.create_property_and_connection(
            ADDITIONAL_PROPERTIES_NAME if is_additional else visit.property_name,
            f"'{visit.property_name}'",
            visit.value,
            is_additional,
        )

    def schema_property_end(self, visit: SchemaPropertyVisit) -> None:
        self._builder.back()

    def schema_items_start(self, visit: SchemaVisit) -> Descent:
        if self._builder.is_root:
            return self._builder.create_root_array_property_and_connection(visit.value)
        return self._builder.create_nested_schema_and_connection(visit.value)

    def schema_items_end(self, visit: SchemaVisit) -> None:
        self._builder.back()

    def combiner_start(self, visit: CombinerVisit) -> Descent:
        self._builder.create_combiner(visit.combiner_kind)
        if visit.combiner_kind in (ONE_OF, ANY_OF):
            return Descent.when(not visit.value_already_visited)
        # allOf branches are already folded into the owning schema.
        return Descent.SKIP

    def combiner_end(self, visit: CombinerVisit) -> None:
        self._builder.back()

    def combiner_item_start(self, visit: CombinerItemVisit) -> Descent:
        return self._builder.create_alternative_combiner_property_and_connection(
            visit.index, visit.value
        )

    def combiner_item_end(self, visit: CombinerItemVisit) -> None:
        self._builder.back()

    def _in_scope(self, declaration_paths: tuple[JsonPath, ...]) -> Descent:
        return Descent.when(declaration_paths_to_string(declaration_paths) == self._scope_path)

    def _alternative_title(self) -> str:
        if not self._synthetic_names:
            return ""
        if len(self._synthetic_names) == 1:
            return self._synthetic_names[-1]
        return f"{self._synthetic_names[-2]} {self._synthetic_names[-1]}"
