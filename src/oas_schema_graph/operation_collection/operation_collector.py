"""Collect the named schemas used by each operation of a prepared document."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from oas_schema_graph.document_walking.document_walker import walk_document
from oas_schema_graph.document_walking.json_paths import declaration_paths_to_string
from oas_schema_graph.document_walking.walker_contracts import (
    CombinerItemVisit,
    CombinerVisit,
    Descent,
    HeaderVisit,
    MediaTypeVisit,
    OperationVisit,
    ParameterVisit,
    PathVisit,
    RequestBodyVisit,
    ResponseVisit,
    SchemaPropertyVisit,
    SchemaVisit,
    Visit,
    WalkerHooks,
)
from oas_schema_graph.schema_metadata.metadata_models import JsonPath, PreparedDocument
from oas_schema_graph.schema_metadata.schema_hashing import (
    COMPONENTS_KEY,
    SCHEMAS_KEY,
    lookup_shared_schema,
    resolve_shared_schema_names,
    schema_hash_with_title,
)

from .operation_models import OperationData, OperationEntry, SchemaCard, SectionContent

LOGGER = logging.getLogger(__name__)


def collect_operation_data(document: PreparedDocument) -> list[OperationEntry]:
    """Return one entry per operation with its parameter, request and response cards."""
    hooks = _OperationDataHooks(document)
    walk_document(document, hooks)
    LOGGER.debug("Collected %d operations", len(hooks.entries))
    return hooks.entries


def parameter_to_schema(parameter: Mapping[str, Any]) -> dict[str, Any]:
    """Describe a parameter as a schema titled with the parameter name."""
    source = parameter.get("schema")
    schema: dict[str, Any] = dict(source) if isinstance(source, Mapping) else {}
    schema["title"] = parameter.get("name")
    description = parameter.get("description") or schema.get("description")
    if description:
        schema["description"] = description
    if "example" in schema:
        schema["examples"] = [schema["example"]]
    if parameter.get("deprecated") or schema.get("deprecated"):
        schema["deprecated"] = True
    return schema


def _empty_section() -> SectionContent:
    return SectionContent(cards=[], scope_declaration_path=(), declaration_path=())


class _OperationDataHooks(WalkerHooks):
    """Walker hooks gathering schema cards per operation section."""

    def __init__(self, document: PreparedDocument) -> None:
        self._root = document.root
        self._metadata = document.metadata
        self.entries: list[OperationEntry] = []
        self._scopes: list[JsonPath] = []
        self._parameters = _empty_section()
        self._requests: dict[str, SectionContent] = {}
        self._responses: dict[str, dict[str, SectionContent]] = {}
        self._active_section: dict[str, SectionContent] = {}
        self._active_cards: list[SchemaCard] = []
        self._seen: dict[int, Any] = {}

    def _reset_operation(self) -> None:
        self._parameters = _empty_section()
        self._requests = {}
        self._responses = {}

    def path_start(self, visit: PathVisit) -> Descent:
        self._scopes.append(visit.declaration_paths[0])
        return Descent.RECURSE

    def path_end(self, visit: PathVisit) -> None:
        self._scopes.pop()

    def operation_end(self, visit: OperationVisit) -> None:
        summary = visit.value.get("summary")
        self.entries.append(
            OperationEntry(
                path=visit.path,
                http_method=visit.method,
                summary=summary if isinstance(summary, str) else None,
                data=OperationData(
                    parameters=self._parameters,
                    requests=self._requests,
                    responses=self._responses,
                ),
            )
        )
        self._reset_operation()

    def parameter_start(self, visit: ParameterVisit) -> Descent:
        name = visit.value.get("name")
        if name:
            self._parameters.cards.append(
                SchemaCard(
                    title=str(name),
                    declaration_path=visit.declaration_paths[0],
                    schema_object=parameter_to_schema(visit.value),
                    scope_declaration_path=self._scopes[-1] if self._scopes else None,
                )
            )
        return Descent.SKIP

    def header_start(self, visit: HeaderVisit) -> Descent:
        return Descent.SKIP

    def request_body_start(self, visit: RequestBodyVisit) -> Descent:
        self._scopes.append(visit.declaration_paths[0])
        self._active_section = self._requests
        return Descent.RECURSE

    def request_body_end(self, visit: RequestBodyVisit) -> None:
        self._active_section = {}
        self._scopes.pop()

    def response_start(self, visit: ResponseVisit) -> Descent:
        self._scopes.append(visit.declaration_paths[0])
        self._active_section = self._responses.setdefault(visit.response_code, {})
        return Descent.RECURSE

    def response_end(self, visit: ResponseVisit) -> None:
        self._active_section = {}
        self._scopes.pop()

    def media_type_start(self, visit: MediaTypeVisit) -> Descent:
        declaration_path = visit.declaration_paths[0]
        self._active_cards = []
        self._seen = {}
        self._active_section[visit.media_type] = SectionContent(
            cards=self._active_cards,
            scope_declaration_path=declaration_path,
            declaration_path=declaration_path,
            scope=declaration_paths_to_string(visit.declaration_paths),
        )
        self._scopes.append(declaration_path)
        return Descent.RECURSE

    def media_type_end(self, visit: MediaTypeVisit) -> None:
        self._active_cards = []
        self._seen = {}
        self._scopes.pop()

    def schema_root_start(self, visit: SchemaVisit) -> Descent:
        return self._collect_schema(visit)

    def schema_property_start(self, visit: SchemaPropertyVisit) -> Descent:
        return self._collect_schema(visit)

    def schema_items_start(self, visit: SchemaVisit) -> Descent:
        return self._collect_schema(visit)

    def combiner_start(self, visit: CombinerVisit) -> Descent:
        return Descent.when(self._first_sighting(visit.value))

    def combiner_item_start(self, visit: CombinerItemVisit) -> Descent:
        return self._collect_schema(visit)

    def _first_sighting(self, value: Any) -> bool:
        if self._seen.get(id(value)) is value:
            return False
        self._seen[id(value)] = value
        return True

    def _collect_schema(self, visit: Visit) -> Descent:
        schema = visit.value
        if not self._first_sighting(schema):
            return Descent.SKIP
        names = resolve_shared_schema_names(schema, self._metadata)
        title = schema.get("title")
        if not title or names is None:
            return Descent.RECURSE
        for name in names:
            card = self._card_for(name, title)
            if not any(derived is schema for derived in card.derived_schemas):
                card.derived_schemas.append(schema)
        return Descent.RECURSE

    def _card_for(self, name: str, fallback_title: Any) -> SchemaCard:
        for card in self._active_cards:
            if card.schema_object_name == name:
                return card
        shared_schema = lookup_shared_schema(self._root, name)
        is_schema = isinstance(shared_schema, Mapping)
        shared_title = shared_schema.get("title") if is_schema else None
        card = SchemaCard(
            title=str(shared_title or fallback_title),
            declaration_path=(COMPONENTS_KEY, SCHEMAS_KEY, name),
            schema_object=shared_schema,
            scope_declaration_path=self._scopes[-1] if self._scopes else None,
            schema_object_name=name,
            schema_hash_with_title=(
                schema_hash_with_title(shared_schema, self._metadata) if is_schema else None
            ),
        )
        self._active_cards.append(card)
        return card
