"""Depth-first walker over a prepared OpenAPI document."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from oas_schema_graph.schema_metadata.metadata_models import JsonPath, PreparedDocument
from oas_schema_graph.schema_metadata.schema_naming import COMBINER_KINDS

from .walker_contracts import (
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
    WalkerHooks,
)

HTTP_METHODS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)
ADDITIONAL_PROPERTIES_ALIAS = "#additionalProperties"


def walk_document(document: PreparedDocument, hooks: WalkerHooks) -> None:
    """Drive ``hooks`` through every operation of ``document``."""
    DocumentWalker(document, hooks).walk()


class DocumentWalker:
    """Emits paired start/end hook calls for each structural node.

    The walker never descends into a schema that is already on the current
    descent path, so cyclic documents terminate even when a hook keeps asking
    to recurse.
    """

    def __init__(self, document: PreparedDocument, hooks: WalkerHooks) -> None:
        self._root = document.root
        self._metadata = document.metadata
        self._hooks = hooks
        self._visited: dict[int, Any] = {}
        self._descent_path: list[Any] = []

    def walk(self) -> None:
        paths = self._root.get("paths")
        if not isinstance(paths, Mapping):
            return
        for path, path_item in paths.items():
            self._walk_path(str(path), path_item, ("paths", path))

    def _walk_path(self, path: str, path_item: Any, location: JsonPath) -> None:
        visit = PathVisit(path=path, **self._visit_fields(path_item, location))
        if self._hooks.path_start(visit) is Descent.RECURSE and isinstance(path_item, Mapping):
            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if isinstance(operation, Mapping):
                    self._walk_operation(
                        path, method, operation, path_item, (*location, method)
                    )
        self._hooks.path_end(visit)

    def _walk_operation(
        self,
        path: str,
        method: str,
        operation: Mapping[str, Any],
        path_item: Mapping[str, Any],
        location: JsonPath,
    ) -> None:
        visit = OperationVisit(path=path, method=method, **self._visit_fields(operation, location))
        if self._hooks.operation_start(visit) is Descent.RECURSE:
            for parameter, parameter_location in _effective_parameters(
                path_item, operation, location
            ):
                self._walk_parameter(parameter, parameter_location)
            request_body = operation.get("requestBody")
            if isinstance(request_body, Mapping):
                self._walk_request_body(request_body, (*location, "requestBody"))
            responses = operation.get("responses")
            if isinstance(responses, Mapping):
                for code, response in responses.items():
                    if isinstance(response, Mapping):
                        self._walk_response(
                            str(code), response, (*location, "responses", code)
                        )
        self._hooks.operation_end(visit)

    def _walk_parameter(self, parameter: Mapping[str, Any], location: JsonPath) -> None:
        visit = ParameterVisit(**self._visit_fields(parameter, location))
        if self._hooks.parameter_start(visit) is Descent.RECURSE:
            self._walk_schema_or_content(parameter, location)
        self._hooks.parameter_end(visit)

    def _walk_request_body(self, request_body: Mapping[str, Any], location: JsonPath) -> None:
        visit = RequestBodyVisit(**self._visit_fields(request_body, location))
        if self._hooks.request_body_start(visit) is Descent.RECURSE:
            self._walk_content(request_body.get("content"), (*location, "content"))
        self._hooks.request_body_end(visit)

    def _walk_response(self, code: str, response: Mapping[str, Any], location: JsonPath) -> None:
        visit = ResponseVisit(response_code=code, **self._visit_fields(response, location))
        if self._hooks.response_start(visit) is Descent.RECURSE:
            headers = response.get("headers")
            if isinstance(headers, Mapping):
                for header, header_value in headers.items():
                    if isinstance(header_value, Mapping):
                        self._walk_header(
                            str(header), header_value, (*location, "headers", header)
                        )
            self._walk_content(response.get("content"), (*location, "content"))
        self._hooks.response_end(visit)

    def _walk_header(self, header: str, value: Mapping[str, Any], location: JsonPath) -> None:
        visit = HeaderVisit(header=header, **self._visit_fields(value, location))
        if self._hooks.header_start(visit) is Descent.RECURSE:
            self._walk_schema_or_content(value, location)
        self._hooks.header_end(visit)

    def _walk_schema_or_content(self, owner: Mapping[str, Any], location: JsonPath) -> None:
        schema = owner.get("schema")
        if isinstance(schema, Mapping):
            self._walk_schema_root(schema, (*location, "schema"))
        self._walk_content(owner.get("content"), (*location, "content"))

    def _walk_content(self, content: Any, location: JsonPath) -> None:
        if not isinstance(content, Mapping):
            return
        for media_type, media_type_value in content.items():
            if not isinstance(media_type_value, Mapping):
                continue
            media_location = (*location, media_type)
            visit = MediaTypeVisit(
                media_type=str(media_type),
                **self._visit_fields(media_type_value, media_location),
            )
            if self._hooks.media_type_start(visit) is Descent.RECURSE:
                schema = media_type_value.get("schema")
                if isinstance(schema, Mapping):
                    self._walk_schema_root(schema, (*media_location, "schema"))
            self._hooks.media_type_end(visit)

    def _walk_schema_root(self, schema: Mapping[str, Any], location: JsonPath) -> None:
        visit = SchemaVisit(**self._visit_fields(schema, location))
        if self._hooks.schema_root_start(visit) is Descent.RECURSE:
            self._walk_schema_children(schema, location)
        self._hooks.schema_root_end(visit)

    def _walk_schema_children(self, schema: Mapping[str, Any], location: JsonPath) -> None:
        if any(ancestor is schema for ancestor in self._descent_path):
            return
        self._descent_path.append(schema)
        try:
            properties = schema.get("properties")
            if isinstance(properties, Mapping):
                for name, property_schema in properties.items():
                    if isinstance(property_schema, Mapping):
                        self._walk_schema_property(
                            str(name), property_schema, (*location, "properties", name)
                        )
            additional_properties = schema.get("additionalProperties")
            if isinstance(additional_properties, Mapping):
                self._walk_schema_property(
                    ADDITIONAL_PROPERTIES_ALIAS,
                    additional_properties,
                    (*location, "additionalProperties"),
                )
            items = schema.get("items")
            if isinstance(items, Mapping):
                self._walk_schema_items(items, (*location, "items"))
            for combiner_kind in COMBINER_KINDS:
                alternatives = schema.get(combiner_kind)
                if isinstance(alternatives, list):
                    self._walk_combiner(combiner_kind, alternatives, (*location, combiner_kind))
        finally:
            self._descent_path.pop()

    def _walk_schema_property(
        self, name: str, schema: Mapping[str, Any], location: JsonPath
    ) -> None:
        visit = SchemaPropertyVisit(property_name=name, **self._visit_fields(schema, location))
        if self._hooks.schema_property_start(visit) is Descent.RECURSE:
            self._walk_schema_children(schema, location)
        self._hooks.schema_property_end(visit)

    def _walk_schema_items(self, schema: Mapping[str, Any], location: JsonPath) -> None:
        visit = SchemaVisit(**self._visit_fields(schema, location))
        if self._hooks.schema_items_start(visit) is Descent.RECURSE:
            self._walk_schema_children(schema, location)
        self._hooks.schema_items_end(visit)

    def _walk_combiner(self, combiner_kind: str, alternatives: list, location: JsonPath) -> None:
        visit = CombinerVisit(
            combiner_kind=combiner_kind, **self._visit_fields(alternatives, location)
        )
        if self._hooks.combiner_start(visit) is Descent.RECURSE:
            for index, alternative in enumerate(alternatives):
                if isinstance(alternative, Mapping):
                    self._walk_combiner_item(
                        combiner_kind, index, alternative, (*location, index)
                    )
        self._hooks.combiner_end(visit)

    def _walk_combiner_item(
        self, combiner_kind: str, index: int, schema: Mapping[str, Any], location: JsonPath
    ) -> None:
        visit = CombinerItemVisit(
            combiner_kind=combiner_kind,
            index=index,
            **self._visit_fields(schema, location),
        )
        if self._hooks.combiner_item_start(visit) is Descent.RECURSE:
            self._walk_schema_children(schema, location)
        self._hooks.combiner_item_end(visit)

    def _visit_fields(self, value: Any, location: JsonPath) -> dict[str, Any]:
        return {
            "value": value,
            "declaration_paths": self._metadata.get(value).origins or (location,),
            "value_already_visited": self._mark_visited(value),
        }

    def _mark_visited(self, value: Any) -> bool:
        previous = self._visited.get(id(value))
        self._visited[id(value)] = value
        return previous is value


def _effective_parameters(
    path_item: Mapping[str, Any], operation: Mapping[str, Any], location: JsonPath
) -> Iterator[tuple[Mapping[str, Any], JsonPath]]:
    """Yield path-level parameters not overridden by the operation, then the operation's own."""
    operation_parameters = _parameter_entries(operation, location)
    overridden = {_parameter_identity(parameter) for parameter, _ in operation_parameters}
    path_location = location[:-1]
    for parameter, parameter_location in _parameter_entries(path_item, path_location):
        if _parameter_identity(parameter) not in overridden:
            yield parameter, parameter_location
    yield from operation_parameters


def _parameter_entries(
    owner: Mapping[str, Any], location: JsonPath
) -> list[tuple[Mapping[str, Any], JsonPath]]:
    parameters = owner.get("parameters")
    if not isinstance(parameters, list):
        return []
    return [
        (parameter, (*location, "parameters", index))
        for index, parameter in enumerate(parameters)
        if isinstance(parameter, Mapping)
    ]


def _parameter_identity(parameter: Mapping[str, Any]) -> tuple[Any, Any]:
    return parameter.get("name"), parameter.get("in")
