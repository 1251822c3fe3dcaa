"""Document walker tests."""

from __future__ import annotations

from oas_schema_graph.document_preparation import prepare_document
from oas_schema_graph.document_walking.document_walker import walk_document
from oas_schema_graph.document_walking.walker_contracts import (
    Descent,
    ParameterVisit,
    SchemaPropertyVisit,
    Visit,
    WalkerHooks,
)


class _RecordingHooks(WalkerHooks):
    """Records every hook call; recurses everywhere unless told otherwise."""

    def __init__(self, skip_operations: bool = False) -> None:
        self.events: list[str] = []
        self.visits: dict[str, list[Visit]] = {}
        self.skip_operations = skip_operations


def _recording_hook(name: str):
    def hook(self: _RecordingHooks, visit: Visit):
        self.events.append(name)
        self.visits.setdefault(name, []).append(visit)
        if name == "operation_start" and self.skip_operations:
            return Descent.SKIP
        return getattr(WalkerHooks, name)(self, visit)

    return hook


for _hook_name in [name for name in vars(WalkerHooks) if name.endswith(("_start", "_end"))]:
    setattr(_RecordingHooks, _hook_name, _recording_hook(_hook_name))


def _document() -> dict:
    return {
        "paths": {
            "/pets": {
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                    {"name": "tenant", "in": "header", "schema": {"type": "string"}},
                ],
                "get": {
                    "parameters": [
                        {"name": "limit", "in": "query", "schema": {"type": "number"}}
                    ],
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {"a": {"type": "string"}},
                                }
                            }
                        }
                    },
                    "responses": {
                        "200": {
                            "headers": {"X-Rate": {"schema": {"type": "integer"}}},
                            "content": {"text/plain": {"schema": {"type": "string"}}},
                        }
                    },
                },
            }
        }
    }


def test_walker_emits_paired_hooks_in_document_order() -> None:
    hooks = _RecordingHooks()

    walk_document(prepare_document(_document()), hooks)

    assert hooks.events == [
        "path_start",
        "operation_start",
        "parameter_start",
        "schema_root_start",
        "schema_root_end",
        "parameter_end",
        "parameter_start",
        "schema_root_start",
        "schema_root_end",
        "parameter_end",
        "request_body_start",
        "media_type_start",
        "schema_root_start",
        "schema_property_start",
        "schema_property_end",
        "schema_root_end",
        "media_type_end",
        "request_body_end",
        "response_start",
        "header_start",
        "schema_root_start",
        "schema_root_end",
        "header_end",
        "media_type_start",
        "schema_root_start",
        "schema_root_end",
        "media_type_end",
        "response_end",
        "operation_end",
        "path_end",
    ]


def test_operation_parameters_override_path_parameters() -> None:
    hooks = _RecordingHooks()

    walk_document(prepare_document(_document()), hooks)

    parameters = hooks.visits["parameter_start"]
    assert [visit.value["name"] for visit in parameters] == ["tenant", "limit"]
    assert parameters[0].declaration_paths == (("paths", "/pets", "parameters", 1),)
    assert parameters[1].declaration_paths == (("paths", "/pets", "get", "parameters", 0),)
    assert isinstance(parameters[1], ParameterVisit)


def test_skipped_node_still_gets_its_end_hook() -> None:
    hooks = _RecordingHooks(skip_operations=True)

    walk_document(prepare_document(_document()), hooks)

    assert hooks.events == ["path_start", "operation_start", "operation_end", "path_end"]


def test_walker_terminates_on_cyclic_schemas_and_flags_revisits() -> None:
    document = prepare_document(
        {
            "paths": {
                "/pets": {
                    "get": {
                        "responses": {
                            "200": {
                                "content": {
                                    "application/json": {
                                        "schema": {"$ref": "#/components/schemas/Pet"}
                                    }
                                }
                            }
                        }
                    }
                }
            },
            "components": {
                "schemas": {
                    "Pet": {
                        "type": "object",
                        "properties": {"parent": {"$ref": "#/components/schemas/Pet"}},
                    }
                }
            },
        }
    )
    hooks = _RecordingHooks()

    walk_document(document, hooks)

    properties = hooks.visits["schema_property_start"]
    assert len(properties) == 1
    assert isinstance(properties[0], SchemaPropertyVisit)
    assert properties[0].property_name == "parent"
    assert properties[0].value_already_visited is True
    assert properties[0].declaration_paths == (("components", "schemas", "Pet"),)
    assert hooks.events.count("schema_property_start") == hooks.events.count(
        "schema_property_end"
    )


def test_additional_properties_items_and_combiners_are_walked() -> None:
    document = prepare_document(
        {
            "paths": {
                "/maps": {
                    "get": {
                        "responses": {
                            "200": {
                                "content": {
                                    "application/json": {
                                        "schema": {
                                            "type": "object",
                                            "additionalProperties": {
                                                "type": "array",
                                                "items": {
                                                    "oneOf": [
                                                        {"type": "string"},
                                                        {"type": "integer"},
                                                    ]
                                                },
                                            },
                                        }
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
    )
    hooks = _RecordingHooks()

    walk_document(document, hooks)

    assert hooks.visits["schema_property_start"][0].property_name == "#additionalProperties"
    assert len(hooks.visits["schema_items_start"]) == 1
    assert hooks.visits["combiner_start"][0].combiner_kind == "oneOf"
    assert [visit.index for visit in hooks.visits["combiner_item_start"]] == [0, 1]
