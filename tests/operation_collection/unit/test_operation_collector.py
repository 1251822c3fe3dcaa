"""Operation data collector tests."""

from __future__ import annotations

from pathlib import Path

from oas_schema_graph.document_preparation import load_document, prepare_document
from oas_schema_graph.operation_collection.operation_collector import (
    collect_operation_data,
    parameter_to_schema,
)


def _petstore():
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "petstore.yaml"
    return prepare_document(load_document(sample_path))


def _entry(entries, path: str, method: str):
    return next(entry for entry in entries if entry.path == path and entry.http_method == method)


def test_collects_one_entry_per_operation() -> None:
    entries = collect_operation_data(_petstore())

    assert [(entry.path, entry.http_method, entry.summary) for entry in entries] == [
        ("/pets", "get", "List pets"),
        ("/pets", "post", "Create a pet"),
    ]


def test_path_level_parameter_becomes_a_card_of_each_operation() -> None:
    entries = collect_operation_data(_petstore())

    for entry in entries:
        [card] = entry.data.parameters.cards
        assert card.title == "limit"
        assert card.declaration_path == ("paths", "/pets", "parameters", 0)
        assert card.scope_declaration_path == ("paths", "/pets")
        assert card.schema_object["title"] == "limit"
        assert card.schema_object["examples"] == [20]


def test_response_cards_cover_every_shared_schema_reached() -> None:
    get_entry = _entry(collect_operation_data(_petstore()), "/pets", "get")

    [ok_section] = get_entry.data.responses["200"].values()
    assert sorted(card.title for card in ok_section.cards) == ["Email", "NewPet", "Owner", "Pet"]
    assert ok_section.scope == "paths/~1pets/get/responses/200/content/application~1json"
    [error_section] = get_entry.data.responses["default"].values()
    assert [card.title for card in error_section.cards] == ["Error"]


def test_card_records_shared_schema_and_derived_schemas() -> None:
    document = _petstore()
    post_entry = _entry(collect_operation_data(document), "/pets", "post")
    pet = document.root["components"]["schemas"]["Pet"]

    created = post_entry.data.responses["201"]["application/json"]
    cards = {card.title: card for card in created.cards}
    pet_card = cards["Pet"]
    new_pet_card = cards["NewPet"]

    assert pet_card.schema_object is pet
    assert pet_card.schema_object_name == "Pet"
    assert pet_card.declaration_path == ("components", "schemas", "Pet")
    assert pet_card.schema_hash_with_title.endswith("Pet")
    assert pet_card.derived_schemas == [pet]
    assert new_pet_card.schema_object is document.root["components"]["schemas"]["NewPet"]
    assert new_pet_card.derived_schemas == [pet]


def test_each_media_type_collects_its_own_cards() -> None:
    post_entry = _entry(collect_operation_data(_petstore()), "/pets", "post")

    requests = post_entry.data.requests
    assert list(requests) == ["application/json", "application/xml"]
    for media_type, section in requests.items():
        assert [card.title for card in section.cards] == ["NewPet"]
        assert section.declaration_path == (
            "paths",
            "/pets",
            "post",
            "requestBody",
            "content",
            media_type,
        )


def test_parameter_to_schema_prefers_parameter_description_and_keeps_schema_example() -> None:
    schema = parameter_to_schema(
        {
            "name": "limit",
            "description": "Page size",
            "deprecated": True,
            "example": 10,
            "schema": {"type": "integer", "example": 5, "description": "Schema text"},
        }
    )

    assert schema == {
        "type": "integer",
        "example": 5,
        "title": "limit",
        "description": "Page size",
        "examples": [5],
        "deprecated": True,
    }


def test_parameter_to_schema_takes_examples_from_schema_only() -> None:
    from_schema = parameter_to_schema(
        {"name": "sort", "schema": {"type": "string", "example": "name"}}
    )
    from_parameter = parameter_to_schema(
        {"name": "sort", "example": "name", "schema": {"type": "string"}}
    )

    assert from_schema["examples"] == ["name"]
    assert "examples" not in from_parameter


def test_parameter_to_schema_falls_back_to_schema_fields() -> None:
    schema = parameter_to_schema(
        {"name": "id", "schema": {"type": "string", "description": "Identifier"}}
    )

    assert schema == {"type": "string", "title": "id", "description": "Identifier"}
