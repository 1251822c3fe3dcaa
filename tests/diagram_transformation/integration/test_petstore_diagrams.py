"""Class-diagram graphs of the petstore sample document."""

from __future__ import annotations

from pathlib import Path

from oas_schema_graph.diagram_transformation import transform
from oas_schema_graph.document_preparation import load_document, prepare_document


def _petstore():
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "petstore.yaml"
    return prepare_document(load_document(sample_path))


def _rows(content, class_name: str) -> list[tuple[str, str]]:
    [schema_class] = content.find_classes_by_name(class_name)
    return [(row.name, row.property_type) for row in schema_class.properties]


def test_list_pets_response_graph() -> None:
    content = transform(_petstore(), "paths/~1pets/get/responses/200/content/application~1json")

    assert [schema_class.name for schema_class in content.classes] == [
        "Response 200 (application/json)",
        "Pet",
        "Owner",
        "oneOf",
        "Email",
        "object",
    ]
    assert _rows(content, "Response 200 (application/json)") == [("", "Pet[]")]
    assert _rows(content, "Pet") == [
        ("name", "string"),
        ("tag", "string"),
        ("birthday", "string<date>"),
        ("id", "integer<int64>"),
        ("owner", "Owner"),
        ("parent", "Pet"),
        ("attributes", "object"),
    ]
    assert _rows(content, "oneOf") == [("-", "Email"), ("-", "string")]
    assert _rows(content, "object") == [("additionalProperties", "string")]
    assert len(content.relations) == 6


def test_pet_class_merges_all_of_and_tracks_both_shared_schemas() -> None:
    content = transform(_petstore(), "paths/~1pets/post/responses/201/content/application~1json")

    [pet] = content.find_classes_by_name("Pet")
    required = {row.name for row in pet.properties if row.required}
    deprecated = {row.name for row in pet.properties if row.deprecated}
    assert required == {"name", "id"}
    assert deprecated == {"tag"}
    assert [shared["title"] for shared in pet.shared_schema_objects] == ["Pet", "NewPet"]
    assert content.classes[0] is pet


def test_request_media_types_are_separate_scopes() -> None:
    document = _petstore()

    json_graph = transform(document, "paths/~1pets/post/requestBody/content/application~1json")
    xml_graph = transform(document, "paths/~1pets/post/requestBody/content/application~1xml")

    assert [schema_class.name for schema_class in json_graph.classes] == ["NewPet"]
    assert [schema_class.name for schema_class in xml_graph.classes] == ["NewPet"]


def test_path_level_parameter_is_shared_by_operations() -> None:
    content = transform(_petstore(), "paths/~1pets/parameters/0")

    [limit] = content.classes
    assert limit.name == "Parameter limit"
    assert [row.property_type for row in limit.properties] == ["integer"]
