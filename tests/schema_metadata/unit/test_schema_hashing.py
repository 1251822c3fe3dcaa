"""Structural hashing tests."""

from __future__ import annotations

from oas_schema_graph.schema_metadata.metadata_models import DocumentMetadata, SchemaMetadata
from oas_schema_graph.schema_metadata.schema_hashing import (
    StructuralHasher,
    calculate_content_hash,
    lookup_shared_schema,
    ref_to_json_path,
    resolve_shared_schema_names,
    schema_hash_with_title,
    structural_hash,
)


def _self_referencing_object() -> dict:
    schema = {"type": "object", "properties": {}}
    schema["properties"]["parent"] = schema
    return schema


def test_hash_ignores_documentation_keywords() -> None:
    documented = {"type": "string", "title": "Name", "description": "Full name", "example": "Ada"}

    assert structural_hash(documented) == structural_hash({"type": "string"})


def test_hash_is_independent_of_key_order() -> None:
    first = {"type": "object", "properties": {"a": {"type": "string"}, "b": {"type": "integer"}}}
    second = {"properties": {"b": {"type": "integer"}, "a": {"type": "string"}}, "type": "object"}

    assert structural_hash(first) == structural_hash(second)


def test_hash_differs_for_different_shapes() -> None:
    assert structural_hash({"type": "string"}) != structural_hash({"type": "integer"})
    assert structural_hash({"type": "object", "required": ["a"]}) != structural_hash(
        {"type": "object"}
    )


def test_property_named_like_documentation_keyword_still_counts() -> None:
    with_title_property = {"type": "object", "properties": {"title": {"type": "string"}}}

    assert structural_hash(with_title_property) != structural_hash(
        {"type": "object", "properties": {}}
    )


def test_equally_shaped_cycles_hash_equal() -> None:
    first = _self_referencing_object()
    second = _self_referencing_object()

    assert first is not second
    assert structural_hash(first) == structural_hash(second)


def test_cyclic_schema_hash_differs_from_acyclic_one() -> None:
    acyclic = {"type": "object", "properties": {"parent": {"type": "object", "properties": {}}}}

    assert structural_hash(_self_referencing_object()) != structural_hash(acyclic)


def test_hasher_memo_returns_same_digest_for_repeated_calls() -> None:
    hasher = StructuralHasher()
    shared = {"type": "string", "format": "email"}
    document = {"a": shared, "b": [shared, shared]}

    first = hasher.digest(document)

    assert hasher.digest(document) == first
    assert hasher.digest(shared) == structural_hash(shared)


def test_calculate_content_hash_prefers_attached_hash() -> None:
    schema = {"type": "string"}
    metadata = DocumentMetadata()

    assert calculate_content_hash(schema, metadata) == structural_hash(schema)

    metadata.set(schema, SchemaMetadata(content_hash="attached"))

    assert calculate_content_hash(schema, metadata) == "attached"


def test_schema_hash_with_title_separates_equally_shaped_schemas() -> None:
    metadata = DocumentMetadata()
    cat = {"type": "object", "title": "Cat"}
    dog = {"type": "object", "title": "Dog"}

    assert calculate_content_hash(cat, metadata) == calculate_content_hash(dog, metadata)
    assert schema_hash_with_title(cat, metadata) != schema_hash_with_title(dog, metadata)
    assert schema_hash_with_title(cat, metadata).endswith("Cat")


def test_ref_to_json_path_decodes_pointer_tokens() -> None:
    assert ref_to_json_path("#/components/schemas/Pet") == ("components", "schemas", "Pet")
    assert ref_to_json_path("#/components/schemas/a~1b~0c") == ("components", "schemas", "a/b~c")
    assert ref_to_json_path("#") == ()


def test_resolve_shared_schema_names_reads_inlined_from() -> None:
    metadata = DocumentMetadata()
    schema = {"type": "object"}

    assert resolve_shared_schema_names(schema, metadata) is None

    metadata.set(
        schema,
        SchemaMetadata(inlined_from=("#/components/schemas/Pet", "#/components/schemas/NewPet")),
    )

    assert resolve_shared_schema_names(schema, metadata) == ("Pet", "NewPet")


def test_lookup_shared_schema_returns_none_when_missing() -> None:
    pet = {"type": "object"}
    document = {"components": {"schemas": {"Pet": pet}}}

    assert lookup_shared_schema(document, "Pet") is pet
    assert lookup_shared_schema(document, "Owner") is None
    assert lookup_shared_schema({}, "Pet") is None


def _mutually_referencing_schemas(count: int) -> list[dict]:
    schemas: list[dict] = [{"type": "object", "properties": {}} for _ in range(count)]
    for index, schema in enumerate(schemas):
        for other, target in enumerate(schemas):
            if other != index:
                schema["properties"][f"link{other}"] = target
    return schemas


def test_mutually_referencing_schemas_hash_equal_across_copies() -> None:
    first = _mutually_referencing_schemas(10)
    second = _mutually_referencing_schemas(10)
    hasher = StructuralHasher()

    digests = [hasher.digest(schema) for schema in first]

    assert digests == [structural_hash(schema) for schema in second]
    assert len(set(digests)) == 10
