"""Schema metadata, hashing and naming exports."""

from .metadata_models import DocumentMetadata, JsonPath, PreparedDocument, SchemaMetadata
from .schema_hashing import (
    StructuralHasher,
    calculate_content_hash,
    lookup_shared_schema,
    ref_to_json_path,
    resolve_shared_schema_names,
    schema_hash_with_title,
    structural_hash,
)
from .schema_naming import (
    PRIMITIVE_TYPES,
    TargetValue,
    array_suffix,
    collect_combiner_names,
    extract_target_value,
    has_combiners,
    property_type_name,
    type_name,
)

__all__ = [
    "DocumentMetadata",
    "JsonPath",
    "PreparedDocument",
    "SchemaMetadata",
    "StructuralHasher",
    "calculate_content_hash",
    "lookup_shared_schema",
    "ref_to_json_path",
    "resolve_shared_schema_names",
    "schema_hash_with_title",
    "structural_hash",
    "PRIMITIVE_TYPES",
    "TargetValue",
    "array_suffix",
    "collect_combiner_names",
    "extract_target_value",
    "has_combiners",
    "property_type_name",
    "type_name",
]
