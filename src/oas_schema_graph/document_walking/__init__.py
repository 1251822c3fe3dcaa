"""Document walking exports."""

from .document_walker import (
    ADDITIONAL_PROPERTIES_ALIAS,
    HTTP_METHODS,
    DocumentWalker,
    walk_document,
)
from .json_paths import declaration_paths_to_string, json_path_to_string, scope_to_string
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
    Visit,
    WalkerHooks,
)

__all__ = [
    "ADDITIONAL_PROPERTIES_ALIAS",
    "HTTP_METHODS",
    "DocumentWalker",
    "walk_document",
    "declaration_paths_to_string",
    "json_path_to_string",
    "scope_to_string",
    "CombinerItemVisit",
    "CombinerVisit",
    "Descent",
    "HeaderVisit",
    "MediaTypeVisit",
    "OperationVisit",
    "ParameterVisit",
    "PathVisit",
    "RequestBodyVisit",
    "ResponseVisit",
    "SchemaPropertyVisit",
    "SchemaVisit",
    "Visit",
    "WalkerHooks",
]
