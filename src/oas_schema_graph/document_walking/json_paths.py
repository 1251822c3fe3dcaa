"""Declaration path rendering."""

from __future__ import annotations

from collections.abc import Sequence

from oas_schema_graph.schema_metadata.metadata_models import JsonPath


def json_path_to_string(path: Sequence[str | int]) -> str:
    """Join path tokens with ``/``, escaping them the way JSON pointers do."""
    return "/".join(_escape_token(str(token)) for token in path)


def declaration_paths_to_string(paths: Sequence[JsonPath]) -> str:
    return ",".join(json_path_to_string(path) for path in paths)


def scope_to_string(scope: str | Sequence[str | int]) -> str:
    """Accept a scope either already rendered or as a path of tokens."""
    if isinstance(scope, str):
        return scope
    return json_path_to_string(scope)


def _escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")
