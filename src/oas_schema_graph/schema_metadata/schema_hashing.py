"""Structural hashing and shared schema name resolution."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from .metadata_models import DocumentMetadata

COMPONENTS_KEY = "components"
SCHEMAS_KEY = "schemas"

# Documentation-only keywords do not change the shape of a schema.
_IGNORED_KEYWORDS = frozenset({"title", "description", "example", "examples", "externalDocs"})
# Keywords whose mapping keys are names chosen by the author, not keywords.
_NAME_MAP_KEYWORDS = frozenset(
    {"properties", "patternProperties", "definitions", "$defs", "dependentSchemas"}
)
# a container together with whether its keys are author-chosen names
_Node = tuple[Any, bool]
_NodeKey = tuple[int, bool]


class StructuralHasher:
    """Cycle-safe content hasher with a per-instance memo.

    Values are hashed one strongly connected component at a time, in reverse
    topological order, so every value is hashed once per hasher. Members of a
    reference cycle are hashed together by partition refinement: each round
    re-hashes every member from the previous round's digests of its cycle
    neighbours, until the number of distinct digests stops growing. Equally
    shaped values, cyclic or not, therefore hash equal.
    """

    def __init__(self) -> None:
        self._memo: dict[_NodeKey, tuple[Any, str]] = {}

    def digest(self, value: Any) -> str:
        if not _is_container(value):
            return _scalar_digest(value)
        node = (value, False)
        if not self._is_memoized(node):
            self._hash_reachable(node)
        return self._memo[_node_key(node)][1]

    def _is_memoized(self, node: _Node) -> bool:
        memoized = self._memo.get(_node_key(node))
        return memoized is not None and memoized[0] is node[0]

    def _hash_reachable(self, root: _Node) -> None:
        # iterative Tarjan; components come out after everything they reach
        indices: dict[_NodeKey, int] = {}
        lowlinks: dict[_NodeKey, int] = {}
        component_stack: list[_Node] = []
        on_stack: set[_NodeKey] = set()
        work: list[tuple[_Node, Iterator[_Node]]] = []

        def enter(node: _Node) -> None:
            key = _node_key(node)
            indices[key] = lowlinks[key] = len(indices)
            component_stack.append(node)
            on_stack.add(key)
            work.append((node, iter(_child_nodes(node))))

        enter(root)
        while work:
            node, children = work[-1]
            key = _node_key(node)
            descended = False
            for child in children:
                if self._is_memoized(child):
                    continue
                child_key = _node_key(child)
                if child_key not in indices:
                    enter(child)
                    descended = True
                    break
                if child_key in on_stack:
                    lowlinks[key] = min(lowlinks[key], indices[child_key])
            if descended:
                continue

            work.pop()
            if work:
                parent_key = _node_key(work[-1][0])
                lowlinks[parent_key] = min(lowlinks[parent_key], lowlinks[key])
            if lowlinks[key] != indices[key]:
                continue
            component: dict[_NodeKey, _Node] = {}
            while True:
                member = component_stack.pop()
                member_key = _node_key(member)
                on_stack.discard(member_key)
                component[member_key] = member
                if member_key == key:
                    break
            self._hash_component(component)

    def _hash_component(self, component: dict[_NodeKey, _Node]) -> None:
        labels = dict.fromkeys(component, "")
        distinct = 1
        while True:
            refined = {
                key: _sha256(labels[key] + self._encode(member, labels))
                for key, member in component.items()
            }
            labels = refined
            refined_distinct = len(set(refined.values()))
            if refined_distinct == distinct:
                break
            distinct = refined_distinct
        for key, member in component.items():
            self._memo[key] = (member[0], labels[key])

    def _encode(self, node: _Node, labels: Mapping[_NodeKey, str]) -> str:
        value, names_mapping = node
        parts = []
        for name, child, child_names_mapping in _edges(value, names_mapping):
            if _is_container(child):
                child_key = (id(child), child_names_mapping)
                if child_key in labels:
                    child_digest = labels[child_key]
                else:
                    child_digest = self._memo[child_key][1]
            else:
                child_digest = _scalar_digest(child)
            parts.append(child_digest if name is None else f"{name}:{child_digest}")
        if isinstance(value, Mapping):
            return "{" + ",".join(parts) + "}"
        return "[" + ",".join(parts) + "]"


def structural_hash(value: Any) -> str:
    """Return the structural content hash of ``value``."""
    return StructuralHasher().digest(value)


def calculate_content_hash(schema: Any, metadata: DocumentMetadata) -> str:
    """Return the content hash recorded for ``schema``, computing it when absent."""
    attached = metadata.get(schema).content_hash
    if attached is not None:
        return attached
    return structural_hash(schema)


def schema_hash_with_title(schema: Mapping[str, Any], metadata: DocumentMetadata) -> str:
    """Return the dedup key of a schema: its content hash followed by its title."""
    return calculate_content_hash(schema, metadata) + str(schema.get("title"))


def resolve_shared_schema_names(
    schema: Any, metadata: DocumentMetadata
) -> tuple[str, ...] | None:
    """Return the component schema names ``schema`` was inlined from, or None."""
    names = []
    for ref in metadata.get(schema).inlined_from:
        tokens = ref_to_json_path(ref)
        if tokens and tokens[-1]:
            names.append(tokens[-1])
    return tuple(names) if names else None


def lookup_shared_schema(document: Mapping[str, Any], name: str) -> Any:
    """Return ``components.schemas[name]`` of the document, or None."""
    components = document.get(COMPONENTS_KEY)
    if not isinstance(components, Mapping):
        return None
    schemas = components.get(SCHEMAS_KEY)
    if not isinstance(schemas, Mapping):
        return None
    return schemas.get(name)


def ref_to_json_path(ref: str) -> tuple[str, ...]:
    """Split a local ``#/a/b`` reference into decoded JSON pointer tokens."""
    pointer = ref.split("#", 1)[1] if "#" in ref else ref
    if not pointer:
        return ()
    return tuple(
        _decode_json_pointer_token(token) for token in pointer.lstrip("/").split("/")
    )


def _decode_json_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _node_key(node: _Node) -> _NodeKey:
    return id(node[0]), node[1]


def _edges(value: Any, names_mapping: bool) -> Iterator[tuple[str | None, Any, bool]]:
    """Yield ``(encoded key, child, child is a name map)`` for each counted child."""
    if isinstance(value, Mapping):
        for key in sorted(value, key=str):
            if not names_mapping and key in _IGNORED_KEYWORDS:
                continue
            yield (
                json.dumps(str(key)),
                value[key],
                not names_mapping and key in _NAME_MAP_KEYWORDS,
            )
    else:
        for item in value:
            yield None, item, False


def _child_nodes(node: _Node) -> list[_Node]:
    return [
        (child, child_names_mapping)
        for _, child, child_names_mapping in _edges(*node)
        if _is_container(child)
    ]


def _scalar_digest(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or _is_sequence(value)
