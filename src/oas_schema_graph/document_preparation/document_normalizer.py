"""Document preparation: in-place reference resolution, allOf merging and metadata."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from oas_schema_graph.schema_metadata.metadata_models import (
    DocumentMetadata,
    JsonPath,
    PreparedDocument,
)
from oas_schema_graph.schema_metadata.schema_hashing import (
    COMPONENTS_KEY,
    SCHEMAS_KEY,
    StructuralHasher,
    ref_to_json_path,
)
from oas_schema_graph.schema_metadata.schema_naming import ALL_OF

LOGGER = logging.getLogger(__name__)

REF_KEY = "$ref"
_MISSING = object()


class DocumentPreparationError(Exception):
    """Raised when a document cannot be prepared for traversal."""


def prepare_document(raw: Any) -> PreparedDocument:
    """Return a denormalized copy of ``raw`` with its metadata side table.

    Local references are replaced by the referenced objects, so the result may
    contain identity cycles. ``raw`` itself is never modified.
    """
    if not isinstance(raw, Mapping):
        raise DocumentPreparationError("OpenAPI document root must be a mapping.")

    root = copy.deepcopy(raw)
    if not isinstance(root, dict):
        root = dict(root)
    metadata = DocumentMetadata()
    _record_origins(root, metadata)
    _assign_synthetic_titles(root, metadata)
    _ReferenceResolver(root, metadata).resolve()
    _merge_all_of_schemas(root, metadata)
    _attach_content_hashes(root, metadata)
    LOGGER.debug("Prepared document with %d annotated objects", len(metadata))
    return PreparedDocument(root=root, metadata=metadata)


def _record_origins(root: dict[str, Any], metadata: DocumentMetadata) -> None:
    origins: dict[int, tuple[Any, list[JsonPath]]] = {}
    stack: list[tuple[Any, JsonPath]] = [(root, ())]
    while stack:
        value, path = stack.pop()
        entry = origins.get(id(value))
        if entry is not None:
            entry[1].append(path)
            continue
        origins[id(value)] = (value, [path])
        for key, child in reversed(list(_children(value))):
            if isinstance(child, dict | list):
                stack.append((child, (*path, key)))

    for value, paths in origins.values():
        if isinstance(value, dict) and REF_KEY not in value:
            metadata.update(value, origins=tuple(paths))


def _assign_synthetic_titles(root: dict[str, Any], metadata: DocumentMetadata) -> None:
    components = root.get(COMPONENTS_KEY)
    schemas = components.get(SCHEMAS_KEY) if isinstance(components, dict) else None
    if not isinstance(schemas, dict):
        return
    for name, schema in schemas.items():
        if isinstance(schema, dict) and REF_KEY not in schema and "title" not in schema:
            schema["title"] = str(name)
            metadata.update(schema, synthetic_title=True)


class _ReferenceResolver:
    """Replaces local ``$ref`` mappings with the objects they point to."""

    def __init__(self, root: dict[str, Any], metadata: DocumentMetadata) -> None:
        self._root = root
        self._metadata = metadata
        self._resolved: dict[int, tuple[Any, Any]] = {}

    def resolve(self) -> None:
        visited: set[int] = set()
        stack: list[Any] = [self._root]
        while stack:
            container = stack.pop()
            if id(container) in visited:
                continue
            visited.add(id(container))
            for key, child in list(_children(container)):
                resolved = self._resolve_value(child, ())
                if resolved is not child:
                    container[key] = resolved
                if isinstance(resolved, dict | list):
                    stack.append(resolved)

    def _resolve_value(self, value: Any, chain: tuple[Any, ...]) -> Any:
        if not isinstance(value, dict) or not isinstance(value.get(REF_KEY), str):
            return value
        cached = self._resolved.get(id(value))
        if cached is not None and cached[0] is value:
            return cached[1]

        ref = value[REF_KEY]
        if not ref.startswith("#"):
            LOGGER.warning("Skipping non-local reference %s", ref)
            return value
        if any(seen is value for seen in chain):
            LOGGER.warning("Skipping circular reference chain at %s", ref)
            return value
        target = self._lookup(ref, (*chain, value))
        if target is _MISSING:
            LOGGER.warning("Skipping unresolvable reference %s", ref)
            return value
        target = self._resolve_value(target, (*chain, value))
        if target is value or (isinstance(target, dict) and REF_KEY in target):
            return value

        if isinstance(target, dict) and _is_shared_schema_ref(ref):
            inlined_from = self._metadata.get(target).inlined_from
            if ref not in inlined_from:
                self._metadata.update(target, inlined_from=(*inlined_from, ref))

        siblings = {key: item for key, item in value.items() if key != REF_KEY}
        result = target
        if siblings and isinstance(target, dict):
            result = {**target, **siblings}
            self._metadata.set(result, self._metadata.get(target))
        self._resolved[id(value)] = (value, result)
        return result

    def _lookup(self, ref: str, chain: tuple[Any, ...]) -> Any:
        current: Any = self._root
        for token in ref_to_json_path(ref):
            current = self._resolve_value(current, chain)
            if isinstance(current, dict):
                current = current.get(token, _MISSING)
            elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
                current = current[int(token)]
            else:
                return _MISSING
            if current is _MISSING:
                return _MISSING
        return current


def _is_shared_schema_ref(ref: str) -> bool:
    tokens = ref_to_json_path(ref)
    return len(tokens) == 3 and tokens[:2] == (COMPONENTS_KEY, SCHEMAS_KEY)


def _merge_all_of_schemas(root: dict[str, Any], metadata: DocumentMetadata) -> None:
    for mapping in list(_iter_mappings(root)):
        _merge_all_of(mapping, metadata, [])


def _merge_all_of(schema: dict[str, Any], metadata: DocumentMetadata, in_progress: list) -> bool:
    """Fold ``allOf`` branches into ``schema``; return False when the listing must stay."""
    branches = schema.get(ALL_OF)
    if not isinstance(branches, list):
        return True
    if not all(isinstance(branch, dict) for branch in branches):
        return False
    in_progress.append(schema)
    try:
        for branch in branches:
            if any(pending is branch for pending in in_progress):
                return False
            if not _merge_all_of(branch, metadata, in_progress):
                return False
    finally:
        in_progress.pop()

    merged: dict[str, Any] = {}
    properties: dict[str, Any] = {}
    required: list[Any] = []
    inlined_from = list(metadata.get(schema).inlined_from)
    for source in (schema, *branches):
        for key, value in source.items():
            if key == ALL_OF:
                continue
            if key == "properties" and isinstance(value, dict):
                for name, property_schema in value.items():
                    properties.setdefault(name, property_schema)
            elif key == "required" and isinstance(value, list):
                required.extend(name for name in value if name not in required)
            else:
                merged.setdefault(key, value)
        if source is not schema:
            inlined_from.extend(
                ref for ref in metadata.get(source).inlined_from if ref not in inlined_from
            )

    if properties:
        merged["properties"] = properties
    if required:
        merged["required"] = required
    schema.clear()
    schema.update(merged)
    metadata.update(schema, inlined_from=tuple(inlined_from))
    return True


def _attach_content_hashes(root: dict[str, Any], metadata: DocumentMetadata) -> None:
    hasher = StructuralHasher()
    for mapping in _iter_mappings(root):
        metadata.update(mapping, content_hash=hasher.digest(mapping))


def _iter_mappings(root: Any) -> Iterator[dict[str, Any]]:
    visited: set[int] = set()
    stack = [root]
    while stack:
        value = stack.pop()
        if id(value) in visited:
            continue
        visited.add(id(value))
        if isinstance(value, dict):
            yield value
        for _, child in _children(value):
            if isinstance(child, dict | list):
                stack.append(child)


def _children(value: Any) -> list[tuple[Any, Any]]:
    if isinstance(value, dict):
        return list(value.items())
    if isinstance(value, list):
        return list(enumerate(value))
    return []
