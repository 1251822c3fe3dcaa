"""Schema metadata entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

JsonPath = tuple[str | int, ...]


@dataclass(frozen=True)
class SchemaMetadata:
    """Side-channel markers attached to one document object."""

    synthetic_title: bool = False
    origins: tuple[JsonPath, ...] = ()
    content_hash: str | None = None
    inlined_from: tuple[str, ...] = ()


_EMPTY_METADATA = SchemaMetadata()


class DocumentMetadata:
    """Identity-keyed side table mapping document objects to their metadata.

    Document mappings are unhashable and may be structurally equal while
    being distinct, so entries are keyed by ``id``. The keyed object is kept
    alongside its metadata so the identity stays valid for the table's
    lifetime.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, SchemaMetadata]] = {}

    def get(self, value: Any) -> SchemaMetadata:
        entry = self._entries.get(id(value))
        if entry is None or entry[0] is not value:
            return _EMPTY_METADATA
        return entry[1]

    def set(self, value: Any, metadata: SchemaMetadata) -> None:
        self._entries[id(value)] = (value, metadata)

    def update(self, value: Any, **changes: Any) -> SchemaMetadata:
        """Replace selected fields of the metadata recorded for ``value``."""
        updated = replace(self.get(value), **changes)
        self.set(value, updated)
        return updated

    def __contains__(self, value: object) -> bool:
        entry = self._entries.get(id(value))
        return entry is not None and entry[0] is value

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return (value for value, _ in self._entries.values())


@dataclass(frozen=True)
class PreparedDocument:
    """Denormalized document with its metadata side table."""

    root: Mapping[str, Any]
    metadata: DocumentMetadata
