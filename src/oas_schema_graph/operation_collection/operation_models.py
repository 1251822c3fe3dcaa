"""Operation structure entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from oas_schema_graph.schema_metadata.metadata_models import JsonPath


class SectionKind(str, Enum):
    """Part of an operation a section of schema cards belongs to."""

    PARAMETERS = "parameters"
    REQUESTS = "requests"
    RESPONSES = "responses"


@dataclass(eq=False)
class SchemaCard:  # pylint: disable=too-many-instance-attributes
    """A named schema used by a parameter, request or response."""

    title: str
    declaration_path: JsonPath
    schema_object: Any
    scope_declaration_path: JsonPath | None = None
    schema_object_name: str | None = None
    schema_hash_with_title: str | None = None
    # effective schemas that were unified from the named one
    derived_schemas: list[Any] = field(default_factory=list)


@dataclass(eq=False)
class SectionContent:
    """Cards collected for one parameter list or one media type."""

    cards: list[SchemaCard]
    scope_declaration_path: JsonPath
    declaration_path: JsonPath
    scope: str = ""


@dataclass(eq=False)
class OperationData:
    parameters: SectionContent
    requests: dict[str, SectionContent]
    responses: dict[str, dict[str, SectionContent]]


@dataclass(frozen=True, eq=False)
class OperationEntry:
    path: str
    http_method: str
    summary: str | None
    data: OperationData


@dataclass(frozen=True, eq=False)
class OperationSection:  # pylint: disable=too-many-instance-attributes
    """One selectable parameter, request or response section of an operation."""

    section_key: str
    kind: SectionKind
    scope_declaration_path: JsonPath
    declaration_path: JsonPath
    scope: str
    cards: tuple[SchemaCard, ...]
    code: str | None = None
    media_type: str | None = None
    is_single_media_type: bool | None = None


@dataclass(frozen=True, eq=False)
class OperationSectionEntry:
    path: str
    http_method: str
    summary: str | None
    sections: tuple[OperationSection, ...]


@dataclass(frozen=True)
class SelectionOption:
    """Value/label pair for populating a selection control."""

    value: str
    label: str
