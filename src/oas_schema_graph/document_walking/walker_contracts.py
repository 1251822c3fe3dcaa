"""Document walker hook contracts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from oas_schema_graph.schema_metadata.metadata_models import JsonPath


class Descent(str, Enum):
    """Answer of a start hook: walk into the node's children or treat it as handled."""

    RECURSE = "recurse"
    SKIP = "skip"

    @classmethod
    def when(cls, condition: bool) -> Descent:
        return cls.RECURSE if condition else cls.SKIP


@dataclass(frozen=True, kw_only=True)
class Visit:
    """Node handed to a pair of start/end hooks."""

    value: Any
    declaration_paths: tuple[JsonPath, ...]
    value_already_visited: bool = False


@dataclass(frozen=True, kw_only=True)
class PathVisit(Visit):
    path: str


@dataclass(frozen=True, kw_only=True)
class OperationVisit(Visit):
    method: str
    path: str


@dataclass(frozen=True, kw_only=True)
class ParameterVisit(Visit):
    pass


@dataclass(frozen=True, kw_only=True)
class HeaderVisit(Visit):
    header: str


@dataclass(frozen=True, kw_only=True)
class RequestBodyVisit(Visit):
    pass


@dataclass(frozen=True, kw_only=True)
class ResponseVisit(Visit):
    response_code: str


@dataclass(frozen=True, kw_only=True)
class MediaTypeVisit(Visit):
    media_type: str


@dataclass(frozen=True, kw_only=True)
class SchemaVisit(Visit):
    """Schema root or array element schema."""


@dataclass(frozen=True, kw_only=True)
class SchemaPropertyVisit(Visit):
    property_name: str


@dataclass(frozen=True, kw_only=True)
class CombinerVisit(Visit):
    combiner_kind: str


@dataclass(frozen=True, kw_only=True)
class CombinerItemVisit(Visit):
    combiner_kind: str
    index: int


# pylint: disable=unused-argument
class WalkerHooks:
    """Start/end callbacks driven by the document walker.

    Every start hook is followed by exactly one matching end hook, whatever
    the start hook answered. The defaults recurse everywhere and ignore ends.
    """

    def path_start(self, visit: PathVisit) -> Descent:
        return Descent.RECURSE

    def path_end(self, visit: PathVisit) -> None:
        return None

    def operation_start(self, visit: OperationVisit) -> Descent:
        return Descent.RECURSE

    def operation_end(self, visit: OperationVisit) -> None:
        return None

    def parameter_start(self, visit: ParameterVisit) -> Descent:
        return Descent.RECURSE

    def parameter_end(self, visit: ParameterVisit) -> None:
        return None

    def header_start(self, visit: HeaderVisit) -> Descent:
        return Descent.RECURSE

    def header_end(self, visit: HeaderVisit) -> None:
        return None

    def request_body_start(self, visit: RequestBodyVisit) -> Descent:
        return Descent.RECURSE

    def request_body_end(self, visit: RequestBodyVisit) -> None:
        return None

    def response_start(self, visit: ResponseVisit) -> Descent:
        return Descent.RECURSE

    def response_end(self, visit: ResponseVisit) -> None:
        return None

    def media_type_start(self, visit: MediaTypeVisit) -> Descent:
        return Descent.RECURSE

    def media_type_end(self, visit: MediaTypeVisit) -> None:
        return None

    def schema_root_start(self, visit: SchemaVisit) -> Descent:
        return Descent.RECURSE

    def schema_root_end(self, visit: SchemaVisit) -> None:
        return None

    def schema_property_start(self, visit: SchemaPropertyVisit) -> Descent:
        return Descent.RECURSE

    def schema_property_end(self, visit: SchemaPropertyVisit) -> None:
        return None

    def schema_items_start(self, visit: SchemaVisit) -> Descent:
        return Descent.RECURSE

    def schema_items_end(self, visit: SchemaVisit) -> None:
        return None

    def combiner_start(self, visit: CombinerVisit) -> Descent:
        return Descent.RECURSE

    def combiner_end(self, visit: CombinerVisit) -> None:
        return None

    def combiner_item_start(self, visit: CombinerItemVisit) -> Descent:
        return Descent.RECURSE

    def combiner_item_end(self, visit: CombinerItemVisit) -> None:
        return None


# pylint: enable=unused-argument
