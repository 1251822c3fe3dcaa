"""Operation collection exports."""

from .operation_collector import collect_operation_data, parameter_to_schema
from .operation_models import (
    OperationData,
    OperationEntry,
    OperationSection,
    OperationSectionEntry,
    SchemaCard,
    SectionContent,
    SectionKind,
    SelectionOption,
)
from .operation_sections import (
    flat_parameters,
    flat_requests,
    flat_responses,
    operation_options,
    section_options,
    section_title,
    to_operation_sections,
)

__all__ = [
    "collect_operation_data",
    "parameter_to_schema",
    "OperationData",
    "OperationEntry",
    "OperationSection",
    "OperationSectionEntry",
    "SchemaCard",
    "SectionContent",
    "SectionKind",
    "SelectionOption",
    "flat_parameters",
    "flat_requests",
    "flat_responses",
    "operation_options",
    "section_options",
    "section_title",
    "to_operation_sections",
]
