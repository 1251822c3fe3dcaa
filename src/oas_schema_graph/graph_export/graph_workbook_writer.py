"""Excel rendition of a class-diagram graph."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from oas_schema_graph.graph_building.graph_models import SchemaGraphContent

from .graph_serialization import shared_schema_titles

CLASSES_SHEET_NAME = "Classes"
PROPERTIES_SHEET_NAME = "Properties"
RELATIONS_SHEET_NAME = "Relations"

CLASS_COLUMNS: tuple[str, ...] = ("Key", "Name", "Is Class", "Deprecated", "Shared Schemas")
PROPERTY_COLUMNS: tuple[str, ...] = (
    "Class Key",
    "Key",
    "Name",
    "Type",
    "Required",
    "Deprecated",
    "Type Deprecated",
)
RELATION_COLUMNS: tuple[str, ...] = ("Leaf Property Key", "Reference Class Key", "Primary")

HEADER_ROW = 2
FIRST_DATA_ROW = 3


def write_graph_workbook(content: SchemaGraphContent, output_path: Path | str) -> Path:
    """Write one sheet each for classes, properties and relations."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = CLASSES_SHEET_NAME

    _write_table(
        sheet,
        "Classes",
        CLASS_COLUMNS,
        [
            (
                schema_class.key,
                schema_class.name,
                schema_class.is_class,
                schema_class.deprecated,
                ", ".join(shared_schema_titles(schema_class.shared_schema_objects)),
            )
            for schema_class in content.classes
        ],
    )
    _write_table(
        workbook.create_sheet(PROPERTIES_SHEET_NAME),
        "Properties",
        PROPERTY_COLUMNS,
        [
            (
                schema_class.key,
                schema_property.key,
                schema_property.name,
                schema_property.property_type,
                schema_property.required,
                schema_property.deprecated,
                schema_property.property_type_deprecated,
            )
            for schema_class in content.classes
            for schema_property in schema_class.properties
        ],
    )
    _write_table(
        workbook.create_sheet(RELATIONS_SHEET_NAME),
        "Relations",
        RELATION_COLUMNS,
        [
            (relation.leaf_property_key, relation.reference_class_key, relation.primary)
            for relation in content.relations
        ],
    )

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output


def _write_table(
    sheet, headline: str, columns: Sequence[str], rows: Sequence[Sequence[Any]]
) -> None:
    _merge_and_label(sheet, headline, 1, len(columns))
    for column_index, name in enumerate(columns, start=1):
        sheet.cell(row=HEADER_ROW, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    for row_index, values in enumerate(rows, start=FIRST_DATA_ROW):
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _merge_and_label(sheet, label: str, start_column: int, end_column: int) -> None:
    start_letter = get_column_letter(start_column)
    end_letter = get_column_letter(end_column)
    sheet.merge_cells(f"{start_letter}1:{end_letter}1")
    sheet.cell(row=1, column=start_column, value=label)
    sheet.cell(row=1, column=start_column).style = "Headline 1"
