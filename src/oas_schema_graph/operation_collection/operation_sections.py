"""Flatten collected operation data into selectable sections."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from oas_schema_graph.document_walking.json_paths import json_path_to_string

from .operation_models import (
    OperationEntry,
    OperationSection,
    OperationSectionEntry,
    SchemaCard,
    SectionContent,
    SectionKind,
    SelectionOption,
)

PARAMETERS_SECTION_KEY = "parameters"


def flat_parameters(parameters: SectionContent) -> list[OperationSection]:
    if not parameters.cards:
        return []
    return [
        OperationSection(
            section_key=PARAMETERS_SECTION_KEY,
            kind=SectionKind.PARAMETERS,
            scope_declaration_path=parameters.scope_declaration_path,
            declaration_path=parameters.declaration_path,
            scope=parameters.scope,
            cards=_sorted_cards(parameters.cards),
        )
    ]


def flat_requests(requests: Mapping[str, SectionContent]) -> list[OperationSection]:
    single = len(requests) == 1
    return [
        OperationSection(
            section_key=f"request-{media_type}",
            kind=SectionKind.REQUESTS,
            scope_declaration_path=content.scope_declaration_path,
            declaration_path=content.declaration_path,
            scope=content.scope,
            cards=_sorted_cards(content.cards),
            media_type=media_type,
            is_single_media_type=single,
        )
        for media_type, content in requests.items()
    ]


def flat_responses(
    responses: Mapping[str, Mapping[str, SectionContent]],
) -> list[OperationSection]:
    sections = []
    for code, media_types in responses.items():
        single = len(media_types) == 1
        for media_type, content in media_types.items():
            sections.append(
                OperationSection(
                    section_key=f"response-{code}-{media_type}",
                    kind=SectionKind.RESPONSES,
                    scope_declaration_path=content.scope_declaration_path,
                    declaration_path=content.declaration_path,
                    scope=content.scope,
                    cards=_sorted_cards(content.cards),
                    code=code,
                    media_type=media_type,
                    is_single_media_type=single,
                )
            )
    return sections


def to_operation_sections(entries: Iterable[OperationEntry]) -> list[OperationSectionEntry]:
    """Flatten each operation into parameters, requests and responses, in that order."""
    return [
        OperationSectionEntry(
            path=entry.path,
            http_method=entry.http_method,
            summary=entry.summary,
            sections=(
                *flat_parameters(entry.data.parameters),
                *flat_requests(entry.data.requests),
                *flat_responses(entry.data.responses),
            ),
        )
        for entry in entries
    ]


def section_title(
    kind: SectionKind,
    code: str | None = None,
    media_type: str | None = None,
    is_single_media_type: bool | None = None,
) -> str:
    if kind is SectionKind.PARAMETERS:
        return "Parameters"
    media_suffix = "" if is_single_media_type or not media_type else f" ({media_type})"
    if kind is SectionKind.REQUESTS:
        return f"Requests{media_suffix}"
    return f"Response {code}{media_suffix}"


def section_options(sections: Sequence[OperationSection]) -> list[SelectionOption]:
    """Selection values are the scope strings accepted by the transformation."""
    options = []
    for section in sections:
        title = section_title(
            section.kind, section.code, section.media_type, section.is_single_media_type
        )
        if section.kind is SectionKind.PARAMETERS:
            # every parameter is its own scope
            options.extend(
                SelectionOption(
                    value=json_path_to_string(card.declaration_path),
                    label=f"{title}: {card.title}",
                )
                for card in section.cards
            )
        else:
            options.append(SelectionOption(value=section.scope, label=title))
    return options


def operation_options(entries: Iterable[OperationSectionEntry]) -> list[SelectionOption]:
    return [
        SelectionOption(
            value=f"{entry.path}-{entry.http_method}",
            label=f"{entry.summary or ''} ({entry.http_method}) {entry.path}".strip(),
        )
        for entry in entries
    ]


def _sorted_cards(cards: Iterable[SchemaCard]) -> tuple[SchemaCard, ...]:
    return tuple(sorted(cards, key=lambda card: card.title.casefold()))
