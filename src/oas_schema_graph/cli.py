"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from oas_schema_graph.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from oas_schema_graph.diagram_transformation import transform
from oas_schema_graph.document_preparation import (
    DocumentLoadError,
    DocumentPreparationError,
    load_document,
    prepare_document,
)
from oas_schema_graph.graph_export import ExportFormat, GraphExportError, export_graph
from oas_schema_graph.operation_collection import (
    OperationSection,
    SectionKind,
    collect_operation_data,
    operation_options,
    section_options,
    to_operation_sections,
)
from oas_schema_graph.schema_metadata import PreparedDocument

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_GRAPH_BASENAME = "class-diagram"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="oas-schema-graph")
def cli() -> None:
    """OpenAPI schema to class-diagram graph utility."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="operations")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML configuration file",
)
@click.option("--verbose", is_flag=True, default=False, help="Log debug messages to stderr.")
def list_operations(config_path: str, verbose: bool) -> None:
    """List operations with the scopes accepted by the diagram command."""
    _, document = _load_prepared_document(config_path, verbose)
    entries = to_operation_sections(collect_operation_data(document))
    for entry, option in zip(entries, operation_options(entries), strict=True):
        click.echo(option.label)
        for section in entry.sections:
            suffix = _card_suffix(section)
            for section_option in section_options([section]):
                click.echo(f"  {section_option.label}: {section_option.value}{suffix}")


@cli.command(name="diagram")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML configuration file",
)
@click.option(
    "--scope",
    required=True,
    help="Declaration path of a parameter, request or response media type",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Graph file to write; defaults to the configured output directory",
)
@click.option(
    "--format",
    "export_format",
    required=False,
    type=click.Choice([item.value for item in ExportFormat], case_sensitive=False),
    help="Overrides the configured output format",
)
@click.option("--verbose", is_flag=True, default=False, help="Log debug messages to stderr.")
def diagram(
    config_path: str,
    scope: str,
    output_path: str | None,
    export_format: str | None,
    verbose: bool,
) -> None:
    """Write the class-diagram graph of one scope."""
    configuration, document = _load_prepared_document(config_path, verbose)
    resolved_format = (
        ExportFormat(export_format.lower()) if export_format else configuration.output.export_format
    )
    destination = (
        Path(output_path)
        if output_path
        else configuration.output.directory / f"{DEFAULT_GRAPH_BASENAME}{resolved_format.suffix}"
    )
    content = transform(document, scope)
    if not content.classes:
        click.echo(f"No schema found for scope '{scope}'.", err=True)
    try:
        written = export_graph(content, destination, resolved_format)
    except (GraphExportError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(written.resolve()))


def _load_prepared_document(
    config_path: str, verbose: bool
) -> tuple[Configuration, PreparedDocument]:
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    _configure_logging("DEBUG" if verbose else configuration.logging.level)
    try:
        document = prepare_document(load_document(configuration.document.path))
    except (DocumentLoadError, DocumentPreparationError) as exc:
        raise CliError(str(exc)) from exc
    return configuration, document


def _card_suffix(section: OperationSection) -> str:
    if section.kind is SectionKind.PARAMETERS or not section.cards:
        return ""
    return f" [{', '.join(card.title for card in section.cards)}]"


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("oas_schema_graph").setLevel(getattr(logging, level))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
