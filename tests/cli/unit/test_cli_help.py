"""CLI smoke tests."""

from click.testing import CliRunner
from oas_schema_graph.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "operations" in result.output
    assert "diagram" in result.output


def test_diagram_help_lists_scope_and_format_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["diagram", "--help"])

    assert result.exit_code == 0
    assert "--scope" in result.output
    assert "[json|xlsx]" in result.output
