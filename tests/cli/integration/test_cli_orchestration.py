"""CLI orchestration integration tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from openpyxl import load_workbook
from oas_schema_graph.cli import main
from oas_schema_graph.graph_export import CLASSES_SHEET_NAME

LIST_PETS_SCOPE = "paths/~1pets/get/responses/200/content/application~1json"


def _write_config(tmp_path: Path, output_format: str = "json") -> Path:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "petstore.yaml"
    shutil.copy(sample_path, tmp_path / "petstore.yaml")
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "document:\n"
        "  path: petstore.yaml\n"
        "output:\n"
        f"  format: {output_format}\n"
        "  directory: diagrams\n",
        encoding="utf-8",
    )
    return config_path


def test_operations_lists_scopes_with_shared_schemas(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path)

    exit_code = main(["operations", "--config", str(config_path)])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert lines[:4] == [
        "List pets (get) /pets",
        "  Parameters: limit: paths/~1pets/parameters/0",
        f"  Response 200: {LIST_PETS_SCOPE} [Email, NewPet, Owner, Pet]",
        "  Response default: paths/~1pets/get/responses/default/content/application~1json [Error]",
    ]
    assert "Create a pet (post) /pets" in lines
    assert (
        "  Requests (application/xml): "
        "paths/~1pets/post/requestBody/content/application~1xml [NewPet]"
    ) in lines


def test_diagram_writes_json_into_configured_directory(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path)

    exit_code = main(["diagram", "--config", str(config_path), "--scope", LIST_PETS_SCOPE])
    captured = capsys.readouterr()

    expected_path = (tmp_path / "diagrams" / "class-diagram.json").resolve()
    assert exit_code == 0
    assert captured.out.strip() == str(expected_path)
    data = json.loads(expected_path.read_text(encoding="utf-8"))
    assert [item["name"] for item in data["classes"]][:2] == [
        "Response 200 (application/json)",
        "Pet",
    ]
    assert len(data["relations"]) == 6


def test_diagram_format_option_overrides_configuration(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path)
    output_path = tmp_path / "pets.xlsx"

    exit_code = main(
        [
            "diagram",
            "--config",
            str(config_path),
            "--scope",
            LIST_PETS_SCOPE,
            "--format",
            "xlsx",
            "--output",
            str(output_path),
        ]
    )
    capsys.readouterr()

    assert exit_code == 0
    workbook = load_workbook(output_path)
    assert workbook[CLASSES_SHEET_NAME]["B4"].value == "Pet"


def test_diagram_warns_when_scope_matches_nothing(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path, output_format="xlsx")

    exit_code = main(["diagram", "--config", str(config_path), "--scope", "paths/~1unknown"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "No schema found for scope 'paths/~1unknown'." in captured.err
    assert (tmp_path / "diagrams" / "class-diagram.xlsx").exists()
