import json
from pathlib import Path

from typer.testing import CliRunner

from assertpack.cli.app import app


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_diff_prints_canonical_unified_diff(tmp_path: Path) -> None:
    left = _write_json(tmp_path / "left.json", {"name": "a", "count": 1})
    right = _write_json(tmp_path / "right.json", {"count": 2, "name": "a"})

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(left), str(right)])

    assert result.exit_code == 0
    assert result.output == (
        " {\n"
        "-  'count': 1,\n"
        "+  'count': 2,\n"
        "   'name': 'a',\n"
        " }\n"
    )


def test_cli_diff_reports_equal_documents(tmp_path: Path) -> None:
    left = _write_json(tmp_path / "left.json", {"a": [1, 2], "b": None})
    right = _write_json(tmp_path / "right.json", {"b": None, "a": [1, 2]})

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(left), str(right)])

    assert result.exit_code == 0
    assert result.output.strip() == "values are equal"


def test_cli_diff_exclude_type_and_omit_empty(tmp_path: Path) -> None:
    left = _write_json(tmp_path / "left.json", {"name": "a", "count": 1, "tags": []})
    right = _write_json(tmp_path / "right.json", {"name": "a", "count": 2})

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["diff", str(left), str(right), "--exclude-type", "int", "--omit-empty"],
    )

    assert result.exit_code == 0
    assert result.output.strip() == "values are equal"


def test_cli_diff_text_mode(tmp_path: Path) -> None:
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_text("hello\nworld\n", encoding="utf-8")
    right.write_text("goodbye\nworld\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(left), str(right), "--text"])

    assert result.exit_code == 0
    assert result.output == "-hello\n+goodbye\n world\n"


def test_cli_diff_json_output(tmp_path: Path) -> None:
    left = _write_json(tmp_path / "left.json", [1, 2])
    right = _write_json(tmp_path / "right.json", [1, 3])

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(left), str(right), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload == {
        "status": "ok",
        "exit_code": 0,
        "identical": False,
        "diff": " [\n   1,\n-  2,\n+  3,\n ]\n",
        "left_path": str(left),
        "right_path": str(right),
    }


def test_cli_diff_rejects_unknown_exclude_type(tmp_path: Path) -> None:
    left = _write_json(tmp_path / "left.json", {})
    right = _write_json(tmp_path / "right.json", {})

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(left), str(right), "--exclude-type", "decimal"])

    assert result.exit_code == 2
    assert "unknown type 'decimal'" in result.output


def test_cli_diff_missing_file_is_an_error(tmp_path: Path) -> None:
    right = _write_json(tmp_path / "right.json", {})

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(tmp_path / "absent.json"), str(right)])

    assert result.exit_code == 1
    assert "diff failed: cannot read" in result.output


def test_cli_diff_invalid_json_reports_json_error(tmp_path: Path) -> None:
    left = tmp_path / "left.json"
    left.write_text("{broken", encoding="utf-8")
    right = _write_json(tmp_path / "right.json", {})

    runner = CliRunner()
    result = runner.invoke(app, ["diff", str(left), str(right), "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["status"] == "error"
    assert "invalid JSON" in payload["message"]
