from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as package_version
import json
from pathlib import Path
from typing import Any

import typer

from assertpack.core import CompareOption, Exclude, OmitEmpty, objects_are_equal
from assertpack.diff import diff as render_diff
from assertpack.diff import needle_position

app = typer.Typer(help="assertkit CLI: structural equality and diffs for JSON and text documents.")

EXCLUDE_TYPE_NAMES: dict[str, type] = {
    "null": type(None),
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
    "list": list,
    "dict": dict,
}


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


class _InputError(Exception):
    """Input document could not be loaded."""


def _resolve_cli_version() -> str:
    try:
        return package_version("assertkit")
    except PackageNotFoundError:
        from assertpack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show assertkit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _load_document(path: Path, *, text: bool) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as error:
        raise _InputError(f"cannot read {path}: {error.strerror or error}") from error
    if text:
        return raw.removesuffix("\n")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as error:
        raise _InputError(f"invalid JSON in {path}: {error}") from error


def _build_options(exclude_types: list[str], omit_empty: bool) -> list[CompareOption]:
    options: list[CompareOption] = []
    for name in exclude_types:
        normalized = name.strip().lower()
        if normalized not in EXCLUDE_TYPE_NAMES:
            allowed = ", ".join(sorted(EXCLUDE_TYPE_NAMES))
            raise typer.BadParameter(
                f"unknown type {name!r}; expected one of: {allowed}",
                param_hint="--exclude-type",
            )
        options.append(Exclude(EXCLUDE_TYPE_NAMES[normalized]))
    if omit_empty:
        options.append(OmitEmpty())
    return options


def _load_pair(
    command: str,
    left: Path,
    right: Path,
    *,
    text: bool,
    json_output: bool,
) -> tuple[Any, Any]:
    try:
        return _load_document(left, text=text), _load_document(right, text=text)
    except _InputError as error:
        message = f"{command} failed: {error}"
        if json_output:
            _echo_json(
                {
                    "status": "error",
                    "exit_code": 1,
                    "message": message,
                    "left_path": str(left),
                    "right_path": str(right),
                }
            )
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error


_TEXT_OPTION_HELP = "Compare files as raw text instead of JSON documents."
_OMIT_EMPTY_HELP = "Ignore empty fields (null, 0, false, empty strings and containers)."
_EXCLUDE_TYPE_HELP = "Ignore fields of this JSON type (null, bool, int, float, str, list, dict). Repeatable."


@app.command()
def diff(
    left: Path = typer.Argument(..., help="Path to the expected document."),
    right: Path = typer.Argument(..., help="Path to the actual document."),
    text: bool = typer.Option(False, "--text", help=_TEXT_OPTION_HELP),
    omit_empty: bool = typer.Option(False, "--omit-empty", help=_OMIT_EMPTY_HELP),
    exclude_types: list[str] = typer.Option([], "--exclude-type", help=_EXCLUDE_TYPE_HELP),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable diff output."),
) -> None:
    """Print a unified diff between two documents."""
    options = _build_options(exclude_types, omit_empty)
    expected, actual = _load_pair("diff", left, right, text=text, json_output=json_output)

    identical = objects_are_equal(expected, actual, options)
    rendered = "" if identical else render_diff(expected, actual, options)

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "identical": identical,
                "diff": rendered,
                "left_path": str(left),
                "right_path": str(right),
            }
        )
        return

    if identical:
        _echo("values are equal")
        return
    _echo(rendered.rstrip("\n"))


@app.command(name="assert")
def assert_documents(
    left: Path = typer.Argument(..., help="Path to the expected document."),
    right: Path = typer.Argument(..., help="Path to the actual document."),
    text: bool = typer.Option(False, "--text", help=_TEXT_OPTION_HELP),
    omit_empty: bool = typer.Option(False, "--omit-empty", help=_OMIT_EMPTY_HELP),
    exclude_types: list[str] = typer.Option([], "--exclude-type", help=_EXCLUDE_TYPE_HELP),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable assertion output."),
) -> None:
    """Fail with exit code 1 unless both documents are equal."""
    options = _build_options(exclude_types, omit_empty)
    expected, actual = _load_pair("assert", left, right, text=text, json_output=json_output)

    passed = objects_are_equal(expected, actual, options)
    rendered = "" if passed else render_diff(expected, actual, options)
    exit_code = 0 if passed else 1

    if json_output:
        _echo_json(
            {
                "status": "pass" if passed else "fail",
                "exit_code": exit_code,
                "diff": rendered,
                "left_path": str(left),
                "right_path": str(right),
            }
        )
    elif passed:
        _echo("assertion passed")
    else:
        _echo("Expected values to be equal:", force=True)
        _echo(rendered.rstrip("\n"), force=True)

    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command()
def contains(
    haystack: str = typer.Argument(..., help="Text to search in."),
    needle: str = typer.Argument(..., help="Text to search for."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable output."),
) -> None:
    """Locate a needle in a haystack; exit code 1 when it is absent."""
    position = needle_position(haystack, needle)

    if json_output:
        _echo_json({**position.to_dict(), "exit_code": 0 if position.found else 1})
    else:
        headline = "Haystack contains needle." if position.found else "Haystack does not contain needle."
        _echo(headline, force=not position.found)
        _echo(position.render().rstrip(), force=not position.found)

    if not position.found:
        raise typer.Exit(code=1)


def main() -> None:
    app()
