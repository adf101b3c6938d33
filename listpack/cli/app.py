import json
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Any

import typer

from listpack.core.equality import (
    EQUALITY_NAMES,
    default_equality,
    never_equal,
    resolve_equality,
)
from listpack.diff import (
    ListKitError,
    diff_sequences,
    render_diff_summary,
    render_edit_script,
    verify_diff,
)

app = typer.Typer(help="ListKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("listkit")
    except PackageNotFoundError:
        from listpack import __version__ as local_version

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
        help="Show ListKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any]) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered)


def _read_json_array(path: Path) -> list[Any]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON array")
    return payload


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Path to a JSON array with the old sequence."),
    new: Path = typer.Argument(..., help="Path to a JSON array with the replacement."),
    start: int | None = typer.Option(
        None,
        "--start",
        help="Start of the old subrange that NEW replaces (default: 0).",
    ),
    stop: int | None = typer.Option(
        None,
        "--stop",
        help="End of the old subrange that NEW replaces (default: old length).",
    ),
    equality: str = typer.Option(
        "eq",
        "--equality",
        help=f"Element equality: {', '.join(EQUALITY_NAMES)}.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
    max_operations: int = typer.Option(
        20,
        "--max-operations",
        help="Maximum number of operations to print in text mode.",
    ),
) -> None:
    """Diff two JSON arrays and print the edit script."""
    try:
        old_items = _read_json_array(old)
        new_items = _read_json_array(new)
        equals = resolve_equality(equality)
        lower = 0 if start is None else start
        upper = len(old_items) if stop is None else stop
        result = diff_sequences(
            old_items,
            new_items,
            subrange=(lower, upper),
            equals=equals,
        ).rebased(lower)
    except (OSError, ValueError, ListKitError) as error:
        message = f"diff failed: {error}"
        if json_output:
            _echo_json(
                {
                    "status": "error",
                    "exit_code": 1,
                    "message": message,
                    "old_path": str(old),
                    "new_path": str(new),
                }
            )
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error

    spliced = old_items[:lower] + new_items + old_items[upper:]
    # never_equal cannot confirm a round-trip; plain equality is used instead.
    check = default_equality if equals is never_equal else equals
    verification = verify_diff(old_items, spliced, result, equals=check)

    if json_output:
        _echo_json(
            {
                **result.to_dict(),
                "status": "ok",
                "exit_code": 0,
                "message": "diff completed",
                "verified": verification.passed,
                "old_path": str(old),
                "new_path": str(new),
            }
        )
        return

    _echo(render_diff_summary(result))
    _echo(render_edit_script(result, max_operations=max_operations))


def main() -> None:
    app()
