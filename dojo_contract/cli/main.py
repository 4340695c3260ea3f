"""
dojo-contract — command-line front end for the contract expander.

Commands:
  expand PATH|-    Print the expanded contract module (or write it with --out)
  check PATH|-     Validate and classify only; report declared/defaulted items
  version          Print the package version

Global options:
  --json                    Machine-readable output
  --verbose / -v            Debug logging to stderr

Exit codes:
  0: success
  1: the contract was rejected (diagnostics printed)
  2: usage, I/O or parse error

Examples:
  dojo-contract expand src/actions.cairo
  dojo-contract --json expand - < src/actions.cairo
  dojo-contract check src/actions.cairo
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer

from ..config import load_config
from ..diagnostics import format_diagnostics
from ..errors import DojoContractError
from ..expander import expand
from ..expander.classify import classify
from ..expander.state import Category
from ..result import Failure
from ..syntax.nodes import SyntaxNode
from ..syntax.parser import parse_item
from ..validate import validate_module
from ..version import __version__

log = logging.getLogger("dojo_contract.cli")

app = typer.Typer(
    name="dojo-contract",
    help="Expand Dojo contract modules",
    no_args_is_help=True,
    add_completion=False,
)


class GlobalContext:
    def __init__(self) -> None:
        self.json_output: bool = False
        self.verbose: bool = False


_ctx = GlobalContext()


def _log_level() -> int:
    return logging.DEBUG if _ctx.verbose else load_config().log_level_no


def _setup_logging() -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _die(msg: str, code: int = 2) -> NoReturn:
    typer.echo(msg.rstrip(), err=True)
    raise typer.Exit(code)


def _emit_json(obj: Dict[str, Any]) -> None:
    typer.echo(json.dumps(obj, indent=2, sort_keys=True))


def _read_source(source: str) -> str:
    try:
        if source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _die(f"Cannot read {source}: {e}")


def _load_node(source: str) -> SyntaxNode:
    text = _read_source(source)
    try:
        return parse_item(text)
    except DojoContractError as e:
        if _ctx.json_output:
            _emit_json({"ok": False, "error": e.to_dict()})
            raise typer.Exit(2)
        _die(f"{source}: {e}")


def _report_failure(failure: Failure, filename: str) -> NoReturn:
    if _ctx.json_output:
        _emit_json(failure.to_dict())
    else:
        typer.echo(format_diagnostics(failure.diagnostics, filename=filename), err=True)
    raise typer.Exit(1)


@app.callback()
def main_callback(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output JSON instead of human-readable text",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """
    Rewrite `#[dojo::contract]` modules into complete Starknet contracts.
    """
    _ctx.json_output = json_output
    _ctx.verbose = verbose
    _setup_logging()


@app.command("expand")
def expand_cmd(
    source: str = typer.Argument(..., help="Contract source file, or '-' for stdin"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the expansion here"),
) -> None:
    """Expand a contract module and print the generated source."""
    node = _load_node(source)
    result = expand(node)
    if isinstance(result, Failure):
        _report_failure(result, source)
        return

    if out is not None:
        try:
            out.write_text(result.text, encoding="utf-8")
        except OSError as e:
            _die(f"Cannot write {out}: {e}")
        log.info("wrote %s", out)
        if _ctx.json_output:
            _emit_json({"ok": True, "out": str(out)})
        return

    if _ctx.json_output:
        _emit_json(result.to_dict())
    else:
        typer.echo(result.text)


@app.command("check")
def check_cmd(
    source: str = typer.Argument(..., help="Contract source file, or '-' for stdin"),
) -> None:
    """Validate a contract module without printing the expansion."""
    node = _load_node(source)
    validated = validate_module(node)
    if isinstance(validated, Failure):
        _report_failure(validated, source)
        return

    state = classify(validated.name, validated.items)
    if isinstance(state, Failure):
        _report_failure(state, source)
        return

    declared = [c.value for c in Category if state.has(c)]
    defaulted = [c.value for c in state.missing()]
    if _ctx.json_output:
        _emit_json(
            {"ok": True, "name": validated.name, "declared": declared, "defaulted": defaulted}
        )
        return
    typer.echo(f"{source}: contract '{validated.name}' ok")
    typer.echo(f"  declared:  {', '.join(declared) or '-'}")
    typer.echo(f"  defaulted: {', '.join(defaulted) or '-'}")


@app.command("version")
def version_cmd() -> None:
    """Print the dojo_contract version."""
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
