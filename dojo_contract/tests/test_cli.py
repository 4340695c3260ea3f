from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from dojo_contract.cli import app
from dojo_contract.version import __version__

runner = CliRunner()


@pytest.fixture
def foo_file(tmp_path, foo_source):
    p = tmp_path / "foo.cairo"
    p.write_text(foo_source, encoding="utf-8")
    return p


def write(tmp_path, text: str, name: str = "c.cairo"):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_expand_prints_contract(foo_file) -> None:
    result = runner.invoke(app, ["expand", str(foo_file)])
    assert result.exit_code == 0, result.output
    assert "#[starknet::contract]" in result.output
    assert "pub mod Foo {" in result.output


def test_expand_reads_stdin() -> None:
    result = runner.invoke(app, ["expand", "-"], input="mod Bar {}\n")
    assert result.exit_code == 0, result.output
    assert "pub mod Bar {" in result.output
    assert "fn dojo_init(self: @ContractState)" in result.output


def test_expand_writes_out_file(tmp_path, foo_file) -> None:
    out = tmp_path / "out.cairo"
    result = runner.invoke(app, ["expand", str(foo_file), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").startswith("#[starknet::contract]\npub mod Foo {")


def test_expand_json(foo_file) -> None:
    result = runner.invoke(app, ["--json", "expand", str(foo_file)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert "pub mod Foo {" in data["text"]


def test_rejected_contract_exits_1(tmp_path) -> None:
    src = write(tmp_path, "mod Foo {\n    mod Inner {}\n}\n")
    result = runner.invoke(app, ["expand", src])
    assert result.exit_code == 1
    assert "error[NestedModuleNotAllowed]" in result.output
    assert f"{src}:2:" in result.output
    assert "pub mod Foo" not in result.output


def test_rejected_contract_json(tmp_path) -> None:
    src = write(tmp_path, "mod Café {}\n")
    result = runner.invoke(app, ["--json", "expand", src])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert [d["kind"] for d in data["diagnostics"]] == ["InvalidContractName"]


def test_parse_error_exits_2(tmp_path) -> None:
    src = write(tmp_path, "mod Foo {\n    fn f() {\n")
    result = runner.invoke(app, ["expand", src])
    assert result.exit_code == 2
    assert "line" in result.output


def test_parse_error_json(tmp_path) -> None:
    src = write(tmp_path, "mod Foo {")
    result = runner.invoke(app, ["--json", "check", src])
    assert result.exit_code == 2
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert data["error"]["code"] == "parse_error"


def test_missing_file_exits_2(tmp_path) -> None:
    result = runner.invoke(app, ["expand", str(tmp_path / "nope.cairo")])
    assert result.exit_code == 2
    assert "Cannot read" in result.output


def test_check_reports_declared_and_defaulted(tmp_path) -> None:
    src = write(
        tmp_path,
        "mod Foo {\n    #[storage]\n    struct Storage {}\n    fn constructor(ref self: ContractState) {}\n}\n",
    )
    result = runner.invoke(app, ["check", src])
    assert result.exit_code == 0, result.output
    assert "contract 'Foo' ok" in result.output
    assert "declared:  constructor, Storage" in result.output
    assert "defaulted: dojo_init, Event" in result.output


def test_check_json(foo_file) -> None:
    result = runner.invoke(app, ["--json", "check", str(foo_file)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data == {
        "ok": True,
        "name": "Foo",
        "declared": ["constructor", "dojo_init", "Event", "Storage"],
        "defaulted": [],
    }


def test_check_reports_duplicates(tmp_path) -> None:
    src = write(tmp_path, "mod Foo {\n    enum Event { A }\n    enum Event { B }\n}\n")
    result = runner.invoke(app, ["check", src])
    assert result.exit_code == 1
    assert "error[DuplicateDeclaration]" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_undecodable_file_exits_2(tmp_path) -> None:
    p = tmp_path / "latin1.cairo"
    p.write_bytes(b"mod Foo { use a::\xff; }")
    result = runner.invoke(app, ["expand", str(p)])
    assert result.exit_code == 2
    assert "Cannot read" in result.output
    assert "pub mod Foo" not in result.output


def test_verbose_flag_selects_debug_logging(monkeypatch, fresh_config) -> None:
    import importlib

    cli_main = importlib.import_module("dojo_contract.cli.main")

    monkeypatch.setenv("DOJO_CONTRACT_LOG_LEVEL", "ERROR")
    fresh_config.cache_clear()

    assert runner.invoke(app, ["-v", "version"]).exit_code == 0
    assert cli_main._ctx.verbose is True
    assert cli_main._log_level() == logging.DEBUG

    assert runner.invoke(app, ["version"]).exit_code == 0
    assert cli_main._ctx.verbose is False
    assert cli_main._log_level() == logging.ERROR
