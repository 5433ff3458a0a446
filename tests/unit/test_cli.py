"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from arithtree.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


def test_eval_prints_reconstruction_and_value(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "2 + 3 * 4"])
    assert result.exit_code == 0
    assert 'Reconstituted expression: "2 + (3 * 4)"' in result.stdout
    assert "/* 14 */" in result.stdout
    assert "digraph" not in result.stdout


def test_eval_error_value_is_not_a_failure(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "5 / 0"])
    assert result.exit_code == 0
    assert "/* division by zero: '5 / 0' */" in result.stdout


def test_eval_leading_minus_after_separator(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "--", "-5 + 3"])
    assert result.exit_code == 0
    assert "/* -2 */" in result.stdout


def test_eval_with_graph(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "-g", "1 + 2"])
    assert result.exit_code == 0
    assert "/* 3 */" in result.stdout
    assert "digraph g {" in result.stdout
    assert "n0 -> n1;" in result.stdout


def test_eval_long_chain(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "-g", "+".join(["1"] * 3000)])
    assert result.exit_code == 0
    assert "/* 3000 */" in result.stdout
    assert "n0 -> n5998;" in result.stdout


def test_eval_long_sign_run(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "--", "-" * 999 + "5"])
    assert result.exit_code == 0
    assert "/* -5 */" in result.stdout


def test_eval_parse_failure(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "(2 + 3"])
    assert result.exit_code == 1
    assert "Parse error" in result.output
    assert "Reconstituted" not in result.output


def test_eval_strict_rejects_unknown_characters(cli_runner: CliRunner):
    assert cli_runner.invoke(app, ["eval", "1 + $2"]).exit_code == 0
    result = cli_runner.invoke(app, ["eval", "--strict", "1 + $2"])
    assert result.exit_code == 1
    assert "Unexpected character" in result.output


def test_eval_right_assoc(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "--right-assoc", "2 ^ 3 ^ 2"])
    assert result.exit_code == 0
    assert "/* 512 */" in result.stdout


def test_eval_reads_env_config(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ARITHTREE_EXPONENT_ASSOCIATIVITY", "right")
    result = cli_runner.invoke(app, ["eval", "2 ^ 3 ^ 2"])
    assert "/* 512 */" in result.stdout


def test_invalid_env_config(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ARITHTREE_INT_BITS", "wide")
    result = cli_runner.invoke(app, ["eval", "1"])
    assert result.exit_code == 2


def test_graph_to_stdout(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["graph", "7"])
    assert result.exit_code == 0
    assert result.stdout == 'digraph g {\nn0 [label="7"];\n}\n'


def test_graph_to_file(cli_runner: CliRunner, tmp_path: Path):
    target = tmp_path / "tree.dot"
    result = cli_runner.invoke(app, ["graph", "1 * 2", "--output", str(target)])
    assert result.exit_code == 0
    content = target.read_text()
    assert content.startswith("digraph g {\n")
    assert 'n0 [label="*"];' in content


def test_tokens(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tokens", "1+2"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "NUMBER '1'",
        "ADD_OP '+'",
        "NUMBER '2'",
        "EOF ''",
    ]


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("arithtree ")
