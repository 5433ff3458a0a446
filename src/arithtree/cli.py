"""
arithtree command line.

Thin wrapper over :mod:`arithtree.core.expression_lang`: parse one
expression, print its reconstruction and value, optionally as a DOT graph.
Expressions starting with ``-`` need a ``--`` separator, e.g.
``arithtree eval -- "-5 + 3"``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from arithtree._version import __version__
from arithtree.core.config import ArithConfig, load_config
from arithtree.core.errors import ArithError
from arithtree.core.expression_lang import evaluate, parse, tokenize, write_dot
from arithtree.core.expression_lang.parser import ExpressionParseError
from arithtree.core.ir.expressions import Expr

app = typer.Typer(help="Parse, print, graph and evaluate integer arithmetic.", no_args_is_help=True)
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"arithtree {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _config(strict: bool, right_assoc: bool) -> ArithConfig:
    try:
        return load_config(
            unknown_characters="error" if strict else None,
            exponent_associativity="right" if right_assoc else None,
        )
    except ArithError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(code=2)


def _parse_or_exit(expression: str, config: ArithConfig) -> Expr:
    try:
        return parse(expression, config).unwrap()
    except ExpressionParseError as e:
        err_console.print(f"[red]Parse error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(..., help="Arithmetic expression"),
    graph: bool = typer.Option(False, "--graph", "-g", help="Also print a DOT graph of the tree."),
    strict: bool = typer.Option(False, "--strict", help="Reject unrecognised characters."),
    right_assoc: bool = typer.Option(False, "--right-assoc", help="Group '^' chains from the right."),
) -> None:
    """Print the reconstructed expression and its value."""
    config = _config(strict, right_assoc)
    tree = _parse_or_exit(expression, config)

    typer.echo(f'Reconstituted expression: "{tree}"')
    typer.echo(f"/* {evaluate(tree, config)} */")
    if graph:
        write_dot(tree, sys.stdout)


@app.command("graph")
def graph_command(
    expression: str = typer.Argument(..., help="Arithmetic expression"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write DOT to this file"),
    strict: bool = typer.Option(False, "--strict", help="Reject unrecognised characters."),
    right_assoc: bool = typer.Option(False, "--right-assoc", help="Group '^' chains from the right."),
) -> None:
    """Emit the expression tree as a Graphviz DOT digraph."""
    config = _config(strict, right_assoc)
    tree = _parse_or_exit(expression, config)

    if output is None:
        write_dot(tree, sys.stdout)
        return
    with output.open("w") as f:
        write_dot(tree, f)
    typer.echo(f"Wrote graph to {output}")


@app.command("tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Arithmetic expression"),
    strict: bool = typer.Option(False, "--strict", help="Reject unrecognised characters."),
) -> None:
    """List the tokens of an expression, one per line."""
    config = _config(strict, False)
    try:
        tokens = tokenize(expression, config)
    except ArithError as e:
        err_console.print(f"[red]Token error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)
    for tok in tokens:
        typer.echo(f"{tok.kind.name} {tok.lexeme!r}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
