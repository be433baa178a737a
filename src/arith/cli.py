"""arith command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from arith import __version__
from arith.ast_nodes import Ast, Binary, Num, Unary
from arith.compiler import RpnCompiler
from arith.config import MODES, ArithConfig, find_config, load_config
from arith.errors import ArithError, DiagnosticRenderer
from arith.formatter import ArithFormatter
from arith.interpreter import Interpreter
from arith.lexer import lex
from arith.parser import parse_text

logger = logging.getLogger(__name__)

_EXIT_WORDS = frozenset({"exit", "quit"})


def _load(config_path: str | None) -> ArithConfig:
    try:
        path = Path(config_path) if config_path else find_config()
    except FileNotFoundError:
        logger.debug("no arith.toml found, using defaults")
        return ArithConfig()
    logger.debug("loading config from %s", path)
    return load_config(path)


def _report(error: ArithError, source: str, config: ArithConfig) -> None:
    """Print the error message and caret diagnostic to stderr."""
    renderer = DiagnosticRenderer(color=config.diagnostics.color)
    click.echo(renderer.render(error.to_diagnostic(source), source), err=True)


def _process(source: str, mode: str) -> str:
    """Parse ``source`` and hand the AST to the consumer selected by ``mode``."""
    ast = parse_text(source)
    if mode == "eval":
        return str(Interpreter().eval(ast))
    if mode == "rpn":
        return RpnCompiler().compile(ast)
    if mode == "format":
        return ArithFormatter().format(ast)
    lines: list[str] = []
    _dump_ast(ast, 0, lines)
    return "\n".join(lines)


def _run_once(config: ArithConfig, expression: str, mode: str) -> None:
    try:
        click.echo(_process(expression, mode))
    except ArithError as e:
        _report(e, expression, config)
        raise SystemExit(1)


@click.group()
@click.version_option(__version__, prog_name="arith")
@click.option(
    "--config", "config_path", default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Read settings from this arith.toml instead of searching for one.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline stages to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """The arith expression calculator."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        ctx.obj = _load(config_path)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)


@main.command(name="eval")
@click.argument("expression")
@click.pass_obj
def eval_cmd(config: ArithConfig, expression: str) -> None:
    """Evaluate an expression."""
    _run_once(config, expression, "eval")


@main.command()
@click.argument("expression")
@click.pass_obj
def rpn(config: ArithConfig, expression: str) -> None:
    """Compile an expression to reverse Polish notation."""
    _run_once(config, expression, "rpn")


@main.command()
@click.argument("expression")
@click.pass_obj
def view(config: ArithConfig, expression: str) -> None:
    """View the AST of an expression."""
    _run_once(config, expression, "ast")


@main.command(name="format")
@click.argument("expression")
@click.option("--color/--no-color", default=False, help="Highlight the output.")
@click.pass_obj
def format_cmd(config: ArithConfig, expression: str, color: bool) -> None:
    """Print an expression in canonical form."""
    try:
        formatted = _process(expression, "format")
    except ArithError as e:
        _report(e, expression, config)
        raise SystemExit(1)
    if color:
        from arith.highlight import highlight

        click.echo(highlight(formatted), color=True)
    else:
        click.echo(formatted)


@main.command()
@click.argument("expression")
@click.pass_obj
def tokens(config: ArithConfig, expression: str) -> None:
    """List the tokens of an expression."""
    try:
        toks = lex(expression)
    except ArithError as e:
        _report(e, expression, config)
        raise SystemExit(1)
    for tok in toks:
        click.echo(f"{tok.kind.name} {tok.value!r} {tok.span}")


@main.command()
@click.option("--mode", type=click.Choice(MODES), default=None, help="Override the configured mode.")
@click.pass_obj
def repl(config: ArithConfig, mode: str | None) -> None:
    """Read expressions line by line until exit, quit or end of input."""
    mode = mode or config.repl.mode
    stdin = click.get_text_stream("stdin")
    while True:
        click.echo(config.repl.prompt, nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            return
        source = line.rstrip("\r\n")
        if source.strip() in _EXIT_WORDS:
            return
        if not source.strip():
            continue
        try:
            click.echo(_process(source, mode))
        except ArithError as e:
            _report(e, source, config)


def _dump_ast(node: Ast, depth: int, lines: list[str]) -> None:
    """Append a readable AST dump to ``lines``."""
    indent = "  " * depth
    name = type(node).__name__

    if isinstance(node, Num):
        lines.append(f"{indent}{name} {node.value} @{node.span}")
    elif isinstance(node, Unary):
        lines.append(f"{indent}{name} {node.operator.value.value} @{node.span}")
        _dump_ast(node.operand, depth + 1, lines)
    elif isinstance(node, Binary):
        lines.append(f"{indent}{name} {node.operator.value.value} @{node.span}")
        _dump_ast(node.left, depth + 1, lines)
        _dump_ast(node.right, depth + 1, lines)
