"""
Parse command: read S-expressions and print them.

Usage:
    elparser parse reply.el                 Canonical S-expression text
    elparser parse reply.el --format json   Native values as JSON
    elparser parse reply.el --format tree   Tree view
    echo "(a . 1)" | elparser parse -
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from elparser.config import OUTPUT_FORMATS, Config
from elparser.exceptions import ElparserError
from elparser.logging import enable_verbose
from elparser.sexp import (
    SExp,
    SExpCons,
    SExpDottedList,
    SExpList,
    SExpNil,
    SExpNumber,
    SExpQuoted,
    SExpString,
    SExpSymbol,
    children,
    fold,
    parse,
)
from elparser.values import Symbol

from .utils import print_error, read_input


def main(argv: list[str] | None = None, config: Config | None = None) -> int:
    """Main entry point for the parse command."""
    config = config or Config.load()

    parser = argparse.ArgumentParser(
        prog="elparser parse",
        description="Parse S-expressions and print them",
    )
    parser.add_argument("file", nargs="?", default="-", help="Input file ('-' for stdin)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default=config.defaults.format)
    parser.add_argument(
        "--max-depth",
        type=int,
        default=config.parser.max_depth,
        help="Maximum nesting depth (0 = unlimited)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=config.defaults.verbose,
        help="Log debug output and show full tracebacks on errors",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=config.defaults.quiet,
        help="Report errors without context or suggestions",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        enable_verbose("DEBUG")

    try:
        text = read_input(args.file)
        forms = parse(text, max_depth=args.max_depth)
    except (ElparserError, OSError) as e:
        print_error(e, verbose=args.verbose, quiet=args.quiet)
        return 1

    if args.format == "json":
        rendered = [to_json(form) for form in forms]
        print(rendered[0] if len(rendered) == 1 else "[" + ", ".join(rendered) + "]")
    elif args.format == "tree":
        from rich.console import Console

        console = Console()
        for form in forms:
            console.print(build_tree(form))
    else:
        for form in forms:
            print(form.to_string())

    return 0


def _json_default(value: Any) -> Any:
    if isinstance(value, Symbol):
        return value.name
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_atom(node: SExp) -> str:
    return json.dumps(node.to_native(), default=_json_default)


def _json_branch(node: SExp, values: list[str]) -> str:
    return "[" + ", ".join(values) + "]"


def to_json(node: SExp) -> str:
    """
    JSON text of ``node``'s native value, symbols written as their names.

    Built with :func:`fold` so that nesting depth is not bounded by the
    recursion limit of :func:`json.dumps`.
    """
    return fold(node, _json_atom, _json_branch)


def _label(node: SExp) -> str:
    from rich.markup import escape

    if isinstance(node, SExpNil):
        return "[dim]nil[/dim]"
    if isinstance(node, SExpSymbol):
        return f"[cyan]symbol[/cyan] {escape(node.name)}"
    if isinstance(node, SExpString):
        return f"[green]string[/green] {escape(node.to_string())}"
    if isinstance(node, SExpNumber):
        return f"[magenta]{node.kind.value}[/magenta] {node.text}"
    if isinstance(node, SExpCons):
        return "[yellow]cons[/yellow]"
    if isinstance(node, SExpList):
        return f"[yellow]list[/yellow] ({len(node.items)})"
    if isinstance(node, SExpDottedList):
        return f"[yellow]dotted list[/yellow] ({len(node.items)} + tail)"
    if isinstance(node, SExpQuoted):
        return "[yellow]quote[/yellow]"
    raise TypeError(f"Not an S-expression node: {node!r}")


def build_tree(node: SExp):
    """Build a rich Tree showing the structure of ``node``."""
    from rich.tree import Tree

    root = Tree(_label(node))
    stack = [(node, root)]
    while stack:
        current, branch = stack.pop()
        subs = children(current)
        added = [(sub, branch.add(_label(sub))) for sub in subs]
        stack.extend(reversed(added))
    return root


if __name__ == "__main__":
    sys.exit(main())
