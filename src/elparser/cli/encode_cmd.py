"""
Encode command: convert JSON documents to S-expression text.

JSON has no symbols, so strings stay strings unless --symbol-keys is given,
in which case object keys that are valid symbol names become symbols:

    {"a": [1, 2, 3]}   ->  (("a" 1 2 3))
    {"a": [1, 2, 3]}   ->  ((a 1 2 3))      with --symbol-keys

Usage:
    elparser encode data.json
    elparser encode --many forms.json --separator " "
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from elparser.config import Config
from elparser.encoder import encode, encode_many
from elparser.exceptions import ElparserError
from elparser.logging import enable_verbose
from elparser.sexp.lexer import is_symbol_name
from elparser.values import Symbol

from .utils import print_error, read_input


def main(argv: list[str] | None = None, config: Config | None = None) -> int:
    """Main entry point for the encode command."""
    config = config or Config.load()

    parser = argparse.ArgumentParser(
        prog="elparser encode",
        description="Encode JSON as S-expressions",
    )
    parser.add_argument("file", nargs="?", default="-", help="JSON input file ('-' for stdin)")
    parser.add_argument(
        "--many",
        action="store_true",
        help="Treat a top-level array as several values, one form each",
    )
    parser.add_argument(
        "--separator",
        default=config.encoder.separator,
        help="Separator between forms with --many (default: newline)",
    )
    parser.add_argument(
        "--symbol-keys",
        action="store_true",
        default=config.encoder.symbol_keys,
        help="Encode object keys as symbols",
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
        data = json.loads(read_input(args.file))
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print_error(e, verbose=args.verbose, quiet=args.quiet)
        return 1

    if args.symbol_keys:
        data = symbolize_keys(data)

    try:
        if args.many:
            if not isinstance(data, list):
                print("Error: --many requires a top-level JSON array", file=sys.stderr)
                return 1
            print(encode_many(data, args.separator))
        else:
            print(encode(data))
    except ElparserError as e:
        print_error(e, verbose=args.verbose, quiet=args.quiet)
        return 1

    return 0


def symbolize_keys(value: Any) -> Any:
    """Turn dict keys that are valid symbol names into Symbols, recursively."""
    if isinstance(value, dict):
        return {
            (Symbol(k) if isinstance(k, str) and is_symbol_name(k) else k): symbolize_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [symbolize_keys(v) for v in value]
    return value


if __name__ == "__main__":
    sys.exit(main())
