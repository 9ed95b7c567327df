"""
Command-line interface for elparser.

    elparser parse [FILE]     - Parse S-expressions and print them
    elparser encode [FILE]    - Encode JSON as S-expressions
    elparser config           - Show or initialize configuration

Examples:
    elparser parse reply.el --format tree
    echo '((a . 1) (b . 2))' | elparser parse --format json
    echo '{"a": [1, 2]}' | elparser encode --symbol-keys
    elparser config --show
"""

import argparse
import sys
from typing import List, Optional

from elparser import __version__
from elparser.config import OUTPUT_FORMATS, Config
from elparser.exceptions import ConfigError

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the elparser CLI."""
    parser = argparse.ArgumentParser(
        prog="elparser",
        description="Emacs Lisp S-expression reader and encoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"elparser {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse S-expressions")
    parse_parser.add_argument("file", nargs="?", default="-")
    parse_parser.add_argument("--format", choices=OUTPUT_FORMATS)
    parse_parser.add_argument("--max-depth", type=int)
    parse_parser.add_argument("-v", "--verbose", action="store_true")
    parse_parser.add_argument("-q", "--quiet", action="store_true")

    encode_parser = subparsers.add_parser("encode", help="Encode JSON as S-expressions")
    encode_parser.add_argument("file", nargs="?", default="-")
    encode_parser.add_argument("--many", action="store_true")
    encode_parser.add_argument("--separator")
    encode_parser.add_argument("--symbol-keys", action="store_true")
    encode_parser.add_argument("-v", "--verbose", action="store_true")
    encode_parser.add_argument("-q", "--quiet", action="store_true")

    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true")
    config_parser.add_argument("--init", action="store_true")
    config_parser.add_argument("--paths", action="store_true")
    config_parser.add_argument("--user", action="store_true")
    config_parser.add_argument("action", nargs="?", choices=["get"])
    config_parser.add_argument("key", nargs="?")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "config":
        from .config_cmd import main as config_cmd

        sub_argv = [f"--{flag}" for flag in ("show", "init", "paths", "user") if getattr(args, flag)]
        if args.action:
            sub_argv.append(args.action)
        if args.key:
            sub_argv.append(args.key)
        return config_cmd(sub_argv)

    try:
        config = Config.load()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "parse":
        from .parse_cmd import main as parse_cmd

        # Convert args back to argv for the subcommand
        sub_argv = [args.file]
        if args.format:
            sub_argv.extend(["--format", args.format])
        if args.max_depth is not None:
            sub_argv.extend(["--max-depth", str(args.max_depth)])
        if args.verbose:
            sub_argv.append("--verbose")
        if args.quiet:
            sub_argv.append("--quiet")
        return parse_cmd(sub_argv, config)

    elif args.command == "encode":
        from .encode_cmd import main as encode_cmd

        sub_argv = [args.file]
        if args.many:
            sub_argv.append("--many")
        if args.separator is not None:
            sub_argv.append(f"--separator={args.separator}")
        if args.symbol_keys:
            sub_argv.append("--symbol-keys")
        if args.verbose:
            sub_argv.append("--verbose")
        if args.quiet:
            sub_argv.append("--quiet")
        return encode_cmd(sub_argv, config)

    return 0
