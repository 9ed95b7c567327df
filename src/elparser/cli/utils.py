"""Shared utilities for CLI commands."""

from __future__ import annotations

import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING

from elparser.exceptions import ElparserError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_error_console", "read_input"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output (stderr)."""
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
    quiet: bool = False,
) -> None:
    """
    Print an exception, with Rich styling on a terminal.

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
        quiet: If True, print only the one-line message without context
            or suggestions
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        # Always use plain text for stack traces
        print(traceback.format_exc(), file=sys.stderr)
        return

    if use_rich:
        from rich.markup import escape

        console.print(f"[bold red]Error:[/bold red] {escape(_describe(e, quiet))}")
    else:
        print(format_error(e, quiet=quiet), file=sys.stderr)


def _describe(e: Exception, quiet: bool = False) -> str:
    if isinstance(e, ElparserError):
        return e.message if quiet else str(e)
    return f"{type(e).__name__}: {e}"


def format_error(e: Exception, verbose: bool = False, quiet: bool = False) -> str:
    """
    Format an exception for plain-text display.

    Args:
        e: The exception to format
        verbose: If True, include full stack trace
        quiet: If True, drop context and suggestions
    """
    if verbose:
        return traceback.format_exc()
    return f"Error: {_describe(e, quiet)}"


def read_input(path: str | None) -> str:
    """Read a file argument, or stdin when it is None or '-'."""
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")
