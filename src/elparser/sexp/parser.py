"""
Parser for Emacs Lisp style S-expressions.

Grammar::

    sexp   := atom | list | quoted
    atom   := INTEGER | FLOAT | SYMBOL | STRING
    list   := '(' ')'                      -> nil
            | '(' sexp+ ')'                -> list
            | '(' sexp '.' sexp ')'        -> cons
            | '(' sexp sexp+ '.' sexp ')'  -> dotted list
    quoted := "'" sexp

A buffer may hold several top-level expressions separated by whitespace.

The parser keeps its own stack of open forms instead of recursing, and
rejects input nested deeper than ``max_depth``.

Usage:
    from elparser.sexp import parse, parse_one

    forms = parse("(1 2) (3 4)")    # [SExpList(...), SExpList(...)]
    pair = parse_one("(a . 1)")     # SExpCons(...)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from elparser.exceptions import ParseError
from elparser.sexp.lexer import Token, TokenKind, tokenize
from elparser.sexp.nodes import (
    NIL,
    NumberKind,
    SExp,
    SExpNumber,
    SExpQuoted,
    SExpString,
    SExpSymbol,
    make_dotted,
    make_list,
)
from elparser.sexp.normalize import normalize
from elparser.sexp.strings import unescape

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200


@dataclass
class _Frame:
    """An open '(' or a pending quote."""

    opener: Token
    items: list[SExp] = field(default_factory=list)
    dot: Optional[Token] = None
    tail: Optional[SExp] = None

    @property
    def is_quote(self) -> bool:
        return self.opener.kind is TokenKind.QUOTE


class Parser:
    """
    S-expression parser over one text buffer.

    Args:
        text: Source text
        max_depth: Maximum nesting of lists and quotes; None or 0 disables
            the limit
    """

    def __init__(self, text: str, max_depth: Optional[int] = DEFAULT_MAX_DEPTH):
        self.text = text
        self.max_depth = max_depth or None

    def parse(self) -> list[SExp]:
        """Parse every top-level expression, in source order."""
        if not self.text:
            raise ParseError("Empty input", position=0)

        tokens = tokenize(self.text)
        roots: list[SExp] = []
        stack: list[_Frame] = []

        for token in tokens:
            kind = token.kind

            if kind is TokenKind.EOF:
                if stack:
                    raise self._unexpected_end(stack[-1], token)
                break

            if kind is TokenKind.LPAREN or kind is TokenKind.QUOTE:
                if self.max_depth is not None and len(stack) >= self.max_depth:
                    raise ParseError(
                        f"Maximum nesting depth {self.max_depth} exceeded",
                        token=token.text,
                        position=token.position,
                        suggestions=["Raise parser.max_depth in the configuration"],
                    )
                stack.append(_Frame(token))
                continue

            if kind is TokenKind.RPAREN:
                if not stack or stack[-1].is_quote:
                    raise self._unexpected(token)
                frame = stack[-1]
                if frame.dot is not None and frame.tail is None:
                    raise self._unexpected(token, "expected an expression after '.'")
                stack.pop()
                self._emit(self._close(frame), stack, roots, token)
                continue

            if kind is TokenKind.DOT:
                if not stack or stack[-1].is_quote:
                    raise self._unexpected(token)
                frame = stack[-1]
                if not frame.items or frame.dot is not None:
                    raise self._unexpected(token)
                frame.dot = token
                continue

            self._emit(self._atom(token), stack, roots, token)

        if not roots:
            raise ParseError(
                "Unexpected end of input, expected an expression",
                position=len(self.text),
                at_end=True,
            )

        logger.debug(f"Parsed {len(roots)} top-level expression(s)")
        return [normalize(root) for root in roots]

    def _emit(self, node: SExp, stack: list[_Frame], roots: list[SExp], token: Token) -> None:
        """Hand a finished expression to the enclosing form."""
        while stack and stack[-1].is_quote:
            stack.pop()
            node = SExpQuoted(node)

        if not stack:
            roots.append(node)
            return

        frame = stack[-1]
        if frame.dot is None:
            frame.items.append(node)
        elif frame.tail is None:
            frame.tail = node
        else:
            raise self._unexpected(token, "expected ')' after the dotted tail")

    @staticmethod
    def _close(frame: _Frame) -> SExp:
        if frame.dot is None:
            return make_list(frame.items)
        return make_dotted(frame.items, frame.tail)

    @staticmethod
    def _atom(token: Token) -> SExp:
        kind = token.kind
        if kind is TokenKind.INTEGER:
            return SExpNumber(NumberKind.INTEGER, token.text)
        if kind is TokenKind.FLOAT:
            return SExpNumber(NumberKind.FLOAT, token.text)
        if kind is TokenKind.STRING:
            return SExpString(unescape(token.text))
        return SExpSymbol(token.text)

    @staticmethod
    def _unexpected(token: Token, expected: Optional[str] = None) -> ParseError:
        message = f"Unexpected token '{token.describe()}' at position {token.position}"
        if expected:
            message += f", {expected}"
        return ParseError(message, token=token.text, position=token.position)

    @staticmethod
    def _unexpected_end(frame: _Frame, eof: Token) -> ParseError:
        if frame.is_quote:
            expected = "an expression after quote"
        elif frame.dot is not None and frame.tail is None:
            expected = "an expression after '.'"
        else:
            expected = "')'"
        return ParseError(
            f"Unexpected end of input, expected {expected} "
            f"(opened at position {frame.opener.position})",
            position=eof.position,
            at_end=True,
            suggestions=["Check for unbalanced parentheses"],
        )


def parse(text: str, max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> list[SExp]:
    """Parse all top-level S-expressions in ``text``."""
    return Parser(text, max_depth=max_depth).parse()


def parse_one(text: str, max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> SExp:
    """Parse ``text`` and return its first top-level S-expression."""
    return parse(text, max_depth=max_depth)[0]


def parse_file(path: str | Path, max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> list[SExp]:
    """Parse all S-expressions in a UTF-8 text file."""
    text = Path(path).read_text(encoding="utf-8")
    return Parser(text, max_depth=max_depth).parse()
