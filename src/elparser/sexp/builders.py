"""
S-expression builders.

Shorthand constructors for building trees by hand, e.g. as expected values
in tests or when assembling a reply for the Emacs side without going through
native values.

Usage:
    from elparser.sexp.builders import cons, integer, lst, quote, sym

    node = lst(sym("setq"), sym("x"), quote(lst(integer(1), integer(2))))
    node.to_string()  # "(setq x '(1 2))"
"""

from typing import Union

from .nodes import (
    NIL,
    NumberKind,
    SExp,
    SExpCons,
    SExpNumber,
    SExpQuoted,
    SExpString,
    SExpSymbol,
    make_dotted,
    make_list,
)


def sym(name: str) -> SExp:
    """Build a symbol. ``sym("nil")`` gives NIL."""
    if name == "nil":
        return NIL
    return SExpSymbol(name)


def string(text: str) -> SExpString:
    return SExpString(text)


def integer(value: Union[int, str]) -> SExpNumber:
    """Build an integer atom from an int or its source text ("+33")."""
    return SExpNumber(NumberKind.INTEGER, str(value))


def real(value: Union[float, str]) -> SExpNumber:
    """Build a float atom from a float or its source text (".45", "1.4e5")."""
    return SExpNumber(NumberKind.FLOAT, str(value))


def cons(head: SExp, tail: SExp) -> SExpCons:
    return SExpCons(head, tail)


def lst(*items: SExp) -> SExp:
    """Build a proper list; ``lst()`` is NIL."""
    return make_list(items)


def dotted(items: list, tail: SExp) -> SExp:
    """Build ``(items... . tail)``."""
    return make_dotted(items, tail)


def quote(expr: SExp) -> SExpQuoted:
    return SExpQuoted(expr)
