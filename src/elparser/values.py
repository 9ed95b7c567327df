"""
Bridge between S-expression trees and native Python values.

Native side of the mapping:

    S-expression        Python
    ------------        ------
    integer             int
    float               float
    string              str
    symbol              Symbol
    nil                 None
    (a b c)             [a, b, c]
    (a . b)             [a, b]
    (a b . c)           [a, b, c]
    'x                  [x]

Encoding goes the other way over a closed set of types; ``True`` becomes the
symbol ``t``, ``False`` and ``None`` become ``nil``, and a dict becomes an
association list. Anything else raises :class:`EncodingError`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from elparser.exceptions import EncodingError
from elparser.sexp.lexer import is_symbol_name
from elparser.sexp.nodes import (
    NIL,
    NumberKind,
    SExp,
    SExpCons,
    SExpNil,
    SExpNumber,
    SExpQuoted,
    SExpString,
    SExpSymbol,
    car,
    cdr,
    fold,
    is_association_list,
    make_list,
    render,
)


@dataclass(frozen=True)
class Symbol:
    """
    A Lisp symbol on the Python side.

    Distinct from ``str``: ``Symbol("a") != "a"``, so decoded symbols and
    strings never collide, and ``encode(Symbol("a"))`` gives ``a`` while
    ``encode("a")`` gives ``"a"``.
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


T = Symbol("t")


def _native_atom(node: SExp) -> Any:
    if isinstance(node, SExpNil):
        return None
    if isinstance(node, SExpNumber):
        return node.value
    if isinstance(node, SExpString):
        return node.text
    if isinstance(node, SExpSymbol):
        return Symbol(node.name)
    raise TypeError(f"Not an S-expression node: {node!r}")


def _native_branch(node: SExp, values: list) -> Any:
    if isinstance(node, SExpQuoted):
        return [values[0]]
    # A cons is a pair, not the start of a list: the tail is not spliced in,
    # while a dotted list gives its heads followed by the tail
    return values


def to_native(node: SExp) -> Any:
    """Convert a tree to native values (see the module docstring for the mapping)."""
    return fold(node, _native_atom, _native_branch)


def _hashable(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    return value


def to_mapping(node: SExp) -> dict[Any, Any]:
    """
    Convert an association list to a dict.

    Each element contributes ``car -> cdr``; later duplicate keys overwrite
    earlier ones. ``((a . 1) (b))`` gives ``{Symbol('a'): 1, Symbol('b'): None}``
    and ``((c 3 4))`` gives ``{Symbol('c'): [3, 4]}``. List-valued keys are
    converted to tuples.

    Raises:
        ValueError: If ``node`` is not an association list
    """
    if not is_association_list(node):
        raise ValueError(f"Not an association list: {render(node)}")
    if isinstance(node, SExpNil):
        return {}
    result: dict[Any, Any] = {}
    for item in node.items:
        result[_hashable(to_native(car(item)))] = to_native(cdr(item))
    return result


def _format_float(value: float) -> str:
    """repr() of a float, adjusted so it always reads back as a float token."""
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return mantissa + sep + exponent


def from_native(value: Any) -> SExp:
    """
    Convert a native value to a tree.

    Raises:
        EncodingError: If ``value`` (or anything nested in it) has no
            S-expression form
    """
    if value is None:
        return NIL
    # bool before int: True is an int in Python
    if value is True:
        return SExpSymbol(T.name)
    if value is False:
        return NIL
    if isinstance(value, int):
        return SExpNumber(NumberKind.INTEGER, str(int(value)))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodingError(value, ["Only finite floats can be encoded"])
        return SExpNumber(NumberKind.FLOAT, _format_float(float(value)))
    if isinstance(value, str):
        return SExpString(value)
    if isinstance(value, Symbol):
        if value.name == "nil":
            return NIL
        if not is_symbol_name(value.name):
            raise EncodingError(value, ["Use a string for text that is not a valid symbol name"])
        return SExpSymbol(value.name)
    if isinstance(value, (list, tuple)):
        return make_list([from_native(v) for v in value])
    if isinstance(value, Mapping):
        return make_list([SExpCons(from_native(k), from_native(v)) for k, v in value.items()])
    raise EncodingError(value)
