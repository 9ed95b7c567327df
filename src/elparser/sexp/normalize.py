"""Canonicalization pass applied to every freshly parsed tree."""

from elparser.sexp.nodes import (
    NIL,
    SExp,
    SExpCons,
    SExpDottedList,
    SExpList,
    SExpQuoted,
    SExpSymbol,
    fold,
    make_dotted,
)

NIL_NAME = "nil"


def _leaf(node: SExp) -> SExp:
    if isinstance(node, SExpSymbol) and node.name == NIL_NAME:
        return NIL
    return node


def _rebuild(node: SExp, parts: list) -> SExp:
    if isinstance(node, SExpCons):
        return SExpCons(parts[0], parts[1])
    if isinstance(node, SExpList):
        return SExpList(tuple(parts))
    if isinstance(node, SExpDottedList):
        return make_dotted(parts[:-1], parts[-1])
    if isinstance(node, SExpQuoted):
        return SExpQuoted(parts[0])
    raise TypeError(f"Not an S-expression node: {node!r}")


def normalize(node: SExp) -> SExp:
    """
    Return a copy of ``node`` with every ``nil`` symbol replaced by NIL.

    The tree is rebuilt bottom-up and the input is left untouched. A dotted
    list whose tail becomes NIL collapses to a proper list. Running the pass
    on its own output returns an equal tree.
    """
    return fold(node, _leaf, _rebuild)
