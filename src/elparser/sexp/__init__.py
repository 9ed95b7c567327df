"""
S-expression reader and tree model.

Usage:
    from elparser.sexp import parse, parse_one, render

    forms = parse("(a . 1) (b 2 3)")
    forms[0].car          # SExpSymbol(name='a')
    render(forms[1])      # "(b 2 3)"
"""

from .lexer import Token, TokenKind, tokenize
from .nodes import (
    NIL,
    NumberKind,
    SExp,
    SExpCons,
    SExpDottedList,
    SExpList,
    SExpNil,
    SExpNumber,
    SExpQuoted,
    SExpString,
    SExpSymbol,
    car,
    cdr,
    children,
    equals,
    fold,
    is_association_list,
    is_atom,
    is_cons,
    is_proper_list,
    render,
)
from .normalize import normalize
from .parser import DEFAULT_MAX_DEPTH, Parser, parse, parse_file, parse_one

__all__ = [
    # Tree model
    "SExp",
    "SExpNil",
    "SExpSymbol",
    "SExpString",
    "SExpNumber",
    "SExpCons",
    "SExpList",
    "SExpDottedList",
    "SExpQuoted",
    "NIL",
    "NumberKind",
    # Tree operations
    "car",
    "cdr",
    "is_atom",
    "is_cons",
    "is_proper_list",
    "is_association_list",
    "render",
    "equals",
    "children",
    "fold",
    "normalize",
    # Reader
    "Token",
    "TokenKind",
    "tokenize",
    "Parser",
    "DEFAULT_MAX_DEPTH",
    "parse",
    "parse_one",
    "parse_file",
]
