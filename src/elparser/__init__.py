"""
elparser: read and write Emacs Lisp S-expressions.

Text exchanged with an Emacs process is parsed into an immutable tree of
S-expression nodes, and native Python values are encoded back into the same
text form.

Modules:
    sexp: tokenizer, parser, tree model and normalization
    values: native Symbol type and the tree <-> Python value bridge
    encoder: encode / encode_many
    config: TOML configuration
    cli: the ``elparser`` command

Quick Start::

    from elparser import Symbol, encode, parse_one

    tree = parse_one('((a . 1) (b . "x"))')
    tree.is_association_list        # True
    tree.to_mapping()               # {Symbol('a'): 1, Symbol('b'): 'x'}

    encode({Symbol("a"): [1, 2, 3]})  # '((a 1 2 3))'
"""

__version__ = "0.1.0"

from elparser import logging as _logging  # noqa: F401  installs the NullHandler
from elparser.encoder import encode, encode_many
from elparser.exceptions import (
    ElparserError,
    EncodingError,
    LexicalError,
    ParseError,
)
from elparser.sexp import (
    NIL,
    NumberKind,
    Parser,
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
    equals,
    is_association_list,
    is_atom,
    is_cons,
    is_proper_list,
    normalize,
    parse,
    parse_file,
    parse_one,
    render,
)
from elparser.values import Symbol, from_native, to_mapping, to_native

__all__ = [
    # Version
    "__version__",
    # Reader
    "parse",
    "parse_one",
    "parse_file",
    "Parser",
    # Encoder
    "encode",
    "encode_many",
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
    "car",
    "cdr",
    "is_atom",
    "is_cons",
    "is_proper_list",
    "is_association_list",
    "render",
    "equals",
    "normalize",
    # Value bridge
    "Symbol",
    "to_native",
    "from_native",
    "to_mapping",
    # Errors
    "ElparserError",
    "LexicalError",
    "ParseError",
    "EncodingError",
]
