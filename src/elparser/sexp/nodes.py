"""
S-expression tree model.

The tree is a closed set of immutable variants:

    SExpNil         the empty list, false, the literal ``nil``
    SExpSymbol      an identifier
    SExpString      a string literal (content already unescaped)
    SExpNumber      an integer or float, kept in its source text form
    SExpCons        a single pair ``(car . cdr)``
    SExpList        a proper list of one or more elements
    SExpDottedList  two or more elements followed by a non-nil tail
    SExpQuoted      ``'expr``

Operations over the tree are plain functions that dispatch on the variant
(:func:`car`, :func:`cdr`, :func:`render`, ...). Every node also exposes them
as properties so that ``tree.cdr.car`` reads naturally.

Lists and dotted lists are flattened cons chains: ``car``/``cdr`` on
``(1 2 3)`` behave exactly like on ``(1 . (2 . (3 . nil)))``.

Equality is structural and defined by the canonical rendering, so a list
built by the parser equals a cons whose tail is the equivalent list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Sequence, Union

from elparser.sexp.strings import escape


class NumberKind(Enum):
    """Numeric kind of an :class:`SExpNumber`."""

    INTEGER = "integer"
    FLOAT = "float"


class _Node:
    """Accessors shared by all variants. Each delegates to the module function."""

    @property
    def car(self) -> SExp:
        return car(self)  # type: ignore[arg-type]

    @property
    def cdr(self) -> SExp:
        return cdr(self)  # type: ignore[arg-type]

    @property
    def is_atom(self) -> bool:
        return is_atom(self)  # type: ignore[arg-type]

    @property
    def is_cons(self) -> bool:
        return is_cons(self)  # type: ignore[arg-type]

    @property
    def is_proper_list(self) -> bool:
        return is_proper_list(self)  # type: ignore[arg-type]

    @property
    def is_association_list(self) -> bool:
        return is_association_list(self)  # type: ignore[arg-type]

    def to_native(self) -> Any:
        """Convert to plain Python values (see :func:`elparser.values.to_native`)."""
        from elparser.values import to_native

        return to_native(self)  # type: ignore[arg-type]

    def to_mapping(self) -> dict:
        """Convert an association list to a dict (see :func:`elparser.values.to_mapping`)."""
        from elparser.values import to_mapping

        return to_mapping(self)  # type: ignore[arg-type]

    def to_string(self) -> str:
        """Render as S-expression text."""
        return render(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return render(self)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Node):
            return NotImplemented
        return equals(self, other)  # type: ignore[arg-type]

    def __hash__(self) -> int:
        return hash(render(self))  # type: ignore[arg-type]


@dataclass(frozen=True, eq=False)
class SExpNil(_Node):
    """The empty list. There is exactly one instance, :data:`NIL`."""

    _instance: ClassVar[Optional[SExpNil]] = None

    def __new__(cls) -> SExpNil:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NIL"


NIL = SExpNil()


@dataclass(frozen=True, eq=False)
class SExpSymbol(_Node):
    name: str


@dataclass(frozen=True, eq=False)
class SExpString(_Node):
    text: str


@dataclass(frozen=True, eq=False)
class SExpNumber(_Node):
    """
    Integer or float atom.

    ``text`` keeps the source form (``+33``, ``.45``, ``1.4e-5``) so that
    rendering reproduces it exactly; :attr:`value` gives the Python number.
    """

    kind: NumberKind
    text: str

    @property
    def value(self) -> Union[int, float]:
        if self.kind is NumberKind.INTEGER:
            return int(self.text)
        return float(self.text)

    @classmethod
    def integer(cls, text: Union[str, int]) -> SExpNumber:
        return cls(NumberKind.INTEGER, str(text))

    @classmethod
    def float_(cls, text: Union[str, float]) -> SExpNumber:
        return cls(NumberKind.FLOAT, str(text))


@dataclass(frozen=True, eq=False)
class SExpCons(_Node):
    """A single pair. The tail may be any node."""

    head: SExp
    tail: SExp


@dataclass(frozen=True, eq=False)
class SExpList(_Node):
    """A proper list. Never empty: the empty list is :data:`NIL`."""

    items: tuple[SExp, ...]

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        if not self.items:
            raise ValueError("SExpList cannot be empty, use NIL")


@dataclass(frozen=True, eq=False)
class SExpDottedList(_Node):
    """
    ``(a b ... . tail)`` with at least two head elements.

    The tail is an atom other than NIL, or a quoted form. A cons-like tail
    belongs in ``items``; :func:`make_dotted` splices it in.
    """

    items: tuple[SExp, ...]
    tail: SExp

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        if len(self.items) < 2:
            raise ValueError("SExpDottedList needs at least two elements, use SExpCons")
        if isinstance(self.tail, SExpNil):
            raise ValueError("SExpDottedList tail cannot be NIL, use SExpList")
        if isinstance(self.tail, (SExpCons, SExpList, SExpDottedList)):
            raise ValueError("SExpDottedList tail cannot be cons-like, use make_dotted")


@dataclass(frozen=True, eq=False)
class SExpQuoted(_Node):
    expr: SExp


SExp = Union[
    SExpNil,
    SExpSymbol,
    SExpString,
    SExpNumber,
    SExpCons,
    SExpList,
    SExpDottedList,
    SExpQuoted,
]

ATOM_TYPES = (SExpNil, SExpSymbol, SExpString, SExpNumber)
CONS_TYPES = (SExpCons, SExpList, SExpDottedList)


def make_list(items: Sequence[SExp]) -> SExp:
    """Build a proper list, NIL when ``items`` is empty."""
    if not items:
        return NIL
    return SExpList(tuple(items))


def make_dotted(items: Sequence[SExp], tail: SExp) -> SExp:
    """
    Build ``(items... . tail)`` in canonical form.

    One head element always gives a cons. With more heads a cons-like tail
    is spliced into the heads, so ``(1 2 . (3 4))`` becomes the list
    ``(1 2 3 4)`` and ``(1 2 . (3 . 4))`` becomes ``(1 2 3 . 4)``.
    """
    if not items:
        raise ValueError("Dotted form needs at least one element before the dot")
    if len(items) == 1:
        return SExpCons(items[0], tail)

    heads = list(items)
    while isinstance(tail, SExpCons):
        heads.append(tail.head)
        tail = tail.tail
    if isinstance(tail, SExpList):
        return SExpList(tuple(heads) + tail.items)
    if isinstance(tail, SExpDottedList):
        return SExpDottedList(tuple(heads) + tail.items, tail.tail)
    if isinstance(tail, SExpNil):
        return SExpList(tuple(heads))
    return SExpDottedList(tuple(heads), tail)


def car(node: SExp) -> SExp:
    """First element of a cons-like node. ``car`` of NIL is NIL."""
    if isinstance(node, SExpCons):
        return node.head
    if isinstance(node, (SExpList, SExpDottedList)):
        return node.items[0]
    if isinstance(node, SExpNil):
        return NIL
    raise TypeError(f"car: not a cons cell: {render(node)}")


def cdr(node: SExp) -> SExp:
    """Rest of a cons-like node. ``cdr`` of NIL is NIL."""
    if isinstance(node, SExpCons):
        return node.tail
    if isinstance(node, SExpList):
        if len(node.items) == 1:
            return NIL
        return SExpList(node.items[1:])
    if isinstance(node, SExpDottedList):
        if len(node.items) == 2:
            return SExpCons(node.items[1], node.tail)
        return SExpDottedList(node.items[1:], node.tail)
    if isinstance(node, SExpNil):
        return NIL
    raise TypeError(f"cdr: not a cons cell: {render(node)}")


def is_atom(node: SExp) -> bool:
    return isinstance(node, ATOM_TYPES)


def is_cons(node: SExp) -> bool:
    return isinstance(node, CONS_TYPES)


def is_proper_list(node: SExp) -> bool:
    """True for NIL, lists, and cons chains that end in NIL."""
    while isinstance(node, SExpCons):
        node = node.tail
    return isinstance(node, (SExpNil, SExpList))


def is_association_list(node: SExp) -> bool:
    """True if ``node`` is a list whose every element is cons-like."""
    if isinstance(node, SExpNil):
        return True
    if not isinstance(node, SExpList):
        return False
    return all(is_cons(item) for item in node.items)


def children(node: SExp) -> tuple[SExp, ...]:
    """Direct subexpressions of ``node`` in source order; atoms have none."""
    if isinstance(node, SExpCons):
        return (node.head, node.tail)
    if isinstance(node, SExpList):
        return node.items
    if isinstance(node, SExpDottedList):
        return node.items + (node.tail,)
    if isinstance(node, SExpQuoted):
        return (node.expr,)
    return ()


def fold(
    node: SExp,
    leaf: Callable[[SExp], Any],
    branch: Callable[[SExp, list], Any],
) -> Any:
    """
    Bottom-up traversal with an explicit stack.

    ``leaf(atom)`` converts each atom; ``branch(node, values)`` combines the
    converted children of a compound node (see :func:`children` for their
    order). Depth is limited only by memory, not by the interpreter's
    recursion limit.
    """
    results: list[Any] = []
    stack: list[tuple[SExp, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        subs = children(current)
        if not subs:
            results.append(leaf(current))
        elif not expanded:
            stack.append((current, True))
            stack.extend((sub, False) for sub in reversed(subs))
        else:
            values = results[-len(subs) :]
            del results[-len(subs) :]
            results.append(branch(current, values))
    return results[0]


def _spaced(items: Sequence[SExp]) -> list:
    pieces: list = []
    for i, item in enumerate(items):
        if i:
            pieces.append(" ")
        pieces.append(item)
    return pieces


def _pieces(node: SExp) -> list:
    """One level of rendering: literal text mixed with child nodes."""
    if isinstance(node, SExpNil):
        return ["nil"]
    if isinstance(node, SExpSymbol):
        return [node.name]
    if isinstance(node, SExpString):
        return [f'"{escape(node.text)}"']
    if isinstance(node, SExpNumber):
        return [node.text]
    if isinstance(node, SExpCons):
        # A pair whose tail is a proper list is that list with one more element
        if isinstance(node.tail, SExpList):
            return ["(", *_spaced((node.head,) + node.tail.items), ")"]
        return ["(", node.head, " . ", node.tail, ")"]
    if isinstance(node, SExpList):
        return ["(", *_spaced(node.items), ")"]
    if isinstance(node, SExpDottedList):
        return ["(", *_spaced(node.items), " . ", node.tail, ")"]
    if isinstance(node, SExpQuoted):
        return ["'", node.expr]
    raise TypeError(f"Not an S-expression node: {node!r}")


def render(node: SExp) -> str:
    """Render ``node`` as S-expression text that parses back to an equal tree."""
    out: list[str] = []
    stack: list = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        else:
            stack.extend(reversed(_pieces(item)))
    return "".join(out)


def equals(a: SExp, b: SExp) -> bool:
    """Structural equality via canonical rendering."""
    return render(a) == render(b)
