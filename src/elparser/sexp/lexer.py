"""
Tokenizer for Emacs Lisp style S-expressions.

Rules are tried in a fixed order at each scan position after skipping
whitespace; the first rule that matches wins:

1. float      ``[-+]?[0-9]*\\.[0-9]+([eE][-+]?[0-9]+)?``
2. integer    ``[-+]?(0|[1-9][0-9]*)``
3. dot        a lone ``.`` followed by whitespace
4. symbol     a letter or one of ``- . / _ : * + = $``, then those
              characters, digits, ``#``, ``<`` and ``>``
5. string     a double-quoted literal, backslash escapes left in place
6. ``(``, ``)`` and ``'`` as single-character punctuation

A dot that is not followed by whitespace starts a symbol, so ``.`` inside
``foo.bar`` or ``.emacs`` never acts as the pair separator. A lone ``.``
before ``(``, ``'`` or ``"`` matches no rule and is a lexical error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from elparser.exceptions import LexicalError

logger = logging.getLogger(__name__)

FLOAT_RE = re.compile(r"[-+]?[0-9]*\.[0-9]+(?:[eE][-+]?[0-9]+)?")
INTEGER_RE = re.compile(r"[-+]?(?:0|[1-9][0-9]*)")
DOT_RE = re.compile(r"\.(?=\s)")
SYMBOL_CHARS = r"A-Za-z0-9\-./_:$*+=#<>"
# A symbol may start with a dot only when a symbol character follows; the
# name "." on its own is read only at end of input or before ")".
SYMBOL_RE = re.compile(
    rf"(?:[A-Za-z\-/_:*+=$]|\.(?=[{SYMBOL_CHARS}]))[{SYMBOL_CHARS}]*|\.(?=\)|\Z)"
)
STRING_RE = re.compile(r'"((?:[^\\"]|\\.)*)"', re.DOTALL)
WHITESPACE_RE = re.compile(r"\s+")

SAMPLE_LENGTH = 5


class TokenKind(Enum):
    """Lexical category of a token."""

    FLOAT = "float"
    INTEGER = "integer"
    DOT = "."
    SYMBOL = "symbol"
    STRING = "string"
    LPAREN = "("
    RPAREN = ")"
    QUOTE = "'"
    EOF = "end of input"


PUNCTUATION = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "'": TokenKind.QUOTE,
}

# Order matters: numbers before the dot, the dot before symbols.
RULES = [
    (TokenKind.FLOAT, FLOAT_RE),
    (TokenKind.INTEGER, INTEGER_RE),
    (TokenKind.DOT, DOT_RE),
    (TokenKind.SYMBOL, SYMBOL_RE),
]


@dataclass(frozen=True)
class Token:
    """
    A classified lexeme.

    For STRING tokens ``text`` is the raw text between the quotes, with
    escape sequences still in place. ``position`` is the character offset
    where the token starts.
    """

    kind: TokenKind
    text: str
    position: int

    def describe(self) -> str:
        """Human readable form for error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.STRING:
            return f'"{self.text}"'
        return self.text


def tokenize(text: str) -> list[Token]:
    """
    Split ``text`` into tokens, ending with a single EOF token.

    Raises:
        LexicalError: If no rule matches at some position
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        ws = WHITESPACE_RE.match(text, pos)
        if ws:
            pos = ws.end()
            continue

        for kind, pattern in RULES:
            match = pattern.match(text, pos)
            if match:
                tokens.append(Token(kind, match.group(0), pos))
                pos = match.end()
                break
        else:
            match = STRING_RE.match(text, pos)
            if match:
                tokens.append(Token(TokenKind.STRING, match.group(1), pos))
                pos = match.end()
                continue

            char = text[pos]
            if char not in PUNCTUATION:
                suggestions = []
                if char == '"':
                    suggestions.append("Check for an unterminated string literal")
                raise LexicalError(
                    f"Scanner error: unexpected character {char!r}",
                    offset=pos,
                    sample=text[pos : pos + SAMPLE_LENGTH],
                    suggestions=suggestions,
                )
            tokens.append(Token(PUNCTUATION[char], char, pos))
            pos += 1

    tokens.append(Token(TokenKind.EOF, "", length))
    logger.debug(f"Tokenized {length} characters into {len(tokens) - 1} tokens")
    return tokens


def is_symbol_name(name: str) -> bool:
    """True if ``name`` reads back as exactly one symbol token."""
    if name == ".":
        return False
    if FLOAT_RE.match(name) or INTEGER_RE.match(name):
        return False
    return SYMBOL_RE.fullmatch(name) is not None
