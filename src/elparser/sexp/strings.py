"""Escaping rules for S-expression string literals."""

import re

# \\ and \" decode to the escaped character, \u{XXXX} and \uXXXX decode to
# the code point; a backslash before anything else stays in the text.
_ESCAPE_RE = re.compile(r"\\(?:u\{([0-9A-Fa-f]{1,6})\}|u([0-9A-Fa-f]{4})|(.))", re.DOTALL)

MAX_CODE_POINT = 0x10FFFF


def _decode(match: re.Match) -> str:
    braced, plain, other = match.groups()
    hex_digits = braced or plain
    if hex_digits is not None:
        code = int(hex_digits, 16)
        if code > MAX_CODE_POINT:
            return match.group(0)
        return chr(code)
    if other in ('"', "\\"):
        return other
    return match.group(0)


def unescape(raw: str) -> str:
    r"""Decode the inner text of a string literal.

    Examples:
        a\"b       -> a"b
        \u{2026}   -> U+2026 (horizontal ellipsis)
        \\u2026    -> \u2026  (escaped backslash, no code point)
    """
    return _ESCAPE_RE.sub(_decode, raw)


def escape(text: str) -> str:
    """Encode string content so that :func:`unescape` reads it back unchanged."""
    return text.replace("\\", "\\\\").replace('"', '\\"')
