"""
Exception hierarchy for elparser.

Every error raised at the parse or encode boundary derives from
:class:`ElparserError`, which formats its message with optional context and
suggestions.

Example::

    from elparser.exceptions import ParseError

    raise ParseError(
        "Unexpected token ')'",
        token=")",
        position=4,
        suggestions=["Check for unbalanced parentheses"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ElparserError(Exception):
    """
    Base exception for all elparser errors.

    Attributes:
        message: Short description of the failure
        context: Dictionary of contextual information (position, token, ...)
        suggestions: List of actionable suggestions for fixing the input
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class LexicalError(ElparserError):
    """
    No token rule matches the input at some offset.

    Attributes:
        offset: Character offset of the failing position
        sample: Up to five characters of input starting at ``offset``
    """

    def __init__(
        self,
        message: str,
        offset: int,
        sample: str,
        suggestions: Optional[List[str]] = None,
    ):
        self.offset = offset
        self.sample = sample
        super().__init__(message, {"offset": offset, "sample": repr(sample)}, suggestions)


class ParseError(ElparserError):
    """
    Token sequence is not a valid S-expression.

    Raised for empty input, unbalanced or stray parentheses, misplaced dots
    and input nested deeper than the parser allows.

    Attributes:
        token: Literal text of the offending token, None at end of input
        position: Character offset of the offending token
        at_end: True when the input ended before the expression was complete
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        position: Optional[int] = None,
        at_end: bool = False,
        suggestions: Optional[List[str]] = None,
    ):
        self.token = token
        self.position = position
        self.at_end = at_end

        ctx: Dict[str, Any] = {}
        if at_end:
            ctx["token"] = "end of input"
        elif token is not None:
            ctx["token"] = repr(token)
        if position is not None:
            ctx["position"] = position

        super().__init__(message, ctx, suggestions)


class EncodingError(ElparserError):
    """
    A native value has no S-expression representation.

    Attributes:
        value: The unsupported object
    """

    def __init__(self, value: Any, suggestions: Optional[List[str]] = None):
        self.value = value
        super().__init__(
            f"Can't encode object: {value!r}",
            {"type": type(value).__name__},
            suggestions,
        )


class ConfigError(ElparserError):
    """Configuration file is invalid or unreadable."""

    pass


__all__ = [
    "ElparserError",
    "LexicalError",
    "ParseError",
    "EncodingError",
    "ConfigError",
]
