"""Serialize native Python values as S-expression text."""

import logging
from typing import Any, Iterable

from elparser.sexp.nodes import render
from elparser.values import from_native

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "\n"


def encode(value: Any) -> str:
    """
    Encode one native value.

    Example::

        encode([1, 1.2, "xxx", Symbol("www"), True, None])
        # '(1 1.2 "xxx" www t nil)'

    Raises:
        EncodingError: If the value has no S-expression form
    """
    return render(from_native(value))


def encode_many(values: Iterable[Any], separator: str = DEFAULT_SEPARATOR) -> str:
    """Encode several values, joined by ``separator``."""
    rendered = [render(from_native(v)) for v in values]
    logger.debug(f"Encoded {len(rendered)} value(s)")
    return separator.join(rendered)
