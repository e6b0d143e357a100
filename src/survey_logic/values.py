"""Answer value normalization shared by the evaluator and piping engine.

Answers arrive in whatever shape the form produced: strings from text
inputs, numbers from number/rating/scale inputs, lists of strings from
multiple choice, booleans, mappings (location), or nothing at all.  Every
operator goes through these helpers so that text, number, and list
semantics stay consistent across ``equals``, ``contains``, and the
ordering operators.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def is_empty(value: Any) -> bool:
    """True for None, empty string, empty list/tuple, or empty mapping."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) == 0
    return False


def is_number(value: Any) -> bool:
    """True for int/float answers (bool is not a number here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> float | None:
    """Parse *value* as a finite float, or None if it is not numeric.

    Strings are stripped first; empty strings, booleans, lists, NaN, and
    ints too large for a float do not parse.
    """
    if is_number(value):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_text(value: Any) -> str:
    """Normalize *value* to its comparison text.

    Integral floats drop the trailing ``.0`` so that ``5`` and ``5.0``
    compare equal as text; booleans become ``true``/``false``; lists are
    comma-joined without spaces.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(v) for v in value)
    return str(value)


def to_list(value: Any) -> list[Any] | None:
    """Return *value* as a list if it is a list/tuple answer, else None."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return None
