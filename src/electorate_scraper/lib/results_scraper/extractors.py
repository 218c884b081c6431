"""Lenient numeric extraction from loosely-typed upstream values.

The results feed mixes native numbers with strings such as ``"12,345 votes"``,
``"54.3%"`` or ``"+2.1"``. The ``parse_*`` helpers return ``None`` when a
value cannot be resolved; the ``extract_*`` functions default that to zero
and never raise, so one bad field degrades to 0 instead of failing a record.
"""

import math
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

_VOTES_RE = re.compile(r"\d[\d,]*")
_DECIMAL_RE = re.compile(r"([+-]?)(\d+(?:\.\d*)?|\.\d+)\s*%?")

T = TypeVar("T", int, float)


def _is_number(value: Any) -> bool:
    """True for int/float values, excluding bools and non-finite floats."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def parse_votes(value: Any) -> int | None:
    """Resolve a vote count, or None when the value holds no digits.

    Args:
        value: Number, string or anything else from an upstream payload.

    Returns:
        Non-negative integer vote count, or None if unresolvable.
    """
    if _is_number(value):
        return max(0, math.floor(value))
    if isinstance(value, str):
        match = _VOTES_RE.search(value)
        if match:
            try:
                return int(match.group(0).replace(",", ""))
            except ValueError:
                # Digit runs past the interpreter's int conversion limit.
                return None
    return None


def parse_percentage(value: Any, *, signed: bool = False) -> float | None:
    """Resolve a percentage, or None when the value holds no number.

    Args:
        value: Number, string or anything else from an upstream payload.
        signed: Keep a leading ``+``/``-`` on string input (used for swing).

    Returns:
        Float percentage, or None if unresolvable.
    """
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        match = _DECIMAL_RE.search(value)
        if match:
            sign, digits = match.groups()
            number = float(digits)
            if not math.isfinite(number):
                return None
            return -number if signed and sign == "-" else number
    return None


def parse_swing(value: Any) -> float | None:
    """Resolve a signed swing, or None when the value holds no number."""
    return parse_percentage(value, signed=True)


def extract_votes(value: Any) -> int:
    """Extract a vote count such as ``"12,345 votes"``, defaulting to 0."""
    return parse_votes(value) or 0


def extract_percentage(value: Any) -> float:
    """Extract an unsigned percentage such as ``"54.3%"``, defaulting to 0.0."""
    return parse_percentage(value) or 0.0


def extract_swing(value: Any) -> float:
    """Extract a signed swing such as ``"-2.1%"`` or ``"+2.1"``, defaulting to 0.0."""
    return parse_swing(value) or 0.0


def first_resolved(
    source: Any,
    fields: Sequence[str],
    parser: Callable[[Any], T | None],
) -> T | None:
    """Probe ``fields`` on ``source`` in order; return the first non-zero parsed value.

    Args:
        source: Mapping to probe. Anything else resolves to None.
        fields: Ordered candidate field names.
        parser: One of the ``parse_*`` helpers.

    Returns:
        The first resolved non-zero value, or None.
    """
    if not isinstance(source, Mapping):
        return None
    for field in fields:
        if field not in source:
            continue
        parsed = parser(source[field])
        if parsed:
            return parsed
    return None
