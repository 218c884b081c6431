"""Schema-free search for the per-electorate record array in a JSON payload.

The results feed has moved its electorate list between top-level keys and
nested containers across elections, so rather than binding to one path the
locator checks a few likely keys and then falls back to a depth-first search.
"""

from collections.abc import Mapping
from typing import Any

# Keys that usually hold the electorate list, most specific first.
PREFERRED_KEYS: tuple[str, ...] = ("electorates", "seats", "results", "candidates", "data", "content")


def _search_mapping(payload: Mapping[str, Any]) -> list[Any]:
    for key in PREFERRED_KEYS:
        value = payload.get(key)
        if isinstance(value, list) and value:
            return value
        if isinstance(value, Mapping):
            nested = _search_mapping(value)
            if nested:
                return nested

    for value in payload.values():
        if isinstance(value, list) and value:
            return value
        if isinstance(value, Mapping):
            nested = _search_mapping(value)
            if nested:
                return nested
    return []


def find_record_array(payload: Any) -> list[Any]:
    """Locate the array of per-electorate records inside ``payload``.

    Args:
        payload: Decoded JSON of unknown shape.

    Returns:
        ``payload`` itself if it is a list, otherwise the first non-empty list
        found under a preferred key or by depth-first search in insertion
        order. Empty list when nothing is found.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        return _search_mapping(payload)
    return []
