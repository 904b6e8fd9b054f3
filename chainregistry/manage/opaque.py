"""Comparison of decoded JSON documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (Mapping, list)) or isinstance(b, (Mapping, list)):
        return False
    return a == b


def contains_all(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    """Tell whether every key and value in b is also present in a.

    Nested mappings in b need only be contained in the matching mapping of a;
    all other values must be equal.
    """
    for key, bv in b.items():
        if key not in a:
            return False
        av = a[key]
        if isinstance(bv, Mapping):
            if not isinstance(av, Mapping) or not contains_all(av, bv):
                return False
        elif not _equal(av, bv):
            return False
    return True