"""Sort stage factory."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import cmp_to_key
from typing import Any

from smart_table.contracts.enums import SortDirection
from smart_table.core.functional import swap
from smart_table.core.pointer import pointer

Comparator = Callable[[Any, Any], int]
Stage = Callable[[list[Any]], list[Any]]


def _type_key(value: Any) -> tuple[str, str]:
    return type(value).__name__, str(value)


def default_comparator(a: Any, b: Any) -> int:
    """Order equal values together, missing (``None``) values last, the rest by ``<``.

    Values ``<`` cannot order (``1`` against ``"b"``) fall back to ordering by
    type name, then by string form.
    """
    if a == b:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    try:
        return -1 if a < b else 1
    except TypeError:
        key_a, key_b = _type_key(a), _type_key(b)
        if key_a == key_b:
            return 0
        return -1 if key_a < key_b else 1


def sort_by_property(prop: str, comparator: Comparator) -> Comparator:
    get = pointer(prop).get
    return lambda a, b: comparator(get(a), get(b))


def default_sort_factory(criteria: Mapping[str, Any] | None = None) -> Stage:
    """Turn ``sort`` criteria into a stage returning a sorted copy.

    Without a pointer, or with direction ``none``, the stage still returns a
    new list in the original order. ``desc`` swaps the comparator arguments
    rather than reversing the result, so ties keep their source order.
    """
    criteria = criteria or {}
    prop = criteria.get("pointer")
    direction = criteria.get("direction", SortDirection.ASC)
    comparator = criteria.get("comparator") or default_comparator

    if not prop or direction == SortDirection.NONE:
        return lambda array: list(array)

    order = sort_by_property(prop, comparator)
    compare = swap(order) if direction == SortDirection.DESC else order
    key = cmp_to_key(compare)
    return lambda array: sorted(array, key=key)
