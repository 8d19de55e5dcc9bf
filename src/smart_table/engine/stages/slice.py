"""Slice (pagination) stage factory."""

from collections.abc import Callable, Mapping
from typing import Any

Stage = Callable[[list[Any]], list[Any]]


def slice_factory(criteria: Mapping[str, Any] | None = None) -> Stage:
    """Keep one page. Pages are 1-based; a falsy size makes the whole list one page."""
    criteria = criteria or {}
    page = criteria.get("page")
    if page is None:
        page = 1
    size = criteria.get("size")

    def page_of(array: list[Any]) -> list[Any]:
        actual_size = size or len(array)
        offset = (page - 1) * actual_size
        return array[offset : offset + actual_size]

    return page_of
