"""Pagination directive."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from smart_table.contracts.enums import TableEvent
from smart_table.contracts.state import Summary
from smart_table.core.events import proxy_listener

if TYPE_CHECKING:
    import asyncio

    from smart_table.engine.table import SmartTable

SliceListener = proxy_listener(
    {
        TableEvent.PAGE_CHANGED: "on_page_change",
        TableEvent.SUMMARY_CHANGED: "on_summary_change",
    }
)


class PaginationDirective(SliceListener):  # type: ignore[misc,valid-type]
    """Page navigation driven by summaries.

    The current page, page size and match count are cached from
    ``SUMMARY_CHANGED`` events, so they describe the last *computed* view
    rather than a slice request still in flight.
    """

    name = "pagination"

    def __init__(self, table: SmartTable) -> None:
        super().__init__(table)
        self._table = table
        slice_state = table.get_table_state()["slice"]
        self.current_page: int = slice_state.get("page", 1)
        self.current_size: int | None = slice_state.get("size")
        self.item_list_length: int = table.filtered_count
        self.on_summary_change(self._on_summary_change)

    def select_page(self, page: int) -> asyncio.Task[None] | None:
        return self._table.slice({"page": page, "size": self.current_size})

    def select_next_page(self) -> asyncio.Task[None] | None:
        return self.select_page(self.current_page + 1)

    def select_previous_page(self) -> asyncio.Task[None] | None:
        return self.select_page(self.current_page - 1)

    def change_page_size(self, size: int | None) -> asyncio.Task[None] | None:
        return self._table.slice({"page": 1, "size": size})

    def is_previous_page_enabled(self) -> bool:
        return self.current_page > 1

    def is_next_page_enabled(self) -> bool:
        # An unbounded page size means everything is on the first page
        if not self.current_size:
            return False
        return math.ceil(self.item_list_length / self.current_size) > self.current_page

    def state(self) -> dict[str, Any]:
        return {**self._table.get_table_state()["slice"], "filtered_count": self.item_list_length}

    def _on_summary_change(self, summary: Summary) -> None:
        # Remote summaries may omit keys; keep what is not reported
        self.current_page = summary.get("page", self.current_page)
        self.current_size = summary.get("size", self.current_size)
        self.item_list_length = summary.get("filtered_count", self.item_list_length)
