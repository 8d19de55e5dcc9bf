"""Search directive: one input searched across a fixed scope of fields."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from smart_table.contracts.enums import TableEvent
from smart_table.contracts.state import SearchState
from smart_table.core.events import proxy_listener

if TYPE_CHECKING:
    import asyncio

    from smart_table.engine.table import SmartTable

SearchListener = proxy_listener({TableEvent.SEARCH_CHANGED: "on_search_change"})


class SearchDirective(SearchListener):  # type: ignore[misc,valid-type]
    name = "search"

    def __init__(self, table: SmartTable, scope: Iterable[str] = ()) -> None:
        super().__init__(table)
        self._table = table
        self.scope = list(scope)

    def search(self, value: str, **opts: Any) -> asyncio.Task[None] | None:
        """Search ``value``; ``opts`` may set ``flags`` or ``escape``, or override ``scope``."""
        criteria: SearchState = {"value": value, "scope": list(self.scope)}
        criteria.update(opts)  # type: ignore[typeddict-item]
        return self._table.search(criteria)

    def state(self) -> SearchState:
        return self._table.get_table_state()["search"]
