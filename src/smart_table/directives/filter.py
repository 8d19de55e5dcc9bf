"""Filter directive: turn a raw input value into a single-clause filter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from smart_table.contracts.enums import FilterOperator, FilterType, TableEvent
from smart_table.contracts.state import FilterClause
from smart_table.core.events import proxy_listener

if TYPE_CHECKING:
    import asyncio

    from smart_table.engine.table import SmartTable

FilterListener = proxy_listener({TableEvent.FILTER_CHANGED: "on_filter_change"})


class FilterDirective(FilterListener):  # type: ignore[misc,valid-type]
    """Filter one field with a fixed operator and type.

    Sending an empty string clears the filter on that field.
    """

    name = "filter"

    def __init__(
        self,
        table: SmartTable,
        pointer: str,
        *,
        operator: str = FilterOperator.INCLUDES,
        type: str = FilterType.STRING,
    ) -> None:
        super().__init__(table)
        self._table = table
        self.pointer = pointer
        self.operator = operator
        self.type = type

    def filter(self, value: Any) -> asyncio.Task[None] | None:
        clause: FilterClause = {"value": value, "operator": self.operator, "type": self.type}
        return self._table.filter({self.pointer: [clause]})

    def state(self) -> dict[str, list[FilterClause]]:
        return self._table.get_table_state()["filter"]
