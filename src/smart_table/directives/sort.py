"""Sort directive: cycle one column through its sort directions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from smart_table.contracts.enums import SortDirection, TableEvent
from smart_table.contracts.state import SortState
from smart_table.core.debounce import Debouncer
from smart_table.core.events import proxy_listener

if TYPE_CHECKING:
    from smart_table.engine.table import SmartTable

SortListener = proxy_listener({TableEvent.TOGGLE_SORT: "on_sort_toggle"})


class SortDirective(SortListener):  # type: ignore[misc,valid-type]
    """Toggle the sort of a single pointer.

    Without ``cycle`` the directions alternate ``asc``, ``desc``, ``asc``...
    With ``cycle`` they go ``asc``, ``desc``, ``none``. Several sort
    directives can share a table: when another pointer takes over the sort,
    this directive starts again from its first direction.

    Example:
        by_name = SortDirective(table, "name", debounce_ms=150)
        by_name.toggle()  # asc
        by_name.toggle()  # desc
    """

    name = "sort"

    def __init__(
        self,
        table: SmartTable,
        pointer: str,
        *,
        cycle: bool = False,
        debounce_ms: int | None = None,
    ) -> None:
        super().__init__(table)
        self._table = table
        self.pointer = pointer
        self.cycle = cycle
        self._directions = (
            [SortDirection.NONE, SortDirection.ASC, SortDirection.DESC]
            if cycle
            else [SortDirection.DESC, SortDirection.ASC]
        )
        delay_ms = table.settings.sort_debounce_ms if debounce_ms is None else debounce_ms
        self._commit = Debouncer(table.sort, delay_ms)
        self._hit = 0

        self.on_sort_toggle(self._on_sort_toggle)

        # Start in step with a table that is already sorted on this pointer
        current = self.state()
        if current.get("pointer") == pointer:
            direction = current.get("direction", SortDirection.ASC)
            if direction in self._directions:
                self._hit = self._directions.index(direction)

    def toggle(self) -> None:
        """Move to the next direction; the sort reaches the table after the debounce delay."""
        self._hit += 1
        direction = self._directions[self._hit % len(self._directions)]
        self._commit({"pointer": self.pointer, "direction": direction})

    def cancel(self) -> None:
        """Drop a toggle still waiting for its debounce delay."""
        self._commit.cancel()

    def state(self) -> SortState:
        return self._table.get_table_state()["sort"]

    def _on_sort_toggle(self, sort: SortState) -> None:
        if sort.get("pointer") != self.pointer:
            self._hit = 0
