"""The table engine.

:class:`SmartTable` owns the table state and the source data. Its mutating
operations update the state synchronously, dispatch the matching change
event and start an execution; observers learn about results only through
events.

Usage:
    table = smart_table(data=[{"n": 1}, {"n": 2}, {"n": 3}])
    table.on(TableEvent.DISPLAY_CHANGED, render)
    await table.sort({"pointer": "n", "direction": "desc"})
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from smart_table.contracts.enums import TableEvent
from smart_table.contracts.state import (
    FilterClause,
    SearchState,
    SliceState,
    SortState,
    Summary,
    TableState,
    copy_table_state,
    default_table_state,
)
from smart_table.core.config import TableSettings
from smart_table.core.events import Emitter, Listener
from smart_table.core.logging import get_logger
from smart_table.core.pointer import CurriedPointer, curried_pointer
from smart_table.engine.context import StageFactory, TableContext
from smart_table.engine.execution import ExecutionStrategy, LocalExecution
from smart_table.engine.stages import default_sort_factory, filter_factory, regexp_search_factory

logger = get_logger(__name__)

Extension = Callable[[TableContext], Any]
Query = Callable[[TableState], Awaitable[Any]]


class SmartTable(Emitter):
    """Reactive table over an in-memory list of records.

    Every operation except :meth:`slice` sends the view back to the first
    page. ``exec`` and ``eval`` are delegated to an execution strategy,
    local by default; :meth:`replace_execution` is the only way to swap it.
    """

    def __init__(
        self,
        *,
        data: list[Any],
        table_state: TableState,
        sort_factory: StageFactory = default_sort_factory,
        filter_factory: StageFactory = filter_factory,
        search_factory: StageFactory = regexp_search_factory,
        settings: TableSettings | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or TableSettings()
        self.context = TableContext(
            sort_factory=sort_factory,
            filter_factory=filter_factory,
            search_factory=search_factory,
            table_state=table_state,
            data=data,
            table=self,
        )
        self.extensions: list[Any] = []
        self._filtered_count = len(data)
        self._matching_items: list[Any] = data
        self._sort_pointer = curried_pointer("sort")
        self._slice_pointer = curried_pointer("slice")
        self._filter_pointer = curried_pointer("filter")
        self._search_pointer = curried_pointer("search")
        self._execution: ExecutionStrategy = LocalExecution(
            self.context,
            processing_delay_ms=self.settings.processing_delay_ms,
            on_matching_items=self._record_matching_items,
        )
        # Summaries may come from outside (a remote query), not only from the local pipeline
        self.on(TableEvent.SUMMARY_CHANGED, self._track_summary)

    # === State operations ===

    def sort(self, criteria: SortState) -> asyncio.Task[None] | None:
        """Merge sort criteria, dispatch ``TOGGLE_SORT``, reset the page and execute."""
        return self._table_operation(self._sort_pointer, TableEvent.TOGGLE_SORT, criteria)

    def filter(self, criteria: Mapping[str, list[FilterClause]]) -> asyncio.Task[None] | None:
        """Merge filter clauses per path, dispatch ``FILTER_CHANGED``, reset the page and execute."""
        return self._table_operation(self._filter_pointer, TableEvent.FILTER_CHANGED, criteria)

    def search(self, criteria: SearchState) -> asyncio.Task[None] | None:
        """Merge search criteria, dispatch ``SEARCH_CHANGED``, reset the page and execute."""
        return self._table_operation(self._search_pointer, TableEvent.SEARCH_CHANGED, criteria)

    def slice(self, criteria: SliceState | Mapping[str, Any]) -> asyncio.Task[None] | None:
        """Merge slice criteria, dispatch ``CHANGE_PAGE`` and execute. The page is not reset."""
        self._update_table_state(self._slice_pointer, TableEvent.PAGE_CHANGED, criteria)
        return self.exec()

    def exec(self, *, processing_delay_ms: int | None = None) -> asyncio.Task[None] | None:
        """Start an execution with the active strategy.

        Returns:
            The task driving the execution, or None when it already ran inline
        """
        return self._execution.exec(processing_delay_ms=processing_delay_ms)

    async def eval(self, state: TableState | None = None) -> list[Any]:
        """Project ``state`` (default: the current one) without touching shared state or dispatching."""
        return await self._execution.eval(state)

    def _table_operation(
        self, ptr: CurriedPointer, event: TableEvent, criteria: Mapping[str, Any]
    ) -> asyncio.Task[None] | None:
        self._update_table_state(ptr, event, criteria)
        self._update_table_state(self._slice_pointer, TableEvent.PAGE_CHANGED, {"page": 1})
        # Through self.exec so a replaced strategy is honoured
        return self.exec()

    def _update_table_state(self, ptr: CurriedPointer, event: TableEvent, criteria: Mapping[str, Any]) -> None:
        ptr.set(self.context.table_state)(criteria)
        self.dispatch(event, dict(ptr.get(self.context.table_state)))

    # === Execution strategy ===

    def replace_execution(self, strategy: ExecutionStrategy) -> SmartTable:
        """Route ``exec`` and ``eval`` to ``strategy`` from now on."""
        logger.debug(
            "execution_replaced",
            previous=type(self._execution).__name__,
            strategy=type(strategy).__name__,
        )
        self._execution = strategy
        return self

    def with_remote_execution(self, query: Query) -> SmartTable:
        """Delegate ``exec`` and ``eval`` to an async ``query(table_state)`` function."""
        from smart_table.directives.remote import RemoteExecution

        return self.replace_execution(RemoteExecution(self.context, query))

    @property
    def execution(self) -> ExecutionStrategy:
        return self._execution

    def extend(self, extension: Extension) -> Any:
        """Apply one extension to this table's context.

        An extension returning an :class:`ExecutionStrategy` replaces the
        execution; any other non-None result is kept in :attr:`extensions`.
        """
        result = extension(self.context)
        if isinstance(result, ExecutionStrategy):
            self.replace_execution(result)
        elif result is not None:
            self.extensions.append(result)
        return result

    # === Read access ===

    def get_table_state(self) -> TableState:
        """Detached copy of the table state; mutating it does not affect the table."""
        return copy_table_state(self.context.table_state)

    def get_matching_items(self) -> list[Any]:
        """Records matching filter and search in the most recent local execution."""
        return list(self._matching_items)

    @property
    def filtered_count(self) -> int:
        """Match count from the latest ``SUMMARY_CHANGED``, whoever dispatched it."""
        return self._filtered_count

    @property
    def length(self) -> int:
        return len(self.context.data)

    def __len__(self) -> int:
        return len(self.context.data)

    def on_display_change(self, *listeners: Listener) -> SmartTable:
        return self.on(TableEvent.DISPLAY_CHANGED, *listeners)

    def _track_summary(self, summary: Summary | Mapping[str, Any]) -> None:
        # A summary without a count (some remote sources) leaves the last known one
        self._filtered_count = summary.get("filtered_count", self._filtered_count)

    def _record_matching_items(self, items: list[Any]) -> None:
        self._matching_items = items


def smart_table(
    *extensions: Extension,
    data: list[Any] | None = None,
    table_state: Mapping[str, Any] | None = None,
    sort_factory: StageFactory = default_sort_factory,
    filter_factory: StageFactory = filter_factory,
    search_factory: StageFactory = regexp_search_factory,
    settings: TableSettings | None = None,
) -> SmartTable:
    """Build a table and apply ``extensions`` to it in order.

    Args:
        extensions: Callables receiving the :class:`TableContext`; see
            :meth:`SmartTable.extend`
        data: Source records, used by reference (default: empty)
        table_state: Initial state, used by reference; missing sub-trees are
            filled in (default: :func:`default_table_state`)
        sort_factory: Builds the sort stage
        filter_factory: Builds the filter stage
        search_factory: Builds the search stage
        settings: Engine settings (default: ``TableSettings()``)

    Returns:
        The extended SmartTable
    """
    settings = settings or TableSettings()
    if table_state is None:
        state = default_table_state()
    else:
        state = table_state  # type: ignore[assignment]
        for key, default in default_table_state().items():
            state.setdefault(key, default)  # type: ignore[misc]
    if settings.default_page_size is not None and not state["slice"].get("size"):
        state["slice"]["size"] = settings.default_page_size

    table = SmartTable(
        data=data if data is not None else [],
        table_state=state,
        sort_factory=sort_factory,
        filter_factory=filter_factory,
        search_factory=search_factory,
        settings=settings,
    )
    for extension in extensions:
        table.extend(extension)
    return table


__all__ = ["Extension", "Query", "SmartTable", "smart_table"]
