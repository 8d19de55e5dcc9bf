"""Execution strategies: how a table turns its state into display events.

The table delegates ``exec`` and ``eval`` to exactly one strategy.
:class:`LocalExecution` runs the pipeline in process; the remote extension
replaces it with a strategy that awaits a query function. Both dispatch the
same event sequence for every ``exec`` call::

    EXEC_CHANGED(working=True)
    SUMMARY_CHANGED, DISPLAY_CHANGED    (success)
    EXEC_ERROR                          (failure)
    EXEC_CHANGED(working=False)         (always, exactly once)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol, runtime_checkable

import structlog

from smart_table.contracts.enums import TableEvent
from smart_table.contracts.state import DisplayItem, TableState
from smart_table.core.functional import compose, tap
from smart_table.core.logging import ExecutionLog
from smart_table.core.pointer import pointer
from smart_table.engine.context import TableContext
from smart_table.engine.stages.slice import slice_factory

_SORT = pointer("sort")
_FILTER = pointer("filter")
_SEARCH = pointer("search")
_SLICE = pointer("slice")


@runtime_checkable
class ExecutionStrategy(Protocol):
    """Computation behind a table's ``exec`` and ``eval``."""

    def exec(self, *, processing_delay_ms: int | None = None) -> asyncio.Task[None] | None:
        """Start an execution and return the task driving it, if one was scheduled."""
        ...

    async def eval(self, state: TableState | None = None) -> list[Any]:
        """Project ``state`` (default: the current one) without events or mutation."""
        ...


def to_display_items(data: list[Any], displayed: Iterable[Any]) -> list[DisplayItem]:
    """Pair each displayed record with its first position in the source data.

    Records are matched by identity first, then by equality, so a stage that
    returns copies still resolves. A record found in neither way gets ``-1``.
    """
    positions: dict[int, int] = {}
    for index, item in enumerate(data):
        positions.setdefault(id(item), index)

    def position(item: Any) -> int:
        if id(item) in positions:
            return positions[id(item)]
        try:
            return data.index(item)
        except ValueError:
            return -1

    return [DisplayItem(index=position(item), value=item) for item in displayed]


def schedule_exec(
    loop: asyncio.AbstractEventLoop,
    run: Callable[[], Awaitable[None]],
    finish: Callable[[], None],
    tasks: set[asyncio.Task[None]],
) -> asyncio.Task[None]:
    """Run ``run()`` in a task kept in ``tasks``, then call ``finish()`` exactly once.

    ``finish`` normally runs inside the task, so it has happened by the time
    an ``await`` on the task returns. A task cancelled before its first step
    never enters its coroutine; ``finish`` then runs from the done callback.
    """
    entered = False

    async def step() -> None:
        nonlocal entered
        entered = True
        try:
            await run()
        finally:
            finish()

    def done(task: asyncio.Task[None]) -> None:
        tasks.discard(task)
        if not entered:
            finish()

    task = loop.create_task(step())
    tasks.add(task)
    task.add_done_callback(done)
    return task


class LocalExecution:
    """Run filter -> search -> sort -> slice over the table's own data.

    The summary is captured after search and before sort, so
    ``filtered_count`` ignores ordering and pagination.

    Scheduled tasks are kept referenced until they finish; the event loop
    only holds weak references to tasks.
    """

    def __init__(
        self,
        context: TableContext,
        *,
        processing_delay_ms: int = 20,
        on_matching_items: Callable[[list[Any]], None] | None = None,
    ) -> None:
        self._context = context
        self._processing_delay_ms = processing_delay_ms
        self._on_matching_items = on_matching_items
        self._tasks: set[asyncio.Task[None]] = set()
        self._log = ExecutionLog(__name__, "local")

    def exec(self, *, processing_delay_ms: int | None = None) -> asyncio.Task[None] | None:
        """Dispatch ``EXEC_CHANGED(True)`` now and run the pipeline after the delay.

        Without a running event loop the pipeline runs immediately and
        ``None`` is returned. ``EXEC_CHANGED(False)`` follows exactly once,
        even when the returned task is cancelled during the delay.
        """
        delay_ms = self._processing_delay_ms if processing_delay_ms is None else processing_delay_ms
        log = self._log.start(delay_ms=delay_ms)
        self._context.table.dispatch(TableEvent.EXEC_CHANGED, {"working": True})
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                self._run(log)
            finally:
                self._finish()
            return None
        return schedule_exec(loop, lambda: self._run_after(delay_ms / 1000, log), self._finish, self._tasks)

    def _finish(self) -> None:
        self._context.table.dispatch(TableEvent.EXEC_CHANGED, {"working": False})

    async def _run_after(self, delay: float, log: structlog.stdlib.BoundLogger) -> None:
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            log.debug("exec_cancelled")
            raise
        self._run(log)

    def _run(self, log: structlog.stdlib.BoundLogger) -> None:
        table = self._context.table
        state = self._context.table_state
        data = self._context.data
        try:
            execute = compose(
                self._context.filter_factory(_FILTER.get(state)),
                self._context.search_factory(_SEARCH.get(state)),
                tap(self._dispatch_summary),
                self._context.sort_factory(_SORT.get(state)),
                slice_factory(_SLICE.get(state)),
            )
            displayed = execute(data)
            table.dispatch(TableEvent.DISPLAY_CHANGED, to_display_items(data, displayed))
            log.debug("exec_completed", displayed=len(displayed))
        except Exception as e:
            log.warning("exec_failed", error=str(e), error_type=type(e).__name__)
            table.dispatch(TableEvent.EXEC_ERROR, e)

    def _dispatch_summary(self, filtered: list[Any]) -> None:
        if self._on_matching_items is not None:
            self._on_matching_items(filtered)
        slice_state = self._context.table_state["slice"]
        self._context.table.dispatch(
            TableEvent.SUMMARY_CHANGED,
            {
                "page": slice_state.get("page", 1),
                "size": slice_state.get("size"),
                "filtered_count": len(filtered),
            },
        )

    async def eval(self, state: TableState | None = None) -> list[DisplayItem]:
        """Project ``state`` into display items. Errors propagate to the caller."""
        if state is None:
            state = self._context.table_state
        data = self._context.data
        execute = compose(
            self._context.filter_factory(_FILTER.get(state)),
            self._context.search_factory(_SEARCH.get(state)),
            self._context.sort_factory(_SORT.get(state)),
            slice_factory(_SLICE.get(state)),
        )
        return to_display_items(data, execute(data))
