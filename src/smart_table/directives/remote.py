"""Remote-computation extension.

Replaces a table's local pipeline with an injected async query function,
for data that lives behind an API. Observers cannot tell the difference:
every ``exec`` dispatches the same event sequence as the local strategy,
so sort, filter and pagination directives work unchanged.

Usage:
    async def query(table_state):
        response = await client.post("/rows", json=table_state)
        return response.json()  # {"data": [...], "summary": {...}}

    table = smart_table(remote(query), table_state={"slice": {"page": 1, "size": 20}})
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from smart_table.contracts.enums import TableEvent
from smart_table.contracts.state import TableState
from smart_table.core.logging import ExecutionLog
from smart_table.engine.context import TableContext
from smart_table.engine.execution import schedule_exec

Query = Callable[[TableState], Awaitable["QueryResult | Mapping[str, Any]"]]


class QueryResult(BaseModel):
    """What a remote query resolves to.

    ``data`` is dispatched as-is in ``DISPLAY_CHANGED``; ``summary`` as-is in
    ``SUMMARY_CHANGED``, so a source may report ``filtered_count`` the table
    could not compute locally.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: list[Any] = Field(default_factory=list)
    summary: dict[str, Any] = Field(default_factory=dict)


class RemoteExecution:
    """Execution strategy delegating to ``query(table_state)``.

    The state handed to the query is a snapshot taken when ``exec`` is
    called; later mutations do not leak into a request already in flight.
    """

    def __init__(self, context: TableContext, query: Query) -> None:
        self._context = context
        self._query = query
        self._tasks: set[asyncio.Task[None]] = set()
        self._log = ExecutionLog(__name__, "remote")

    def exec(self, *, processing_delay_ms: int | None = None) -> asyncio.Task[None] | None:
        """Dispatch ``EXEC_CHANGED(True)`` and start the query.

        ``processing_delay_ms`` is accepted for interface parity and ignored:
        the query's own latency is the scheduling boundary. Without a running
        event loop the query is driven to completion before returning.
        """
        table = self._context.table
        log = self._log.start()
        table.dispatch(TableEvent.EXEC_CHANGED, {"working": True})
        state = table.get_table_state()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                asyncio.run(self._run(state, log))
            finally:
                self._finish()
            return None
        return schedule_exec(loop, lambda: self._run(state, log), self._finish, self._tasks)

    def _finish(self) -> None:
        self._context.table.dispatch(TableEvent.EXEC_CHANGED, {"working": False})

    async def _run(self, state: TableState, log: structlog.stdlib.BoundLogger) -> None:
        table = self._context.table
        try:
            result = QueryResult.model_validate(await self._query(state))
            table.dispatch(TableEvent.SUMMARY_CHANGED, result.summary)
            table.dispatch(TableEvent.DISPLAY_CHANGED, result.data)
            log.debug("exec_completed", displayed=len(result.data))
        except asyncio.CancelledError:
            log.debug("exec_cancelled")
            raise
        except Exception as e:
            log.warning("remote_query_failed", error=str(e), error_type=type(e).__name__)
            table.dispatch(TableEvent.EXEC_ERROR, e)

    async def eval(self, state: TableState | None = None) -> list[Any]:
        """Return only the ``data`` the query resolves for ``state``. Errors propagate."""
        if state is None:
            state = self._context.table.get_table_state()
        result = QueryResult.model_validate(await self._query(state))
        return result.data


def remote(query: Query) -> Callable[[TableContext], RemoteExecution]:
    """Extension factory: ``smart_table(remote(query), ...)`` swaps in :class:`RemoteExecution`."""

    def extension(context: TableContext) -> RemoteExecution:
        return RemoteExecution(context, query)

    return extension
