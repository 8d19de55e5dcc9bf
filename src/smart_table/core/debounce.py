"""Debounced triggers for directive operations.

A :class:`Debouncer` owns at most one scheduled call. Triggering again
within the quiet period cancels the pending call and schedules a new one.
Only the *pending* trigger is cancelled: an execution the table already
started keeps running.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Delay calls to ``fn`` until ``delay_ms`` passes without a new trigger.

    Without a running event loop there is nothing to schedule against, so
    the call happens immediately.

    Example:
        commit = Debouncer(table.sort, delay_ms=150)
        commit({"pointer": "name", "direction": "asc"})
        commit({"pointer": "name", "direction": "desc"})  # first call dropped
    """

    def __init__(self, fn: Callable[..., Any], delay_ms: int = 0) -> None:
        self._fn = fn
        self._delay = delay_ms / 1000
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """Whether a call is scheduled and has neither fired nor been cancelled."""
        return self._handle is not None

    def __call__(self, *args: Any) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._fn(*args)
            return
        self._handle = loop.call_later(self._delay, self._fire, args)

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._handle = None
        self._fn(*args)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
