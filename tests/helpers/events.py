"""Event recording helper for table tests."""

from typing import Any

from smart_table.contracts.enums import TableEvent
from smart_table.core.events import Emitter


class EventRecorder:
    """Records table events as (event, payload) pairs in dispatch order."""

    def __init__(self, emitter: Emitter, events: list[TableEvent] | None = None) -> None:
        self.events: list[tuple[TableEvent, Any]] = []
        for event in events or list(TableEvent):
            emitter.on(event, self._listener(event))

    def _listener(self, event: TableEvent) -> Any:
        def record(*args: Any) -> None:
            self.events.append((event, args[0] if args else None))

        return record

    @property
    def kinds(self) -> list[TableEvent]:
        return [event for event, _ in self.events]

    def payloads(self, event: TableEvent) -> list[Any]:
        return [payload for kind, payload in self.events if kind == event]

    def clear(self) -> None:
        self.events.clear()
