"""Tests for the sort directive."""

import asyncio
from typing import Any

import pytest

from smart_table.contracts.enums import TableEvent
from smart_table.core.config import TableSettings
from smart_table.directives.sort import SortDirective
from smart_table.engine.table import SmartTable, smart_table
from tests.helpers.events import EventRecorder


def _directions(recorder: EventRecorder) -> list[Any]:
    return [sort.get("direction") for sort in recorder.payloads(TableEvent.TOGGLE_SORT)]


class TestSortDirective:
    def test_alternates_ascending_and_descending(self, table: SmartTable) -> None:
        directive = SortDirective(table, "n")
        recorder = EventRecorder(table, [TableEvent.TOGGLE_SORT])

        directive.toggle()
        directive.toggle()
        directive.toggle()

        assert _directions(recorder) == ["asc", "desc", "asc"]
        assert directive.state() == {"pointer": "n", "direction": "asc"}

    def test_cycle_includes_unsorted(self, table: SmartTable) -> None:
        directive = SortDirective(table, "n", cycle=True)
        recorder = EventRecorder(table, [TableEvent.TOGGLE_SORT])

        for _ in range(4):
            directive.toggle()

        assert _directions(recorder) == ["asc", "desc", "none", "asc"]

    def test_another_pointer_resets_the_cycle(self, people: list[dict[str, Any]], fast_settings: TableSettings) -> None:
        table = smart_table(data=people, settings=fast_settings)
        by_name = SortDirective(table, "name")
        by_age = SortDirective(table, "age")
        recorder = EventRecorder(table, [TableEvent.TOGGLE_SORT])

        by_name.toggle()
        by_name.toggle()
        by_age.toggle()
        by_name.toggle()

        assert recorder.payloads(TableEvent.TOGGLE_SORT) == [
            {"pointer": "name", "direction": "asc"},
            {"pointer": "name", "direction": "desc"},
            {"pointer": "age", "direction": "asc"},
            {"pointer": "name", "direction": "asc"},
        ]

    def test_starts_from_current_table_sort(self, records: list[dict[str, Any]]) -> None:
        table = smart_table(data=records, table_state={"sort": {"pointer": "n", "direction": "asc"}})
        directive = SortDirective(table, "n")

        directive.toggle()

        assert directive.state()["direction"] == "desc"

    def test_cycle_starts_from_current_descending_sort(self, records: list[dict[str, Any]]) -> None:
        table = smart_table(data=records, table_state={"sort": {"pointer": "n", "direction": "desc"}})
        directive = SortDirective(table, "n", cycle=True)

        directive.toggle()

        assert directive.state()["direction"] == "none"

    def test_sort_of_other_pointer_does_not_set_start(self, records: list[dict[str, Any]]) -> None:
        table = smart_table(data=records, table_state={"sort": {"pointer": "m", "direction": "asc"}})
        directive = SortDirective(table, "n")

        directive.toggle()

        assert directive.state() == {"pointer": "n", "direction": "asc"}

    def test_facade_reports_sort_changes(self, table: SmartTable) -> None:
        directive = SortDirective(table, "n")
        received: list[Any] = []
        directive.on_sort_toggle(received.append)

        table.sort({"pointer": "n", "direction": "desc"})

        assert received == [{"pointer": "n", "direction": "desc"}]

    def test_off_stops_tracking_other_pointers(self, table: SmartTable) -> None:
        directive = SortDirective(table, "n")
        directive.toggle()

        directive.off()
        table.sort({"pointer": "m"})
        directive.toggle()

        assert directive.state()["direction"] == "desc"


class TestSortDebounce:
    @pytest.mark.asyncio
    async def test_rapid_toggles_reach_table_once(self, table: SmartTable) -> None:
        directive = SortDirective(table, "n", debounce_ms=10)
        recorder = EventRecorder(table, [TableEvent.TOGGLE_SORT, TableEvent.DISPLAY_CHANGED])

        directive.toggle()
        directive.toggle()
        assert recorder.events == []

        await asyncio.sleep(0.05)

        assert recorder.payloads(TableEvent.TOGGLE_SORT) == [{"pointer": "n", "direction": "desc"}]
        displayed = recorder.payloads(TableEvent.DISPLAY_CHANGED)
        assert [item.value["n"] for item in displayed[-1]] == [5, 4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_toggle(self, table: SmartTable) -> None:
        directive = SortDirective(table, "n", debounce_ms=10)
        recorder = EventRecorder(table, [TableEvent.TOGGLE_SORT])

        directive.toggle()
        directive.cancel()
        await asyncio.sleep(0.05)

        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_debounce_defaults_to_settings(self, records: list[dict[str, Any]]) -> None:
        table = smart_table(data=records, settings=TableSettings(processing_delay_ms=0, sort_debounce_ms=10))
        directive = SortDirective(table, "n")
        recorder = EventRecorder(table, [TableEvent.TOGGLE_SORT])

        directive.toggle()
        assert recorder.events == []
        await asyncio.sleep(0.05)

        assert len(recorder.events) == 1
