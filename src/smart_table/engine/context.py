"""The shared context handed to execution strategies and extensions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from smart_table.contracts.state import TableState

if TYPE_CHECKING:
    from smart_table.engine.table import SmartTable

StageFactory = Callable[[Mapping[str, Any] | None], Callable[[list[Any]], list[Any]]]


@dataclass(frozen=True)
class TableContext:
    """Everything one table owns, passed by reference to its collaborators.

    ``table_state`` and ``data`` are the engine's own objects, not copies.
    Only the engine mutates them; extensions read them or go through the
    table's public operations.
    """

    sort_factory: StageFactory
    filter_factory: StageFactory
    search_factory: StageFactory
    table_state: TableState
    data: list[Any]
    table: SmartTable
