"""Table state and event payload contracts.

Table state stays a plain ``dict`` because directives and remote queries
address it by dotted path and merge partial updates into it. The TypedDicts
below document the shape each sub-tree takes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class SortState(TypedDict, total=False):
    """The ``sort`` sub-tree."""

    pointer: str
    direction: str  # SortDirection value
    comparator: Callable[[Any, Any], int]


class FilterClause(TypedDict, total=False):
    """One clause of the ``filter`` sub-tree, tested against a single field."""

    value: Any
    operator: str  # FilterOperator value
    type: str  # FilterType value


class SearchState(TypedDict, total=False):
    """The ``search`` sub-tree."""

    value: str
    scope: list[str]
    flags: str
    escape: bool


class SliceState(TypedDict):
    """The ``slice`` sub-tree. ``size`` absent or ``None`` means a single page."""

    page: int
    size: NotRequired[int | None]


class TableState(TypedDict):
    """The single source of truth driving the pipeline."""

    sort: SortState
    filter: dict[str, list[FilterClause]]
    search: SearchState
    slice: SliceState


class Summary(TypedDict):
    """Payload of ``SUMMARY_CHANGED``."""

    page: int
    size: int | None
    filtered_count: int


class ExecState(TypedDict):
    """Payload of ``EXEC_CHANGED``."""

    working: bool


@dataclass(frozen=True, slots=True)
class DisplayItem:
    """A displayed record and its position in the source data.

    ``index`` refers to the original list, not to the filtered, sorted or
    sliced result.
    """

    index: int
    value: Any


def default_table_state() -> TableState:
    """Build the state a table starts from when none is supplied."""
    return {"sort": {}, "slice": {"page": 1}, "filter": {}, "search": {}}


def copy_table_state(state: TableState) -> TableState:
    """Copy a table state so the result shares no mutable container with it.

    sort, search and slice are shallow-copied; filter is copied down to each
    clause. Clause values themselves (e.g. an ``anyOf`` list) are shared.
    """
    filter_tree: dict[str, list[FilterClause]] = {}
    for path, clauses in state.get("filter", {}).items():
        if isinstance(clauses, list | tuple):
            filter_tree[path] = [FilterClause(**clause) for clause in clauses]
        else:
            filter_tree[path] = clauses
    return {
        "sort": SortState(**state.get("sort", {})),
        "search": SearchState(**state.get("search", {})),
        "slice": dict(state.get("slice", {"page": 1})),  # type: ignore[typeddict-item]
        "filter": filter_tree,
    }
