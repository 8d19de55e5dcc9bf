"""Shared contracts: event kinds, state shapes and errors."""

from smart_table.contracts.enums import FilterOperator, FilterType, SortDirection, TableEvent
from smart_table.contracts.errors import (
    DuplicateDirectiveError,
    InvalidSearchFlagsError,
    SmartTableError,
    UnknownDirectiveError,
    UnknownOperatorError,
)
from smart_table.contracts.state import (
    DisplayItem,
    ExecState,
    FilterClause,
    SearchState,
    SliceState,
    SortState,
    Summary,
    TableState,
    copy_table_state,
    default_table_state,
)

__all__ = [
    "DisplayItem",
    "DuplicateDirectiveError",
    "ExecState",
    "FilterClause",
    "FilterOperator",
    "FilterType",
    "InvalidSearchFlagsError",
    "SearchState",
    "SliceState",
    "SmartTableError",
    "SortDirection",
    "SortState",
    "Summary",
    "TableEvent",
    "TableState",
    "UnknownDirectiveError",
    "UnknownOperatorError",
    "copy_table_state",
    "default_table_state",
]
