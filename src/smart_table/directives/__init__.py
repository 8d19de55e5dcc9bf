"""Directives: small extensions adding intent-level operations and event facades.

Each directive holds a reference to its table and only uses the table's
public operations; none keeps a copy of the table state.
"""

from smart_table.directives.filter import FilterDirective
from smart_table.directives.manager import DirectiveManager
from smart_table.directives.pagination import PaginationDirective
from smart_table.directives.remote import QueryResult, RemoteExecution, remote
from smart_table.directives.search import SearchDirective
from smart_table.directives.sort import SortDirective
from smart_table.directives.summary import SummaryDirective, WorkingIndicatorDirective

__all__ = [
    "DirectiveManager",
    "FilterDirective",
    "PaginationDirective",
    "QueryResult",
    "RemoteExecution",
    "SearchDirective",
    "SortDirective",
    "SummaryDirective",
    "WorkingIndicatorDirective",
    "remote",
]
