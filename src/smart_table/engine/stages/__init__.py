"""Pipeline stage factories.

Each factory turns a criteria sub-tree into a pure ``list -> list`` stage.
The engine composes them as filter -> search -> sort -> slice.
"""

from smart_table.engine.stages.filter import filter_factory, normalize_clauses
from smart_table.engine.stages.search import regexp_search_factory
from smart_table.engine.stages.slice import slice_factory
from smart_table.engine.stages.sort import default_comparator, default_sort_factory

__all__ = [
    "default_comparator",
    "default_sort_factory",
    "filter_factory",
    "normalize_clauses",
    "regexp_search_factory",
    "slice_factory",
]
