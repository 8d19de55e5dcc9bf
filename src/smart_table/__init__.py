"""
smart-table: a reactive, in-memory table engine.

Sorts, filters, searches and paginates a list of records from a declarative
table state, and broadcasts change events to the directives observing it.
"""

__version__ = "0.1.0"
