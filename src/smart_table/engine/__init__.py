"""Table engine: state ownership, execution strategies and the pipeline."""

from smart_table.engine.context import TableContext
from smart_table.engine.execution import ExecutionStrategy, LocalExecution, to_display_items
from smart_table.engine.table import SmartTable, smart_table

__all__ = [
    "ExecutionStrategy",
    "LocalExecution",
    "SmartTable",
    "TableContext",
    "smart_table",
    "to_display_items",
]
