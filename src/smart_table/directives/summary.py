"""Summary and working-indicator directives: event facades with no state of their own."""

from smart_table.contracts.enums import TableEvent
from smart_table.core.events import proxy_listener

SummaryListener = proxy_listener({TableEvent.SUMMARY_CHANGED: "on_summary_change"})
ExecutionListener = proxy_listener({TableEvent.EXEC_CHANGED: "on_execution_change"})


class SummaryDirective(SummaryListener):  # type: ignore[misc,valid-type]
    name = "summary"


class WorkingIndicatorDirective(ExecutionListener):  # type: ignore[misc,valid-type]
    """Exposes ``on_execution_change`` for loading indicators."""

    name = "working_indicator"
