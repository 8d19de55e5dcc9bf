"""Structured logging for smart-table.

structlog records are routed through stdlib logging, so an application
embedding a table sees them through its own handlers next to records from
plain ``logging.getLogger(__name__)`` loggers.

Execution strategies log through an :class:`ExecutionLog`: every record of
one ``exec`` call carries the strategy name and a per-strategy ``exec_id``,
so the started / completed lines of overlapping executions can be paired up.
"""

from __future__ import annotations

import itertools
import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Install one stderr handler on the root logger.

    Args:
        json_output: Render JSON lines instead of console text.
        level: Root level name (DEBUG, INFO, WARNING, ERROR).
        stream: Destination, stderr when omitted. The CLI prints its
            result on stdout, which must stay free of log lines.
    """
    renderer: list[Any]
    if json_output:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tables created before reconfiguration must pick up the new pipeline
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[ProcessorFormatter.remove_processors_meta, *renderer],
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level.upper()))


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Logger for module ``name`` with ``context`` bound to every record."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, **context)
    return logger


class ExecutionLog:
    """Numbers the ``exec`` calls of one strategy instance.

    ``start()`` logs ``exec_started`` and returns the logger the rest of
    that execution uses, bound to ``strategy`` and ``exec_id``.
    """

    def __init__(self, name: str, strategy: str) -> None:
        self._logger = get_logger(name, strategy=strategy)
        self._ids = itertools.count(1)

    def start(self, **context: Any) -> structlog.stdlib.BoundLogger:
        log = self._logger.bind(exec_id=next(self._ids))
        log.debug("exec_started", **context)
        return log
