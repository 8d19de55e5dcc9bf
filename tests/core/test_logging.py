# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import io
import json
import logging
from collections.abc import Iterator
from typing import Any

import pytest

from smart_table.core.config import TableSettings
from smart_table.core.logging import ExecutionLog, configure_logging, get_logger
from smart_table.engine.table import smart_table


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        logger = get_logger("test")

        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_json_output_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logs are JSON on stderr; stdout stays free for command output."""
        configure_logging(json_output=True)

        get_logger("test").info("test message", key="value")

        captured = capsys.readouterr()
        assert captured.out == ""
        data = json.loads(captured.err.strip().split("\n")[-1])
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=False)

        get_logger("test").info("test message", key="value")

        err = capsys.readouterr().err
        assert "test message" in err
        assert not err.strip().startswith("{")

    def test_stdlib_loggers_share_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        logging.getLogger("test.stdlib.module").info("message from stdlib logger")

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "message from stdlib logger"
        assert "timestamp" in data

    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING")

        get_logger("test").info("hidden")
        get_logger("test").warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err
        assert logging.getLogger().level == logging.WARNING

    def test_stream_overrides_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)

        get_logger("test").info("to stream")

        assert capsys.readouterr().err == ""
        assert json.loads(stream.getvalue().strip())["event"] == "to stream"

    def test_get_logger_binds_context(self) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)

        get_logger("test", component="pager").info("bound")

        assert json.loads(stream.getvalue().strip())["component"] == "pager"


def _records(stream: io.StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestExecutionLog:
    def test_start_numbers_executions(self) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, level="DEBUG", stream=stream)
        log = ExecutionLog("test", "local")

        log.start(delay_ms=5)
        log.start(delay_ms=0)

        records = _records(stream)
        assert [r["event"] for r in records] == ["exec_started", "exec_started"]
        assert [r["exec_id"] for r in records] == [1, 2]
        assert {r["strategy"] for r in records} == {"local"}
        assert records[0]["delay_ms"] == 5

    def test_table_exec_records_carry_strategy_and_exec_id(self, records: list[dict[str, Any]]) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, level="DEBUG", stream=stream)
        table = smart_table(data=records, settings=TableSettings(processing_delay_ms=0))

        table.exec()
        table.filter({"n": [{"value": 1, "operator": "between"}]})

        lifecycle = [r for r in _records(stream) if r.get("strategy") == "local"]
        assert [(r["event"], r["exec_id"]) for r in lifecycle] == [
            ("exec_started", 1),
            ("exec_completed", 1),
            ("exec_started", 2),
            ("exec_failed", 2),
        ]
        assert lifecycle[1]["displayed"] == 5
        assert lifecycle[3]["error_type"] == "UnknownOperatorError"
