"""Tests for ToolCallLogger and configure_logging."""

import io as _io
import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest
import rich.logging as _rich_logging

import spawner.logging as spawner_logging


def _events(path: _pathlib.Path) -> list[dict[str, _typing.Any]]:
    return [_json.loads(line) for line in path.read_text().splitlines()]


class TestToolCallLogger:
    """Tests for the JSONL tool-call log."""

    def test_session_lifecycle(self, tmp_path: _pathlib.Path) -> None:
        log_file = tmp_path / "calls.jsonl"
        with spawner_logging.ToolCallLogger(
            log_file=log_file, server_version="0.1.0", transport="stdio"
        ) as logger:
            logger.log_tool_call("consult_skill", {"id": "backend"}, session_id="abc")
            logger.log_tool_result("consult_skill", success=True, duration_ms=1.23456)

        events = _events(log_file)
        assert [e["event_type"] for e in events] == [
            "session_start",
            "tool_call",
            "tool_result",
            "session_end",
        ]
        assert [e["event_number"] for e in events] == [1, 2, 3, 4]
        assert events[0]["transport"] == "stdio"
        assert events[0]["version"] == "0.1.0"
        assert events[1]["arguments"] == {"id": "backend"}
        assert events[1]["client_session"] == "abc"
        assert events[2]["duration_ms"] == 1.235
        assert events[2]["client_session"] == "unknown"
        assert events[3]["total_events"] == 4

    def test_failure_and_error_events(self, tmp_path: _pathlib.Path) -> None:
        log_file = tmp_path / "calls.jsonl"
        logger = spawner_logging.ToolCallLogger(log_file=log_file)
        logger.log_tool_result("validate_code", success=False, duration_ms=2, error="boom")
        logger.log_error("Parse error", context="stdio")
        logger.close()

        events = _events(log_file)
        assert events[1]["error"] == "boom"
        assert events[2]["event_type"] == "error"
        assert (events[2]["message"], events[2]["context"]) == ("Parse error", "stdio")

    def test_log_dir_gets_named_file(self, tmp_path: _pathlib.Path) -> None:
        logger = spawner_logging.ToolCallLogger(log_dir=tmp_path / "logs")
        try:
            assert logger.file_path is not None
            assert logger.file_path.parent == tmp_path / "logs"
            assert logger.file_path.name.startswith("spawner_")
            assert logger.file_path.suffix == ".jsonl"
            assert (tmp_path / "logs").stat().st_mode & 0o777 == 0o700
        finally:
            logger.close()

    def test_disabled_writes_nothing(self, tmp_path: _pathlib.Path) -> None:
        logger = spawner_logging.ToolCallLogger(log_dir=tmp_path / "logs", enabled=False)
        logger.log_tool_call("x", {})
        logger.close()

        assert not logger.enabled
        assert logger.file_path is None
        assert logger.event_count == 0
        assert not (tmp_path / "logs").exists()

    def test_close_is_idempotent(self, tmp_path: _pathlib.Path) -> None:
        log_file = tmp_path / "calls.jsonl"
        logger = spawner_logging.ToolCallLogger(log_file=log_file)
        logger.close()
        logger.close()
        logger.log_tool_call("late", {})
        assert len(_events(log_file)) == 2


class TestConfigureLogging:
    """Tests for configure_logging."""

    @_pytest.fixture(autouse=True)
    def restore_root(self) -> _typing.Iterator[None]:
        root = _logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_plain_handler(self) -> None:
        stream = _io.StringIO()
        spawner_logging.configure_logging("warning", rich=False, stream=stream)

        _logging.getLogger("spawner.test").info("hidden")
        _logging.getLogger("spawner.test").warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "WARNING  spawner.test: shown" in output

    def test_rich_handler(self) -> None:
        handler = spawner_logging.configure_logging("DEBUG", stream=_io.StringIO())
        assert isinstance(handler, _rich_logging.RichHandler)
        assert _logging.getLogger().level == _logging.DEBUG

    def test_reconfigure_replaces_handler(self) -> None:
        first = spawner_logging.configure_logging(rich=False, stream=_io.StringIO())
        second = spawner_logging.configure_logging(rich=False, stream=_io.StringIO())

        handlers = _logging.getLogger().handlers
        assert second in handlers
        assert first not in handlers
