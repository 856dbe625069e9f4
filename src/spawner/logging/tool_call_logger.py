"""
JSONL audit log of MCP tool calls.

One JSON object per line, each carrying ``timestamp``, ``event_number``
and ``event_type``:

- ``session_start``: server name, version and transport
- ``tool_call``: tool name, arguments, client session id
- ``tool_result``: success flag, duration, error text on failure
- ``error``: protocol-level failures (parse errors, handler crashes)
- ``session_end``: total event count
"""

import datetime as _datetime
import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

_logger = _logging.getLogger(__name__)

DEFAULT_LOG_DIR = _pathlib.Path("/tmp/spawner-logs")


def resolve_log_path(
    stamp: str,
    *,
    log_dir: _pathlib.Path | str | None = None,
    log_file: _pathlib.Path | str | None = None,
    private: bool = True,
) -> _pathlib.Path:
    """
    Pick the JSONL file and create its directory.

    An explicit ``log_file`` is used as is. Otherwise the file is
    ``spawner_<stamp>.jsonl`` in ``log_dir``, which is made owner-only
    (0o700) when ``private`` is set since arguments may hold user code.
    """
    if log_file:
        path = _pathlib.Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    directory = _pathlib.Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    if private:
        _os.chmod(directory, 0o700)
    return directory / f"spawner_{stamp}.jsonl"


class ToolCallLogger:
    """
    Appends tool-call events to a JSONL file.

    Usage:
        with ToolCallLogger(log_dir="/tmp", transport="http") as calls:
            calls.log_tool_call("consult_skill", {"id": "backend"}, session_id="abc")
            calls.log_tool_result("consult_skill", success=True, duration_ms=3.1)
    """

    def __init__(
        self,
        *,
        log_dir: _pathlib.Path | str | None = None,
        log_file: _pathlib.Path | str | None = None,
        private_mode: bool = True,
        server_name: str = "spawner-skills",
        server_version: str = "unknown",
        transport: str = "unknown",
        enabled: bool = True,
    ) -> None:
        self._stamp = _datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        self._count = 0
        self._path: _pathlib.Path | None = None
        self._stream: _typing.TextIO | None = None

        if not enabled:
            return

        self._path = resolve_log_path(
            self._stamp, log_dir=log_dir, log_file=log_file, private=private_mode
        )
        # Closed in close()
        self._stream = open(self._path, "a", encoding="utf-8")  # noqa: SIM115
        self._emit(
            "session_start",
            session_id=self._stamp,
            server=server_name,
            version=server_version,
            transport=transport,
        )

    @property
    def enabled(self) -> bool:
        return self._stream is not None

    @property
    def file_path(self) -> _pathlib.Path | None:
        return self._path

    @property
    def event_count(self) -> int:
        return self._count

    def _emit(self, event_type: str, **fields: _typing.Any) -> None:
        if self._stream is None:
            return
        self._count += 1
        record = {
            "timestamp": _datetime.datetime.now().isoformat(),
            "event_number": self._count,
            "event_type": event_type,
            **fields,
        }
        try:
            self._stream.write(_json.dumps(record, default=str) + "\n")
            self._stream.flush()
        except OSError as e:
            # The audit log is best effort; tool calls carry on without it
            _logger.warning("Tool-call log write failed: %s", e)

    def log_tool_call(
        self,
        tool_name: str,
        arguments: dict[str, _typing.Any],
        *,
        session_id: str | None = None,
    ) -> None:
        self._emit(
            "tool_call",
            tool_name=tool_name,
            arguments=arguments,
            client_session=session_id or "unknown",
        )

    def log_tool_result(
        self,
        tool_name: str,
        *,
        success: bool,
        duration_ms: float,
        error: str | None = None,
        session_id: str | None = None,
    ) -> None:
        """Record how a call ended; ``error`` is only written on failure."""
        extra = {"error": error} if error else {}
        self._emit(
            "tool_result",
            tool_name=tool_name,
            success=success,
            duration_ms=round(duration_ms, 3),
            client_session=session_id or "unknown",
            **extra,
        )

    def log_error(self, message: str, *, context: str | None = None) -> None:
        extra = {"context": context} if context else {}
        self._emit("error", message=message, **extra)

    def close(self) -> None:
        """Write session_end and close the file. Safe to call twice."""
        if self._stream is None:
            return
        self._emit("session_end", total_events=self._count + 1)
        self._stream.close()
        self._stream = None

    def __enter__(self) -> "ToolCallLogger":
        return self

    def __exit__(self, *args: _typing.Any) -> None:
        self.close()
