"""
Tool primitives shared by every MCP tool.

A tool advertises a name, a description and a JSON input schema, and
returns a :class:`ToolResult` from ``execute``. Failures are results with
``success=False``; tools never raise to the dispatcher.
"""

from __future__ import annotations

import abc as _abc
import dataclasses as _dataclasses
import datetime as _datetime
import json as _json
import typing as _typing

# Schema "type" → accepted Python types
_JSON_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list,),
}


def json_output(value: _typing.Any) -> str:
    """Tool payloads are indented JSON text."""
    return _json.dumps(value, indent=2, ensure_ascii=False, default=str)


@_dataclasses.dataclass
class ToolResult:
    success: bool
    output: str
    error: str | None = None

    def to_mcp_format(self) -> dict[str, _typing.Any]:
        """``tools/call`` result: one text block, ``isError`` on failure."""
        if self.success:
            return {"content": [{"type": "text", "text": self.output}]}
        return {
            "content": [{"type": "text", "text": self.error or self.output}],
            "isError": True,
        }


@_dataclasses.dataclass
class ToolMetrics:
    """Running totals for one tool since the server started."""

    tool_name: str
    call_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    total_duration_ms: float = 0.0
    last_used: str | None = None

    def record_call(self, success: bool, duration_ms: float, timestamp: str | None = None) -> None:
        self.call_count += 1
        if success:
            self.success_count += 1
        else:
            self.failure_count += 1
        self.total_duration_ms += duration_ms
        self.last_used = timestamp or _datetime.datetime.now(_datetime.UTC).isoformat()

    def to_dict(self) -> dict[str, _typing.Any]:
        calls = self.call_count
        data = _dataclasses.asdict(self)
        data["average_duration_ms"] = self.total_duration_ms / calls if calls else 0.0
        data["success_rate"] = self.success_count / calls * 100.0 if calls else 0.0
        return data


class MetricsCollector:
    """Per-tool :class:`ToolMetrics`, served by the ``spawner://metrics`` resource."""

    def __init__(self) -> None:
        self._by_tool: dict[str, ToolMetrics] = {}

    def record(
        self,
        tool_name: str,
        success: bool,
        duration_ms: float,
        timestamp: str | None = None,
    ) -> None:
        metrics = self._by_tool.setdefault(tool_name, ToolMetrics(tool_name))
        metrics.record_call(success, duration_ms, timestamp)

    def get(self, tool_name: str) -> ToolMetrics | None:
        return self._by_tool.get(tool_name)

    def to_dict(self) -> dict[str, dict[str, _typing.Any]]:
        return {name: metrics.to_dict() for name, metrics in self._by_tool.items()}

    def summary(self) -> dict[str, _typing.Any]:
        """Totals across every tool."""
        calls = sum(m.call_count for m in self._by_tool.values())
        successes = sum(m.success_count for m in self._by_tool.values())
        return {
            "total_calls": calls,
            "total_success": successes,
            "total_failures": calls - successes,
            "success_rate": successes / calls * 100.0 if calls else 0.0,
            "total_duration_ms": sum(m.total_duration_ms for m in self._by_tool.values()),
            "tools_used": len(self._by_tool),
        }


class Tool(_abc.ABC):
    """
    An MCP tool.

    Subclasses provide ``name``, ``description``, ``input_schema`` and
    ``execute``. The dispatcher calls :meth:`check_input` before
    ``execute``, so required keys are present and typed when it runs.
    """

    @property
    @_abc.abstractmethod
    def name(self) -> str: ...

    @property
    @_abc.abstractmethod
    def description(self) -> str: ...

    @property
    @_abc.abstractmethod
    def input_schema(self) -> dict[str, _typing.Any]:
        """JSON schema advertised in tools/list."""

    @_abc.abstractmethod
    async def execute(self, input: dict[str, _typing.Any]) -> ToolResult: ...

    def to_mcp_format(self) -> dict[str, _typing.Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    def check_input(self, input: _typing.Any) -> list[str]:
        """
        Check required keys, property types and enums.

        Only the subset of JSON schema the tools use is understood.

        Returns:
            Problems found, empty when the input is acceptable.
        """
        if not isinstance(input, dict):
            return ["arguments must be an object"]

        schema = self.input_schema
        problems = [
            f"missing required argument '{key}'"
            for key in schema.get("required", [])
            if input.get(key) is None
        ]
        for key, prop in schema.get("properties", {}).items():
            value = input.get(key)
            if value is None:
                continue
            expected = _JSON_TYPES.get(prop.get("type", ""))
            if expected and not isinstance(value, expected):
                problems.append(f"argument '{key}' must be of type {prop['type']}")
            elif "enum" in prop and value not in prop["enum"]:
                allowed = ", ".join(str(v) for v in prop["enum"])
                problems.append(f"argument '{key}' must be one of: {allowed}")
        return problems

    def __repr__(self) -> str:
        return f"<Tool {self.name}>"

    def _require_input(
        self,
        input: dict[str, _typing.Any],
        key: str,
        *,
        label: str | None = None,
    ) -> str | ToolResult:
        """The non-empty string under ``key``, or an error result naming it."""
        value = input.get(key)
        if not value:
            return ToolResult(success=False, output="", error=f"No {label or key} provided")
        return value
