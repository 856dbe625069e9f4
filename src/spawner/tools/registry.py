"""
The set of tools a server exposes.

Lookup is by exact name. tools/list reports tools in the order they were
registered. Every call goes through :meth:`ToolRegistry.call`, which times it,
feeds the metrics collector and the optional JSONL call log, and turns an
unexpected exception into an error result.
"""

from __future__ import annotations

import logging as _logging
import time as _time
import typing as _typing

import spawner.tools.base as base
import spawner.tools.code as code
import spawner.tools.guidance as guidance
import spawner.tools.memory as memory
import spawner.tools.skills as skills

if _typing.TYPE_CHECKING:
    import spawner.logging as _spawner_logging
    import spawner.tools.context as _context

_logger = _logging.getLogger(__name__)


class ToolRegistry:
    def __init__(
        self,
        *,
        call_logger: _spawner_logging.ToolCallLogger | None = None,
    ) -> None:
        self._tools: dict[str, base.Tool] = {}
        self._metrics = base.MetricsCollector()
        self._call_logger = call_logger

    @property
    def metrics(self) -> base.MetricsCollector:
        return self._metrics

    def register(self, tool: base.Tool) -> None:
        """Add ``tool``; names must be unique (ValueError otherwise)."""
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> base.Tool | None:
        return self._tools.get(name)

    def get_or_raise(self, name: str) -> base.Tool:
        try:
            return self._tools[name]
        except KeyError:
            known = ", ".join(sorted(self._tools))
            raise KeyError(f"Tool '{name}' not found. Available: {known}") from None

    def list_tools(self) -> list[base.Tool]:
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        return list(self._tools)

    def to_mcp_format(self) -> list[dict[str, _typing.Any]]:
        return [tool.to_mcp_format() for tool in self._tools.values()]

    async def call(
        self,
        name: str,
        arguments: dict[str, _typing.Any],
        *,
        session_id: str | None = None,
    ) -> base.ToolResult:
        """
        Run a tool on arguments that already passed ``check_input``.

        Raises:
            KeyError: If no tool has this name.
        """
        tool = self.get_or_raise(name)
        if self._call_logger is not None:
            self._call_logger.log_tool_call(name, arguments, session_id=session_id)

        started = _time.perf_counter()
        try:
            result = await tool.execute(arguments)
        except Exception as e:
            _logger.exception("Tool %s raised", name)
            result = base.ToolResult(success=False, output="", error=f"Error in {name}: {e}")
        elapsed_ms = (_time.perf_counter() - started) * 1000.0

        self._metrics.record(name, result.success, elapsed_ms)
        if self._call_logger is not None:
            self._call_logger.log_tool_result(
                name,
                success=result.success,
                duration_ms=elapsed_ms,
                error=result.error,
                session_id=session_id,
            )

        if result.success:
            _logger.info("Tool %s completed in %.1f ms", name, elapsed_ms)
        else:
            _logger.warning("Tool %s failed in %.1f ms: %s", name, elapsed_ms, result.error)
        return result

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> _typing.Iterator[base.Tool]:
        return iter(self.list_tools())


TOOL_CLASSES: tuple[type[base.Tool], ...] = (
    skills.ListSkillsTool,
    skills.FindSkillTool,
    skills.ConsultSkillTool,
    code.ValidateCodeTool,
    memory.ProjectMemoryTool,
    code.SharpEdgesTool,
    guidance.TroubleshootTool,
    guidance.OrchestrateTool,
)


def build_registry(
    tool_context: _context.ToolContext,
    *,
    call_logger: _spawner_logging.ToolCallLogger | None = None,
) -> ToolRegistry:
    """Registry with all eight Spawner tools bound to ``tool_context``."""
    registry = ToolRegistry(call_logger=call_logger)
    for tool_cls in TOOL_CLASSES:
        registry.register(tool_cls(tool_context))  # type: ignore[call-arg]
    _logger.debug("Registered %d tools", len(registry))
    return registry
