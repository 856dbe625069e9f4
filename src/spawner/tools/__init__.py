"""
MCP tools for Spawner.

Each tool wraps one capability of the skill library (search, consult,
validation, sharp edges, memory, guidance) behind a JSON input schema.
"""

from spawner.tools.base import (
    MetricsCollector,
    Tool,
    ToolMetrics,
    ToolResult,
    json_output,
)
from spawner.tools.context import ContextTool, ToolContext
from spawner.tools.registry import ToolRegistry, build_registry

__all__ = [
    "ContextTool",
    "MetricsCollector",
    "Tool",
    "ToolContext",
    "ToolMetrics",
    "ToolRegistry",
    "ToolResult",
    "build_registry",
    "json_output",
]
