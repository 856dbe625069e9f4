"""
Project memory tool.
"""

from __future__ import annotations

import asyncio as _asyncio
import typing as _typing

import spawner.tools.base as base
import spawner.tools.context as context

ACTIONS = ("set", "get", "list")


class ProjectMemoryTool(context.ContextTool):
    """Store, fetch or list project decisions."""

    @property
    def name(self) -> str:
        return "access_project_memory"

    @property
    def description(self) -> str:
        return (
            "Store or retrieve project-level decisions and context. "
            "Use this to maintain continuity."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": list(ACTIONS),
                    "description": "Action to perform",
                },
                "key": {
                    "type": "string",
                    "description": "Key for memory entry",
                },
                "value": {
                    "type": "string",
                    "description": "Value to store (only for 'set')",
                },
            },
            "required": ["action"],
        }

    def _run(self, action: str, key: str | None, value: str | None) -> _typing.Any:
        memory = self._context.memory
        if action == "set":
            if not key or not value:
                raise ValueError("Key and value required for set")
            return memory.set(key, value).to_dict()
        if action == "get":
            if not key:
                raise ValueError("Key required for get")
            entry = memory.get(key)
            return entry.to_dict() if entry else None
        if action == "list":
            return [entry.to_dict() for entry in memory.list()]
        raise ValueError(f"Invalid action: {action}")

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            result = await _asyncio.to_thread(
                self._run, input.get("action", ""), input.get("key"), input.get("value")
            )
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error accessing memory: {e}"
            )
        return base.ToolResult(success=True, output=base.json_output(result))
