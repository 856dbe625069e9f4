"""
Guidance tools: troubleshooting advice and development plans.
"""

from __future__ import annotations

import asyncio as _asyncio
import typing as _typing

import spawner.tools.base as base
import spawner.tools.context as context


class TroubleshootTool(context.ContextTool):
    """Advice for a developer who is stuck."""

    @property
    def name(self) -> str:
        return "get_troubleshooting_advice"

    @property
    def description(self) -> str:
        return (
            "Get expert advice when you are stuck or seeing errors. "
            "Provides specific solutions based on the problem."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "problem": {
                    "type": "string",
                    "description": "Description of stuck state",
                },
            },
            "required": ["problem"],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            advice = await _asyncio.to_thread(
                self._context.advisor.advise, input.get("problem", "")
            )
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error getting unstick advice: {e}"
            )
        return base.ToolResult(success=True, output=advice)


class OrchestrateTool(context.ContextTool):
    """Turn a high-level goal into a plan over this server's tools."""

    @property
    def name(self) -> str:
        return "orchestrate_development_plan"

    @property
    def description(self) -> str:
        return (
            "Create a comprehensive development plan for a high-level task. "
            "Break down complex goals into actionable steps."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": "The user's high-level goal",
                },
            },
            "required": ["task"],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            plan = self._context.planner.plan(input.get("task", ""))
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error orchestrating: {e}"
            )
        return base.ToolResult(success=True, output=plan)
