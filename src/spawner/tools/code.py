"""
Code analysis tools: regex validations and sharp-edge detection.
"""

from __future__ import annotations

import asyncio as _asyncio
import typing as _typing

import spawner.tools.base as base
import spawner.tools.context as context


class ValidateCodeTool(context.ContextTool):
    """Run the library's regex validations against a code snippet."""

    @property
    def name(self) -> str:
        return "validate_code_implementation"

    @property
    def description(self) -> str:
        return (
            "Validate code against defined patterns and rules. "
            "Use this before finalizing any code."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Code content to validate",
                },
                "language": {
                    "type": "string",
                    "description": "Programming language of code (e.g. typescript, python)",
                },
                "context": {
                    "type": "string",
                    "description": "Optional skill ID to load specific validations",
                },
            },
            "required": ["code"],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            findings = await _asyncio.to_thread(
                self._context.validations.validate,
                input.get("code", ""),
                language=input.get("language"),
                context=input.get("context"),
            )
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error validating code: {e}"
            )
        return base.ToolResult(success=True, output=base.json_output(findings))


class SharpEdgesTool(context.ContextTool):
    """Report known gotchas for a skill, or those whose pattern matches code."""

    @property
    def name(self) -> str:
        return "analyze_risk_sharp_edges"

    @property
    def description(self) -> str:
        return (
            "Scan code for 'sharp edges' - high-risk patterns or known gotchas. "
            "Use this proactively."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Code content to scan for sharp edges",
                },
                "skill_id": {
                    "type": "string",
                    "description": "Specific skill to check for sharp edges",
                },
            },
            "required": [],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            edges = await _asyncio.to_thread(
                self._context.sharp_edges.check,
                code=input.get("code"),
                skill_id=input.get("skill_id"),
            )
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error checking sharp edges: {e}"
            )
        return base.ToolResult(
            success=True,
            output=base.json_output([edge.to_dict() for edge in edges]),
        )
