"""
Skill library tools: list, search and consult skills.
"""

from __future__ import annotations

import asyncio as _asyncio
import typing as _typing

import spawner.tools.base as base
import spawner.tools.context as context

_CATEGORY_PROPERTY = {
    "type": "string",
    "description": "Optional category to filter by",
}


class ListSkillsTool(context.ContextTool):
    """List skill summaries, optionally for one category."""

    @property
    def name(self) -> str:
        return "list_available_skills"

    @property
    def description(self) -> str:
        return (
            "List all available skill categories and skills. "
            "Use this to explore what capabilities are available."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {"category": dict(_CATEGORY_PROPERTY)},
            "required": [],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            skills = await _asyncio.to_thread(
                self._context.catalog.list_skills, input.get("category")
            )
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error listing skills: {e}"
            )
        return base.ToolResult(success=True, output=base.json_output(skills))


class FindSkillTool(context.ContextTool):
    """Keyword search over skill names, ids and descriptions."""

    @property
    def name(self) -> str:
        return "find_expert_skill"

    @property
    def description(self) -> str:
        return (
            "Use this to find specialized expert knowledge. Input a query like "
            "'react patterns' or 'database migration' to find skills that can help you."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search term for skills (name or description)",
                },
                "category": dict(_CATEGORY_PROPERTY),
            },
            "required": ["query"],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        try:
            skills = await _asyncio.to_thread(
                self._context.catalog.search_skills,
                input.get("query", ""),
                input.get("category"),
            )
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error searching skills: {e}"
            )
        return base.ToolResult(success=True, output=base.json_output(skills))


class ConsultSkillTool(context.ContextTool):
    """Load the full definition of one skill."""

    @property
    def name(self) -> str:
        return "consult_skill"

    @property
    def description(self) -> str:
        return (
            "Load the full context and instructions for a specific skill. "
            "Use this when you need deep expertise on a topic."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "The unique ID of skill to load",
                },
            },
            "required": ["id"],
        }

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        skill_id = self._require_input(input, "id", label="skill id")
        if isinstance(skill_id, base.ToolResult):
            return skill_id

        try:
            skill = await _asyncio.to_thread(self._context.catalog.get_skill, skill_id)
        except Exception as e:
            return base.ToolResult(
                success=False, output="", error=f"Error loading skill: {e}"
            )
        if skill is None:
            return base.ToolResult(
                success=False, output="", error=f"Skill not found: {skill_id}"
            )
        return base.ToolResult(success=True, output=base.json_output(skill.to_dict()))
