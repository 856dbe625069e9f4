"""
MCP resources: the capability manifest and live tool metrics.
"""

from __future__ import annotations

import typing as _typing

import spawner.mcp.protocol as protocol
import spawner.tools.base as base

if _typing.TYPE_CHECKING:
    import spawner.mcp.prompts as _prompts
    import spawner.skills.catalog as _catalog
    import spawner.tools.registry as _registry

MANIFEST_URI = "spawner://manifest"
METRICS_URI = "spawner://metrics"

RESOURCES: tuple[dict[str, str], ...] = (
    {
        "name": "manifest",
        "uri": MANIFEST_URI,
        "description": "System manifest describing available capabilities",
        "mimeType": "application/json",
    },
    {
        "name": "metrics",
        "uri": METRICS_URI,
        "description": "Tool call counts, durations and success rates since startup",
        "mimeType": "application/json",
    },
)

WORKFLOW = (
    "Use list_available_skills to explore available skills and categories",
    "Use find_expert_skill to search for specific expertise",
    "Use consult_skill to load detailed skill instructions",
    "Use validate_code_implementation to check code quality",
    "Use analyze_risk_sharp_edges to identify potential issues",
    "Use get_troubleshooting_advice when stuck",
    "Use orchestrate_development_plan for complex tasks",
    "Use access_project_memory to maintain state across sessions",
)

TIPS = (
    "Always consult relevant skills before implementing new features",
    "Run validation and sharp edge checks before finalizing code",
    "Use project memory to preserve important decisions",
    "The orchestrate tool can break down complex tasks automatically",
)


def build_manifest(
    registry: _registry.ToolRegistry,
    prompts: _prompts.PromptRenderer,
    skill_catalog: _catalog.SkillCatalog,
    *,
    version: str,
) -> dict[str, _typing.Any]:
    """Describe the server's tools, prompts and resources."""
    return {
        "name": "Spawner Skills MCP Server",
        "version": version,
        "description": (
            f"This MCP server provides {len(skill_catalog)} expert skills for "
            "development, deployment, and project management"
        ),
        "capabilities": {
            "tools": [
                {"name": t.name, "description": t.description}
                for t in registry.list_tools()
            ],
            "prompts": [
                {"name": p["name"], "description": p["description"]}
                for p in prompts.list_prompts()
            ],
            "resources": [
                {"name": r["name"], "uri": r["uri"], "description": r["description"]}
                for r in RESOURCES
            ],
        },
        "usage": {
            "workflow": [f"{i}. {step}" for i, step in enumerate(WORKFLOW, start=1)],
            "tips": list(TIPS),
        },
    }


class ResourceProvider:
    """Serves resources/list and resources/read."""

    def __init__(
        self,
        registry: _registry.ToolRegistry,
        prompts: _prompts.PromptRenderer,
        skill_catalog: _catalog.SkillCatalog,
        *,
        version: str,
    ) -> None:
        self._registry = registry
        self._prompts = prompts
        self._catalog = skill_catalog
        self._version = version

    def list_resources(self) -> list[dict[str, str]]:
        return [dict(r) for r in RESOURCES]

    def read(self, uri: str) -> dict[str, _typing.Any]:
        """
        Read one resource.

        Raises:
            JsonRpcError: If the URI is unknown.
        """
        if uri == MANIFEST_URI:
            payload: _typing.Any = build_manifest(
                self._registry, self._prompts, self._catalog, version=self._version
            )
        elif uri == METRICS_URI:
            metrics = self._registry.metrics
            payload = {"summary": metrics.summary(), "tools": metrics.to_dict()}
        else:
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, f"Resource {uri} not found")

        return {
            "contents": [
                {
                    "uri": uri,
                    "mimeType": "application/json",
                    "text": base.json_output(payload),
                }
            ]
        }
