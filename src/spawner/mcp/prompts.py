"""
MCP prompts: canned user messages built from the tools' services.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import spawner.mcp.protocol as protocol
import spawner.tools.base as base

if _typing.TYPE_CHECKING:
    import spawner.tools.context as _context


@_dataclasses.dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = True

    def to_dict(self) -> dict[str, _typing.Any]:
        return {
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }


@_dataclasses.dataclass(frozen=True)
class Prompt:
    """A prompt template advertised in prompts/list."""

    name: str
    title: str
    description: str
    arguments: tuple[PromptArgument, ...]

    def to_dict(self) -> dict[str, _typing.Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "arguments": [a.to_dict() for a in self.arguments],
        }


PROMPTS: tuple[Prompt, ...] = (
    Prompt(
        name="plan-project",
        title="Plan Project",
        description=(
            "Analyze the request and create a step-by-step development plan "
            "using orchestration."
        ),
        arguments=(
            PromptArgument("task", "The user's high-level goal or task to plan"),
        ),
    ),
    Prompt(
        name="review-code",
        title="Review Code",
        description="Check the code for sharp edges and validation errors.",
        arguments=(
            PromptArgument("code", "Code content to review"),
            PromptArgument(
                "language",
                "Programming language of code (e.g. typescript, python)",
                required=False,
            ),
            PromptArgument(
                "context",
                "Optional skill ID to load specific validations",
                required=False,
            ),
        ),
    ),
    Prompt(
        name="debug-error",
        title="Debug Error",
        description="Use unstick strategies to solve this error.",
        arguments=(
            PromptArgument("error", "Description of the error or problem"),
        ),
    ),
)


class PromptRenderer:
    """Renders prompts against the shared tool services."""

    def __init__(
        self,
        tool_context: _context.ToolContext,
        prompts: tuple[Prompt, ...] = PROMPTS,
    ) -> None:
        self._context = tool_context
        self._prompts = {p.name: p for p in prompts}

    def list_prompts(self) -> list[dict[str, _typing.Any]]:
        return [p.to_dict() for p in self._prompts.values()]

    def _text(self, name: str, arguments: dict[str, str]) -> str:
        if name == "plan-project":
            return self._context.planner.plan(arguments["task"])
        if name == "review-code":
            findings = self._context.validations.validate(
                arguments["code"],
                language=arguments.get("language"),
                context=arguments.get("context"),
            )
            return f"Here is the code review:\n\n{base.json_output(findings)}"
        if name == "debug-error":
            return self._context.advisor.advise(arguments["error"])
        raise protocol.JsonRpcError(protocol.INVALID_PARAMS, f"Prompt {name} not found")

    def get_prompt(
        self,
        name: str,
        arguments: dict[str, _typing.Any] | None = None,
    ) -> dict[str, _typing.Any]:
        """
        Render a prompt for prompts/get.

        Raises:
            JsonRpcError: For unknown prompts or missing required arguments.
        """
        prompt = self._prompts.get(name)
        if prompt is None:
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, f"Prompt {name} not found")

        arguments = arguments or {}
        missing = [
            a.name for a in prompt.arguments if a.required and not arguments.get(a.name)
        ]
        if missing:
            raise protocol.JsonRpcError(
                protocol.INVALID_PARAMS,
                f"Missing required arguments for {name}: {', '.join(missing)}",
            )

        text = self._text(name, {k: str(v) for k, v in arguments.items() if v is not None})
        return {
            "description": prompt.description,
            "messages": [
                {"role": "user", "content": {"type": "text", "text": text}},
            ],
        }
