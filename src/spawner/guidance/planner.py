"""
Keyword-driven development plans.

The plan points the agent at the server's own tools in a sensible order.
Sections fire on keywords in the task; a task matching nothing gets an
exploration step.
"""

from __future__ import annotations

import dataclasses as _dataclasses


@_dataclasses.dataclass(frozen=True)
class PlanRule:
    """A plan section triggered by any of ``keywords``."""

    keywords: tuple[str, ...]
    title: str
    body: str


PLAN_RULES: tuple[PlanRule, ...] = (
    PlanRule(
        keywords=("saas", "build", "create"),
        title="Find Expert Skills",
        body=(
            "Use `find_expert_skill` to find relevant skills "
            "(e.g., 'micro-saas-launcher').\n"
            "Then use `consult_skill` to load its patterns before writing code."
        ),
    ),
    PlanRule(
        keywords=("stuck", "debug", "error"),
        title="Troubleshoot",
        body="Use `get_troubleshooting_advice` to get unstuck.",
    ),
    PlanRule(
        keywords=("validate", "check", "review"),
        title="Validate Code",
        body="Use `validate_code_implementation` to check your work.",
    ),
    PlanRule(
        keywords=("watch", "warn", "risk"),
        title="Check Sharp Edges",
        body="Use `analyze_risk_sharp_edges` to find potential gotchas.",
    ),
)

EXPLORE_STEP = PlanRule(
    keywords=(),
    title="Explore",
    body="Use `list_available_skills` to see what is available.",
)


class Planner:
    """Turns a task description into a numbered markdown plan."""

    def __init__(self, rules: tuple[PlanRule, ...] = PLAN_RULES) -> None:
        self._rules = rules

    def matching_rules(self, task: str) -> list[PlanRule]:
        """Rules whose keywords occur in ``task`` (case-insensitive)."""
        lowered = task.lower()
        matched = [r for r in self._rules if any(k in lowered for k in r.keywords)]
        return matched or [EXPLORE_STEP]

    def plan(self, task: str) -> str:
        """Markdown plan for ``task``."""
        lines = [f'## Orchestration Plan for: "{task}"', ""]
        for number, rule in enumerate(self.matching_rules(task), start=1):
            lines.append(f"{number}. **{rule.title}**")
            lines.extend(f"   {line}" for line in rule.body.splitlines())
            lines.append("")
        lines.append("Use these tools to proceed.")
        return "\n".join(lines)
