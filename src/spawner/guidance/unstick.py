"""
Advice for getting unstuck.

Prefers the debugging methodology from the debugging-master skill when
the library has it, and falls back to an oblique strategy otherwise.
"""

from __future__ import annotations

import logging as _logging
import random as _random
import typing as _typing

import spawner.constants as constants
import spawner.skills.catalog as catalog

_logger = _logging.getLogger(__name__)

STRATEGIES: tuple[str, ...] = (
    "State the problem in words as clearly as possible.",
    "What is the simplest version of this problem?",
    "Have you tried turning it off and on again?",
    "Explain the problem to a rubber duck.",
    "What assumption are you making that is wrong?",
    "Look at the logs.",
    "Isolate the component.",
    "Write a failing test case.",
)

DEBUGGING_CHECKLIST = (
    "### Debugging Checklist\n"
    "1. Reproduce the issue consistently.\n"
    "2. Isolate the cause (binary search).\n"
    "3. Fix the root cause, not the symptom.\n"
    "4. Verify the fix."
)

# Pattern names that describe a debugging method rather than a single fix
_METHOD_KEYWORDS = ("scientific", "process")


class UnstickAdvisor:
    """Produces markdown advice for a stuck developer."""

    def __init__(
        self,
        skill_catalog: catalog.SkillCatalog,
        *,
        rng: _random.Random | None = None,
    ) -> None:
        self._catalog = skill_catalog
        self._rng = rng or _random.Random()

    def _method_pattern(self) -> dict[str, _typing.Any] | None:
        skill = self._catalog.get_skill(constants.DEBUGGING_SKILL_ID)
        if skill is None or not skill.patterns:
            return None
        for pattern in skill.patterns:
            if not isinstance(pattern, dict):
                continue
            name = str(pattern.get("name", "")).lower()
            if any(keyword in name for keyword in _METHOD_KEYWORDS):
                return pattern
        return None

    def advise(self, problem: str) -> str:
        """
        Advice for ``problem`` as markdown.

        The problem text is only logged; advice does not depend on it.
        """
        _logger.debug("Unstick requested for: %s", problem[:80])

        pattern = self._method_pattern()
        if pattern is not None:
            guidance = pattern.get("guidance") or pattern.get("description") or ""
            return f"## From Debugging Master\n\n{guidance}"

        strategy = self._rng.choice(STRATEGIES)
        return f"## Unstick Strategy\n\n{strategy}\n\n{DEBUGGING_CHECKLIST}"
