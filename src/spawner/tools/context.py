"""
Shared services the tools operate on.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import random as _random
import typing as _typing

import spawner.guidance.planner as planner_module
import spawner.guidance.unstick as unstick_module
import spawner.memory.store as store_module
import spawner.skills.catalog as catalog_module
import spawner.skills.sharp_edges as sharp_edges_module
import spawner.skills.validations as validations_module
import spawner.tools.base as base

if _typing.TYPE_CHECKING:
    import spawner.config as _config


@_dataclasses.dataclass
class ToolContext:
    """Everything a tool needs: the skill library, memory and advisors."""

    catalog: catalog_module.SkillCatalog
    validations: validations_module.ValidationEngine
    sharp_edges: sharp_edges_module.SharpEdgeScanner
    memory: store_module.ProjectMemory
    advisor: unstick_module.UnstickAdvisor
    planner: planner_module.Planner

    @classmethod
    def create(
        cls,
        skills_root: _typing.Any,
        memory_path: _typing.Any,
        *,
        ignored_dirs: _typing.Iterable[str] | None = None,
        rng: _random.Random | None = None,
    ) -> ToolContext:
        """
        Build a context over one skill library and memory file.

        Args:
            skills_root: Skill library root.
            memory_path: Project memory JSON file.
            ignored_dirs: Directory names never searched (default set if None).
            rng: Random source for unstick strategies.
        """
        if ignored_dirs is None:
            skill_catalog = catalog_module.SkillCatalog(skills_root)
        else:
            skill_catalog = catalog_module.SkillCatalog(skills_root, ignored_dirs)
        finder = skill_catalog.skill_discovery
        return cls(
            catalog=skill_catalog,
            validations=validations_module.ValidationEngine(finder),
            sharp_edges=sharp_edges_module.SharpEdgeScanner(finder),
            memory=store_module.ProjectMemory(memory_path),
            advisor=unstick_module.UnstickAdvisor(skill_catalog, rng=rng),
            planner=planner_module.Planner(),
        )

    @classmethod
    def from_settings(cls, settings: _config.Settings) -> ToolContext:
        """Build a context from loaded settings."""
        return cls.create(
            settings.skills_root,
            settings.memory_path,
            ignored_dirs=settings.skills.ignored_dirs,
        )


class ContextTool(base.Tool):
    """Tool bound to a :class:`ToolContext`."""

    def __init__(self, context: ToolContext) -> None:
        self._context = context
