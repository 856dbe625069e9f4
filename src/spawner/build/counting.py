"""
Skill counts, and keeping the advertised count in docs up to date.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import re as _re
import typing as _typing

_logger = _logging.getLogger(__name__)

EXCLUDED_DIRS = frozenset(
    {".git", ".github", "scripts", "cli", "node_modules", "dist", "mcp-server"}
)
"""Top-level directories that are not skill categories."""


@_dataclasses.dataclass(frozen=True)
class CountTarget:
    """A file whose text mentions the skill count."""

    path: str
    pattern: _re.Pattern[str]
    template: str

    def render(self, total: int) -> str:
        return self.template.format(count=total)


_SPECIALIST = _re.compile(r"\d+\+? specialist skills")

COUNT_TARGETS: tuple[CountTarget, ...] = (
    CountTarget("README.md", _re.compile(r"\*\*\d+\+? skills\*\*"), "**{count}+ skills**"),
    CountTarget("cli/README.md", _SPECIALIST, "{count}+ specialist skills"),
    CountTarget("cli/package.json", _SPECIALIST, "{count}+ specialist skills"),
)


@_dataclasses.dataclass
class SkillCount:
    total: int
    categories: dict[str, int]

    def by_size(self) -> list[tuple[str, int]]:
        """Categories largest first."""
        return sorted(self.categories.items(), key=lambda item: item[1], reverse=True)


def count_skills(root: _pathlib.Path) -> SkillCount:
    """
    Count skill directories per category.

    Every subdirectory of a category directory counts as one skill;
    categories with no subdirectories are left out.
    """
    categories: dict[str, int] = {}
    for category in sorted(root.iterdir()):
        if not category.is_dir() or category.name in EXCLUDED_DIRS or category.name.startswith("."):
            continue
        count = sum(1 for p in category.iterdir() if p.is_dir())
        if count:
            categories[category.name] = count
    return SkillCount(total=sum(categories.values()), categories=categories)


@_dataclasses.dataclass
class SyncOutcome:
    path: str
    status: _typing.Literal["updated", "unchanged", "missing"]


def sync_counts(
    root: _pathlib.Path,
    total: int | None = None,
    targets: tuple[CountTarget, ...] = COUNT_TARGETS,
) -> list[SyncOutcome]:
    """
    Rewrite the advertised skill count in each target file.

    Args:
        root: Repository root.
        total: Count to write (counted from ``root`` if None).
        targets: Files and patterns to update.
    """
    if total is None:
        total = count_skills(root).total

    outcomes: list[SyncOutcome] = []
    for target in targets:
        path = root / target.path
        if not path.exists():
            _logger.warning("File not found: %s", target.path)
            outcomes.append(SyncOutcome(target.path, "missing"))
            continue
        content = path.read_text(encoding="utf-8")
        updated = target.pattern.sub(target.render(total), content)
        if updated == content:
            outcomes.append(SyncOutcome(target.path, "unchanged"))
            continue
        path.write_text(updated, encoding="utf-8")
        _logger.info("Updated %s with count %d+", target.path, total)
        outcomes.append(SyncOutcome(target.path, "updated"))
    return outcomes
