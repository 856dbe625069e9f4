"""
Skill catalog.

The catalog coordinates skill discovery and provides listing, search
and lookup over the loaded skills.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import spawner.constants as constants
import spawner.skills.discovery as discovery
import spawner.skills.skill as skill_module

_logger = _logging.getLogger(__name__)


class SkillCatalog:
    """
    Catalog of skills below one library root.

    Handles:
    - Lazy discovery on first use, cached afterwards
    - Listing and category filtering
    - Multi-term keyword search
    - Lookup by id
    """

    def __init__(
        self,
        root: _pathlib.Path | str,
        ignored_dirs: _typing.Iterable[str] = constants.DEFAULT_IGNORED_DIRS,
    ) -> None:
        """
        Initialize the skill catalog.

        Args:
            root: Skill library root.
            ignored_dirs: Directory names never searched.
        """
        self._discovery = discovery.SkillDiscovery(_pathlib.Path(root), ignored_dirs)
        self._skills: list[skill_module.SkillDefinition] | None = None

    @property
    def root(self) -> _pathlib.Path:
        """Skill library root."""
        return self._discovery.root

    @property
    def skill_discovery(self) -> discovery.SkillDiscovery:
        """Underlying discovery (shared with validation and sharp-edge loaders)."""
        return self._discovery

    def _ensure_loaded(self) -> list[skill_module.SkillDefinition]:
        """Ensure skills have been discovered."""
        if self._skills is None:
            self._skills = self._discovery.discover()
            seen: set[str] = set()
            for skill in self._skills:
                if skill.id in seen:
                    _logger.warning(
                        "Duplicate skill id %r at %s; first definition wins",
                        skill.id,
                        skill.path,
                    )
                seen.add(skill.id)
        return self._skills

    def reload(self) -> None:
        """Force re-discovery of skills."""
        self._skills = None
        self._ensure_loaded()

    def __len__(self) -> int:
        return len(self._ensure_loaded())

    def list_skills(self, category: str | None = None) -> list[dict[str, _typing.Any]]:
        """
        List skill summaries.

        Args:
            category: Only include skills in this category.

        Returns:
            Summaries with the description truncated for display.
        """
        skills = self._ensure_loaded()
        if category:
            skills = [s for s in skills if s.category == category]
        return [s.to_summary() for s in skills]

    def search_skills(
        self,
        query: str,
        category: str | None = None,
    ) -> list[dict[str, _typing.Any]]:
        """
        Find skills matching a keyword query.

        Matching is case-insensitive. Every whitespace-separated term must
        occur in the skill's name, id or description, so "stripe payments"
        finds ``stripe-payments`` but not a skill only about Stripe.

        Args:
            query: Search terms.
            category: Only include skills in this category.

        Returns:
            Summaries of matching skills.
        """
        terms = query.lower().split()
        results: list[dict[str, _typing.Any]] = []

        for skill in self._ensure_loaded():
            if category and skill.category != category:
                continue
            haystacks = (
                skill.name.lower(),
                skill.id.lower(),
                (skill.description or "").lower(),
            )
            if all(any(term in text for text in haystacks) for term in terms):
                results.append(skill.to_summary())

        return results

    def get_skill(self, skill_id: str) -> skill_module.SkillDefinition | None:
        """
        Get a skill by id.

        Returns:
            SkillDefinition or None if not found.
        """
        for skill in self._ensure_loaded():
            if skill.id == skill_id:
                return skill
        return None

    def require_skill(self, skill_id: str) -> skill_module.SkillDefinition:
        """
        Get a skill by id, raising if absent.

        Raises:
            SkillNotFoundError: If no skill has this id.
        """
        skill = self.get_skill(skill_id)
        if skill is None:
            raise skill_module.SkillNotFoundError(skill_id)
        return skill
