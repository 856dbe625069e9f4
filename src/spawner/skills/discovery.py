"""
Skill file discovery.

Skill data lives at ``<root>/**/<dir>/<file>`` where ``<file>`` is one of
skill.yaml, sharp-edges.yaml or validations.yaml. Directories named in the
ignore list (node_modules, .git, mcp-server by default) are never entered.
"""

from __future__ import annotations

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import spawner.constants as constants
import spawner.skills.skill as skill_module

_logger = _logging.getLogger(__name__)


def find_data_files(
    root: _pathlib.Path,
    filename: str,
    ignored_dirs: _typing.Iterable[str] = constants.DEFAULT_IGNORED_DIRS,
) -> list[_pathlib.Path]:
    """
    Find every ``filename`` at least one directory below ``root``.

    Args:
        root: Directory to search.
        filename: Exact file name to look for.
        ignored_dirs: Directory names to prune from the walk.

    Returns:
        Absolute paths, sorted for stable ordering.
    """
    if not root.is_dir():
        return []

    ignored = set(ignored_dirs)
    found: list[_pathlib.Path] = []
    root = root.resolve()

    for dirpath, dirnames, filenames in _os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        current = _pathlib.Path(dirpath)
        # A file directly in the root has no directory to name it
        if current == root:
            continue
        if filename in filenames:
            found.append(current / filename)

    return sorted(found)


class SkillDiscovery:
    """
    Discovers skills below a library root.

    Unreadable or invalid skill files are logged and skipped so one bad
    file never hides the rest of the library.
    """

    def __init__(
        self,
        root: _pathlib.Path,
        ignored_dirs: _typing.Iterable[str] = constants.DEFAULT_IGNORED_DIRS,
    ) -> None:
        """
        Initialize skill discovery.

        Args:
            root: Skill library root.
            ignored_dirs: Directory names never searched.
        """
        self._root = _pathlib.Path(root).expanduser()
        self._ignored_dirs = tuple(ignored_dirs)

    @property
    def root(self) -> _pathlib.Path:
        """Skill library root."""
        return self._root

    @property
    def ignored_dirs(self) -> tuple[str, ...]:
        """Directory names pruned from the search."""
        return self._ignored_dirs

    def find_files(self, filename: str) -> list[_pathlib.Path]:
        """Find data files with the given name below the root."""
        return find_data_files(self._root, filename, self._ignored_dirs)

    def discover(self) -> list[skill_module.SkillDefinition]:
        """
        Discover all valid skills.

        Returns:
            Skills in path order.
        """
        skills: list[skill_module.SkillDefinition] = []
        for item in self.discover_all(include_errors=True):
            if isinstance(item, tuple):
                path, error = item
                _logger.error("Error loading skill from %s: %s", path, error)
                continue
            skills.append(item)

        _logger.info("Loaded %d skills from %s", len(skills), self._root)
        return skills

    def discover_all(
        self,
        *,
        include_errors: bool = False,
    ) -> _typing.Iterator[
        skill_module.SkillDefinition | tuple[_pathlib.Path, Exception]
    ]:
        """
        Discover all skills, optionally including errors.

        Yields skills as they're loaded, and (path, exception) tuples for
        invalid files when ``include_errors`` is set. Empty files are
        skipped silently.
        """
        root = self._root.resolve() if self._root.exists() else self._root
        for skill_file in self.find_files(constants.SKILL_FILE):
            try:
                skill = skill_module.load_skill(skill_file, root)
            except (OSError, ValueError) as e:
                if include_errors:
                    yield (skill_file, e)
                continue
            if skill is not None:
                yield skill
