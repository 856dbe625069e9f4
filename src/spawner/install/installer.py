"""
Local installation of the skill library.

The library is a git checkout under ``~/.spawner/skills``; install clones
it and update pulls.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import re as _re
import subprocess as _subprocess
import typing as _typing

_logger = _logging.getLogger(__name__)

NON_CATEGORY_DIRS = frozenset({"scripts", "cli", "dist"})
DESCRIPTION_LIMIT = 50

_SINGLE_LINE_DESCRIPTION = _re.compile(
    r"^description:\s*[\"']?([^|\n][^\n]*?)[\"']?\s*$", _re.MULTILINE
)
_BLOCK_DESCRIPTION = _re.compile(r"^description:\s*[|>][-+]?\s*\n\s+(.+)$", _re.MULTILINE)
_BLOCK_MARKERS = frozenset({"|", "|-", "|+", ">", ">-", ">+"})

Runner = _typing.Callable[..., _subprocess.CompletedProcess]


class InstallError(Exception):
    """Raised when installing or updating the skill library fails."""


@_dataclasses.dataclass
class InstallOutcome:
    already_installed: bool
    skill_count: int


@_dataclasses.dataclass
class GitInfo:
    branch: str
    last_commit: str


class SkillInstaller:
    """Clones, updates and inspects the local skill library."""

    def __init__(
        self,
        skills_dir: _pathlib.Path,
        repo_url: str,
        *,
        run: Runner = _subprocess.run,
    ) -> None:
        """
        Initialize the installer.

        Args:
            skills_dir: Checkout location (e.g. ~/.spawner/skills).
            repo_url: Git repository to clone.
            run: subprocess.run-compatible callable; injectable for tests.
        """
        self._skills_dir = _pathlib.Path(skills_dir).expanduser()
        self._repo_url = repo_url
        self._run = run

    @property
    def skills_dir(self) -> _pathlib.Path:
        return self._skills_dir

    def git_available(self) -> bool:
        """Whether a working git executable is on PATH."""
        try:
            self._run(["git", "--version"], check=True, capture_output=True)
        except (OSError, _subprocess.CalledProcessError):
            return False
        return True

    def is_installed(self) -> bool:
        """Whether the skills directory is a git checkout."""
        return (self._skills_dir / ".git").exists()

    def install(self) -> InstallOutcome:
        """
        Clone the library unless it's already installed.

        Raises:
            InstallError: If git is missing or the clone fails.
        """
        if not self.git_available():
            raise InstallError("Git is not installed. Please install Git first.")

        if self.is_installed():
            _logger.info("Skills already installed at %s", self._skills_dir)
            return InstallOutcome(already_installed=True, skill_count=self.count_skills())

        self._skills_dir.parent.mkdir(parents=True, exist_ok=True)
        _logger.info("Cloning %s into %s", self._repo_url, self._skills_dir)
        try:
            self._run(
                ["git", "clone", self._repo_url, str(self._skills_dir)],
                check=True,
                cwd=self._skills_dir.parent,
            )
        except (OSError, _subprocess.CalledProcessError) as e:
            raise InstallError(f"Failed to clone repository: {e}") from e

        return InstallOutcome(already_installed=False, skill_count=self.count_skills())

    def update(self) -> int:
        """
        Pull the latest library.

        Returns:
            Skill count after the update.

        Raises:
            InstallError: If not installed or the pull fails.
        """
        if not self.is_installed():
            raise InstallError("Skills not installed. Run install command first.")
        try:
            self._run(["git", "pull"], check=True, cwd=self._skills_dir)
        except (OSError, _subprocess.CalledProcessError) as e:
            raise InstallError(f"Failed to update: {e}") from e
        return self.count_skills()

    def git_info(self) -> GitInfo | None:
        """Current branch and last commit, or None if git can't tell."""
        try:
            branch = self._run(
                ["git", "branch", "--show-current"],
                check=True,
                capture_output=True,
                text=True,
                cwd=self._skills_dir,
            ).stdout.strip()
            last_commit = self._run(
                ["git", "log", "-1", "--format=%h %s"],
                check=True,
                capture_output=True,
                text=True,
                cwd=self._skills_dir,
            ).stdout.strip()
        except (OSError, _subprocess.CalledProcessError) as e:
            _logger.debug("git info unavailable: %s", e)
            return None
        return GitInfo(branch=branch, last_commit=last_commit)

    # Listing

    def categories(self) -> list[str]:
        """Installed category directory names, sorted."""
        if not self._skills_dir.is_dir():
            return []
        return sorted(
            p.name
            for p in self._skills_dir.iterdir()
            if p.is_dir() and not p.name.startswith(".") and p.name not in NON_CATEGORY_DIRS
        )

    def category_skills(self, category: str) -> list[str]:
        """Skill directory names in ``category``, sorted."""
        category_dir = self._skills_dir / category
        if not category_dir.is_dir():
            return []
        return sorted(p.name for p in category_dir.iterdir() if p.is_dir())

    def count_skills(self) -> int:
        return sum(len(self.category_skills(c)) for c in self.categories())

    def skill_description(self, category: str, skill: str) -> str:
        """Short description for listings, read straight from skill.yaml."""
        skill_yaml = self._skills_dir / category / skill / "skill.yaml"
        try:
            content = skill_yaml.read_text(encoding="utf-8")
        except OSError:
            return ""
        return short_description(content)


def short_description(content: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """
    First line of the ``description`` field, cut to ``limit`` characters.

    Reads the raw text so listing stays fast and tolerant of files a
    strict YAML parser rejects.
    """
    match = _SINGLE_LINE_DESCRIPTION.search(content)
    text = match.group(1).strip().strip("\"'") if match else None
    if not text or text in _BLOCK_MARKERS:
        block = _BLOCK_DESCRIPTION.search(content)
        text = block.group(1) if block else None
    if not text:
        return ""
    text = text.strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text
