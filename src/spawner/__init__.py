"""
Spawner - specialist skills for AI-powered product building.

Serves a library of skill definitions (patterns, anti-patterns, sharp
edges, validations) to AI agents over the Model Context Protocol, and
ships the tooling to build, lint and install that library.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("spawner-skills")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Spawner Contributors"

from spawner.config import Settings  # noqa: E402
from spawner.skills import SkillCatalog  # noqa: E402

__all__ = ["__version__", "__version_info__", "Settings", "SkillCatalog"]
