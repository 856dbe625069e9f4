"""
Skill definition and skill.yaml parsing.

A skill lives in ``<category>/<skill-id>/skill.yaml``. The YAML carries
the metadata (id, name, description, tags) and the structured knowledge
(identity, patterns, anti_patterns). Category and a fallback id come from
the directory layout.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import spawner.constants as constants


class SkillNotFoundError(LookupError):
    """Raised when a skill id is not present in the catalog."""

    def __init__(self, skill_id: str) -> None:
        self.skill_id = skill_id
        super().__init__(f"Skill not found: {skill_id}")


class SkillManifest(_pydantic.BaseModel):
    """
    Parsed contents of a skill.yaml file.

    Every field is optional: real skill files vary a lot, and missing
    values are filled from the directory layout. Unknown keys (handoffs,
    references, ...) are kept in ``model_extra``. The knowledge fields
    (identity, patterns, anti_patterns, owns, pairs_with) are served as
    written, whatever their shape.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    description: str | None = None
    version: str | None = None
    category: str | None = None
    tags: list[str] = _pydantic.Field(default_factory=list)
    identity: _typing.Any = None
    owns: _typing.Any = _pydantic.Field(default_factory=list)
    patterns: _typing.Any = None
    anti_patterns: _typing.Any = None
    pairs_with: _typing.Any = _pydantic.Field(default_factory=list)

    @_pydantic.field_validator("id", "name", "version", "category", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: _typing.Any) -> _typing.Any:
        # YAML turns `version: 1.0` into a float and `id: 404` into an int
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @_pydantic.field_validator("description", mode="before")
    @classmethod
    def _description_to_text(cls, value: _typing.Any) -> _typing.Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, list):
            return " ".join(str(v) for v in value)
        if isinstance(value, dict):
            return _yaml.safe_dump(value, sort_keys=False).strip()
        return str(value)

    @_pydantic.field_validator("owns", "pairs_with", mode="before")
    @classmethod
    def _none_to_list(cls, value: _typing.Any) -> _typing.Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @_pydantic.field_validator("tags", mode="before")
    @classmethod
    def _tags_to_str(cls, value: _typing.Any) -> _typing.Any:
        if value is None:
            return []
        if isinstance(value, (list, dict)):
            return [str(v) for v in value]
        return [str(value)]

    @property
    def role(self) -> str:
        """identity.role when identity is a mapping, else empty."""
        if isinstance(self.identity, dict):
            role = self.identity.get("role")
            return str(role) if role else ""
        return ""


@_dataclasses.dataclass
class SkillDefinition:
    """
    A skill ready to be served.

    ``path`` points at the skill.yaml file.
    """

    id: str
    name: str
    category: str
    description: str
    path: _pathlib.Path
    identity: _typing.Any = None
    patterns: _typing.Any = None
    anti_patterns: _typing.Any = None
    version: str | None = None
    tags: list[str] = _dataclasses.field(default_factory=list)
    owns: _typing.Any = _dataclasses.field(default_factory=list)
    pairs_with: _typing.Any = _dataclasses.field(default_factory=list)

    @property
    def directory(self) -> _pathlib.Path:
        """Skill directory (parent of skill.yaml)."""
        return self.path.parent

    def summary_description(self, limit: int = constants.SUMMARY_DESCRIPTION_LIMIT) -> str:
        """Description cut to ``limit`` characters, with '...' if cut."""
        if not self.description:
            return ""
        if len(self.description) > limit:
            return self.description[:limit] + "..."
        return self.description

    def to_summary(self) -> dict[str, _typing.Any]:
        """Lightweight metadata for listings and search results."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.summary_description(),
        }

    def to_dict(self) -> dict[str, _typing.Any]:
        """Full definition for JSON serialization."""
        data: dict[str, _typing.Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "path": str(self.path),
        }
        if self.identity is not None:
            data["identity"] = self.identity
        if self.patterns is not None:
            data["patterns"] = self.patterns
        if self.anti_patterns is not None:
            data["anti_patterns"] = self.anti_patterns
        if self.version:
            data["version"] = self.version
        if self.tags:
            data["tags"] = self.tags
        if self.owns:
            data["owns"] = self.owns
        if self.pairs_with:
            data["pairs_with"] = self.pairs_with
        return data


def parse_skill_yaml(content: str) -> SkillManifest | None:
    """
    Parse the text of a skill.yaml file.

    Returns:
        The manifest, or None for an empty document.

    Raises:
        ValueError: If the YAML is malformed or not a mapping.
    """
    try:
        data = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML: {e}") from e

    if not data:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"skill.yaml must be a mapping, got {type(data).__name__}")

    try:
        return SkillManifest.model_validate(data)
    except _pydantic.ValidationError as e:
        raise ValueError(f"Invalid skill definition: {e}") from e


def layout_names(relative_path: _pathlib.Path) -> tuple[str, str]:
    """
    Derive (category, directory id) from a path relative to the skill root.

    ``maker/micro-saas-launcher/skill.yaml`` gives
    ``("maker", "micro-saas-launcher")``. Missing levels become "unknown".
    """
    parts = relative_path.parts
    category = parts[-3] if len(parts) >= 3 else "unknown"
    dir_id = parts[-2] if len(parts) >= 2 else "unknown"
    return category, dir_id


def skill_id_for_directory(directory: _pathlib.Path) -> str:
    """
    Id of the skill living in ``directory``.

    The ``id`` from its skill.yaml when that file loads, else the
    directory name (the same fallback :func:`load_skill` uses).
    """
    try:
        manifest = parse_skill_yaml(
            (directory / constants.SKILL_FILE).read_text(encoding="utf-8")
        )
    except (OSError, ValueError):
        return directory.name
    if manifest is None or not manifest.id:
        return directory.name
    return manifest.id


def load_skill(skill_file: _pathlib.Path, root: _pathlib.Path) -> SkillDefinition | None:
    """
    Load one skill.yaml.

    Args:
        skill_file: Absolute path to the skill.yaml file.
        root: Skill library root, used to derive category and fallback id.

    Returns:
        The skill, or None if the file is empty.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a valid skill definition.
    """
    content = skill_file.read_text(encoding="utf-8")
    manifest = parse_skill_yaml(content)
    if manifest is None:
        return None

    category, dir_id = layout_names(skill_file.relative_to(root))
    skill_id = manifest.id or dir_id

    return SkillDefinition(
        id=skill_id,
        name=manifest.name or skill_id,
        category=category,
        description=manifest.description or manifest.role,
        path=skill_file,
        identity=manifest.identity,
        patterns=manifest.patterns,
        anti_patterns=manifest.anti_patterns,
        version=manifest.version,
        tags=manifest.tags,
        owns=manifest.owns,
        pairs_with=manifest.pairs_with,
    )
