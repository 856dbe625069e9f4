"""
Spawner settings.

Precedence, highest first:

1. Keyword arguments to ``Settings(...)``
2. ``SPAWNER_*`` environment variables (nested with ``__``, e.g.
   ``SPAWNER_SERVER__PORT=8080`` or ``SPAWNER_SKILLS__ROOT=/srv/skills``)
3. The .env file named by ``SPAWNER_ENV_FILE``
4. YAML layers: project, then user, then built-in defaults
   (see :mod:`spawner.config.sources`)
"""

import os as _os
import pathlib as _pathlib
import subprocess as _subprocess
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import spawner.config.sources as sources
import spawner.config.types as types

PROJECT_MARKERS = (".spawner", "pyproject.toml", "package.json")

SECTIONS = ("skills", "server", "memory", "logging", "install")


def _env_file() -> str | None:
    """The file named by SPAWNER_ENV_FILE, if it exists. No implicit .env."""
    candidate = _os.environ.get("SPAWNER_ENV_FILE")
    if candidate and _pathlib.Path(candidate).is_file():
        return candidate
    return None


def find_git_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path | None:
    """Top of the git work tree containing ``start_path``, if any."""
    try:
        completed = _subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=start_path or _pathlib.Path.cwd(),
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, _subprocess.TimeoutExpired):
        return None
    if completed.returncode != 0:
        return None
    return _pathlib.Path(completed.stdout.strip())


def find_project_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path:
    """
    Directory whose ``.spawner/config.yaml`` applies.

    The git work tree wins; otherwise the nearest ancestor holding one of
    PROJECT_MARKERS; otherwise the current directory.
    """
    start = start_path or _pathlib.Path.cwd()

    git_root = find_git_root(start)
    if git_root is not None:
        return git_root

    resolved = start.resolve()
    for candidate in (resolved, *resolved.parents):
        if candidate == candidate.parent:
            break
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return _pathlib.Path.cwd()


class Settings(_pydantic_settings.BaseSettings):
    """
    Effective Spawner configuration.

    Sections mirror the YAML layout: ``skills``, ``server``, ``memory``,
    ``logging`` and ``install``. Unknown keys are kept (see
    :meth:`get_unknown_fields`) so typos can be reported instead of
    silently ignored.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="SPAWNER_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        yaml_layers = sources.YamlLayersSettingsSource(
            settings_cls, sources.default_layers(find_project_root())
        )
        return (init_settings, env_settings, dotenv_settings, yaml_layers, file_secret_settings)

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Settings that ignore any .env file (tests, CI)."""
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    version: int = _pydantic.Field(default=1, description="Config schema version")

    skills: types.SkillsConfig = _pydantic.Field(default_factory=types.SkillsConfig)
    server: types.ServerConfig = _pydantic.Field(default_factory=types.ServerConfig)
    memory: types.MemoryConfig = _pydantic.Field(default_factory=types.MemoryConfig)
    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    install: types.InstallConfig = _pydantic.Field(default_factory=types.InstallConfig)

    @property
    def skills_root(self) -> _pathlib.Path:
        return self.skills.root_path

    @property
    def memory_path(self) -> _pathlib.Path:
        return self.memory.file_path

    @property
    def config_dir(self) -> _pathlib.Path:
        return sources.get_user_config_dir()

    def get_unknown_fields(self) -> dict[str, _typing.Any]:
        """Unrecognized keys anywhere in the config, as dotted path → value."""
        unknown: dict[str, _typing.Any] = dict(self.model_extra or {})
        for name in SECTIONS:
            section: types.ConfigBase = getattr(self, name)
            unknown.update(section.unknown_keys(name))
        return unknown
