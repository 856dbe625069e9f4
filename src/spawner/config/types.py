"""Section models for Spawner settings.

One model per top-level YAML key: ``skills``, ``server``, ``memory``,
``logging`` and ``install``. Unknown keys are kept rather than dropped so
a misspelt option (``server.prot``) can be reported.
"""

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic

import spawner.constants as constants


class ConfigBase(_pydantic.BaseModel):
    """Section model that keeps unknown keys in ``model_extra``."""

    model_config = _pydantic.ConfigDict(extra="allow")

    def unknown_keys(self, prefix: str = "") -> dict[str, _typing.Any]:
        """Unknown keys here and in nested sections, as dotted path → value."""
        found = {
            f"{prefix}.{key}" if prefix else key: value
            for key, value in (self.model_extra or {}).items()
        }
        for name in type(self).model_fields:
            child = getattr(self, name, None)
            if isinstance(child, ConfigBase):
                found.update(child.unknown_keys(f"{prefix}.{name}" if prefix else name))
        return found


def _expand(path: str) -> _pathlib.Path:
    return _pathlib.Path(path).expanduser()


class SkillsConfig(ConfigBase):
    """
    Skill library settings.

    YAML section: skills.*
    """

    root: str = "~/.spawner/skills"
    """Root directory of the skill library (<category>/<skill>/skill.yaml)."""

    ignored_dirs: list[str] = _pydantic.Field(
        default_factory=lambda: list(constants.DEFAULT_IGNORED_DIRS)
    )
    """Directory names skipped while scanning for skill data."""

    @property
    def root_path(self) -> _pathlib.Path:
        """Skill root with ~ expanded."""
        return _expand(self.root)


class ServerConfig(ConfigBase):
    """
    MCP server settings.

    YAML section: server.*
    """

    transport: _typing.Literal["http", "stdio"] = "http"
    """Default transport for `spawner serve`."""

    host: str = "127.0.0.1"
    """Bind address for the HTTP transport."""

    port: int = _pydantic.Field(default=constants.DEFAULT_PORT, ge=1, le=65535)
    """Bind port for the HTTP transport."""

    cors_origins: list[str] = _pydantic.Field(default_factory=lambda: ["*"])
    """Origins allowed by the CORS middleware."""


class MemoryConfig(ConfigBase):
    """
    Project memory settings.

    YAML section: memory.*
    """

    path: str = "~/.spawner/memory.json"
    """JSON file holding remembered decisions."""

    @property
    def file_path(self) -> _pathlib.Path:
        """Memory file with ~ expanded."""
        return _expand(self.path)


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    """Root log level."""

    rich: bool = True
    """Render log records with rich (colour, aligned columns)."""

    tool_calls: bool = False
    """Write every tool call to a JSONL log."""

    dir: str | None = None
    """Directory for tool-call logs (default: /tmp/spawner-logs)."""

    @_pydantic.field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: _typing.Any) -> _typing.Any:
        if isinstance(value, str):
            return value.upper()
        return value


class InstallConfig(ConfigBase):
    """
    Installer settings.

    YAML section: install.*
    """

    repo_url: str = constants.REPO_URL
    """Git repository cloned by `spawner install`."""

    mcp_endpoint: str = constants.MCP_ENDPOINT
    """Hosted endpoint written into client configs by `setup-mcp`."""
