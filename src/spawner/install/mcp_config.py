"""
MCP client configuration.

Adds a ``spawner`` entry under ``mcpServers`` in each detected client
config file: Claude Desktop, a project ``.mcp.json`` and the global
``~/.mcp.json`` (always offered, created on demand).
"""

from __future__ import annotations

import dataclasses as _dataclasses
import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

_logger = _logging.getLogger(__name__)

SERVER_KEY = "spawner"
SERVER_DESCRIPTION = "Spawner V2 - Project memory, validation, skills, sharp edges"


@_dataclasses.dataclass
class McpEnvironment:
    """A client config file that can carry the server entry."""

    kind: _typing.Literal["desktop", "code-local", "code-home"]
    name: str
    path: _pathlib.Path
    exists: bool = True


@_dataclasses.dataclass
class SetupOutcome:
    environment: McpEnvironment
    status: _typing.Literal["configured", "skipped", "failed"]
    error: str | None = None


def claude_desktop_config_path(
    *,
    platform: str = _sys.platform,
    home: _pathlib.Path | None = None,
    environ: _typing.Mapping[str, str] | None = None,
) -> _pathlib.Path:
    """Platform-specific Claude Desktop config file."""
    home = home or _pathlib.Path.home()
    environ = _os.environ if environ is None else environ
    if platform == "darwin":
        return home / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"
    if platform == "win32":
        appdata = environ.get("APPDATA")
        base = _pathlib.Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Claude" / "claude_desktop_config.json"
    return home / ".config" / "Claude" / "claude_desktop_config.json"


def detect_environments(
    *,
    cwd: _pathlib.Path | None = None,
    home: _pathlib.Path | None = None,
    platform: str = _sys.platform,
    environ: _typing.Mapping[str, str] | None = None,
) -> list[McpEnvironment]:
    """
    Find client configs to write.

    Claude Desktop counts when its config directory exists; the project
    ``.mcp.json`` when the file exists. The global ``~/.mcp.json`` is
    always included.
    """
    cwd = cwd or _pathlib.Path.cwd()
    home = home or _pathlib.Path.home()
    environments: list[McpEnvironment] = []

    desktop = claude_desktop_config_path(platform=platform, home=home, environ=environ)
    if desktop.parent.exists():
        environments.append(
            McpEnvironment("desktop", "Claude Desktop", desktop, exists=desktop.exists())
        )

    local_mcp = cwd / ".mcp.json"
    home_mcp = home / ".mcp.json"
    if local_mcp.exists() and local_mcp != home_mcp:
        environments.append(McpEnvironment("code-local", "Claude Code (project)", local_mcp))
    environments.append(
        McpEnvironment("code-home", "Claude Code (global)", home_mcp, exists=home_mcp.exists())
    )
    return environments


def remote_server_entry(endpoint: str) -> dict[str, _typing.Any]:
    """Entry that bridges to the hosted endpoint through mcp-remote."""
    return {
        "command": "npx",
        "args": ["-y", "mcp-remote", endpoint],
        "description": SERVER_DESCRIPTION,
    }


def local_server_entry(command: str = "spawner") -> dict[str, _typing.Any]:
    """Entry that launches this package's stdio server."""
    return {
        "command": command,
        "args": ["serve", "--transport", "stdio"],
        "description": SERVER_DESCRIPTION,
    }


def read_config(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """Read a client config; None if missing or not a JSON object."""
    if not path.exists():
        return None
    try:
        data = _json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        _logger.warning("Config file exists but couldn't be parsed: %s (%s)", path, e)
        return None
    return data if isinstance(data, dict) else None


def write_config(path: _pathlib.Path, config: dict[str, _typing.Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_json.dumps(config, indent=2) + "\n", encoding="utf-8")


def is_configured(path: _pathlib.Path) -> bool:
    config = read_config(path)
    if not config:
        return False
    servers = config.get("mcpServers")
    return isinstance(servers, dict) and SERVER_KEY in servers


def configure_environment(
    environment: McpEnvironment,
    entry: dict[str, _typing.Any],
) -> SetupOutcome:
    """Add the server entry to one client config, keeping everything else."""
    if is_configured(environment.path):
        return SetupOutcome(environment, "skipped")
    if environment.path.exists() and read_config(environment.path) is None:
        # Overwriting would destroy a config we can't read
        return SetupOutcome(environment, "failed", "existing config is not a JSON object")
    try:
        config = read_config(environment.path) or {}
        servers = config.get("mcpServers")
        if not isinstance(servers, dict):
            servers = {}
            config["mcpServers"] = servers
        servers[SERVER_KEY] = entry
        write_config(environment.path, config)
    except OSError as e:
        _logger.error("Failed to configure %s: %s", environment.name, e)
        return SetupOutcome(environment, "failed", str(e))
    _logger.info("Configured %s at %s", environment.name, environment.path)
    return SetupOutcome(environment, "configured")


def setup_mcp(
    environments: _typing.Iterable[McpEnvironment],
    entry: dict[str, _typing.Any],
) -> list[SetupOutcome]:
    """Configure every environment; one failure doesn't stop the rest."""
    return [configure_environment(env, entry) for env in environments]
