"""
Installation of the skill library and MCP client setup.
"""

from spawner.install.installer import (
    GitInfo,
    InstallError,
    InstallOutcome,
    SkillInstaller,
    short_description,
)
from spawner.install.mcp_config import (
    McpEnvironment,
    SetupOutcome,
    detect_environments,
    is_configured,
    local_server_entry,
    remote_server_entry,
    setup_mcp,
)

__all__ = [
    "GitInfo",
    "InstallError",
    "InstallOutcome",
    "McpEnvironment",
    "SetupOutcome",
    "SkillInstaller",
    "detect_environments",
    "is_configured",
    "local_server_entry",
    "remote_server_entry",
    "setup_mcp",
    "short_description",
]
