"""
Shared constants for Spawner.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Server identity
SERVER_NAME = "spawner-skills"
"""Name reported to MCP clients during initialize."""

PROTOCOL_VERSION = "2025-03-26"
"""MCP protocol revision spoken by the server."""

SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")
"""Protocol revisions accepted from clients (echoed back when offered)."""

DEFAULT_PORT = 3000
"""Default HTTP port for the streamable HTTP transport."""

# Skill catalog
SKILL_FILE = "skill.yaml"
SHARP_EDGES_FILE = "sharp-edges.yaml"
VALIDATIONS_FILE = "validations.yaml"
COLLABORATION_FILE = "collaboration.yaml"

DEFAULT_IGNORED_DIRS = ("node_modules", ".git", "mcp-server")
"""Directory names never searched for skill data."""

SUMMARY_DESCRIPTION_LIMIT = 200
"""Maximum description length in skill summaries before truncation."""

DEBUGGING_SKILL_ID = "debugging-master"
"""Skill consulted first for troubleshooting advice."""

# Remote distribution
REPO_URL = "https://github.com/vibeforge1111/vibeship-spawner-skills.git"
"""Git repository holding the skill library."""

MCP_ENDPOINT = "https://mcp.vibeship.co"
"""Hosted MCP endpoint used by `setup-mcp`."""
