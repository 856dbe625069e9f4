"""
Configuration module for Spawner.

Uses pydantic-settings for environment variable loading.
"""

from spawner.config.settings import (
    Settings,
    find_git_root,
    find_project_root,
)
from spawner.config.sources import ConfigFileError

__all__ = ["ConfigFileError", "Settings", "find_git_root", "find_project_root"]
