"""
Project memory for Spawner.

Decisions and context stored here survive across sessions.
"""

from spawner.memory.store import MemoryEntry, ProjectMemory

__all__ = [
    "MemoryEntry",
    "ProjectMemory",
]
