"""
Skill library access for Spawner.

Skills are directories of YAML knowledge:
- skill.yaml: identity, patterns and anti-patterns
- validations.yaml: regex checks for common mistakes
- sharp-edges.yaml: production gotchas with optional detection patterns
"""

from spawner.skills.catalog import SkillCatalog
from spawner.skills.discovery import SkillDiscovery, find_data_files
from spawner.skills.sharp_edges import SharpEdge, SharpEdgeScanner
from spawner.skills.skill import (
    SkillDefinition,
    SkillManifest,
    SkillNotFoundError,
    load_skill,
    parse_skill_yaml,
)
from spawner.skills.validations import ValidationEngine, ValidationRule

__all__ = [
    "SharpEdge",
    "SharpEdgeScanner",
    "SkillCatalog",
    "SkillDefinition",
    "SkillDiscovery",
    "SkillManifest",
    "SkillNotFoundError",
    "ValidationEngine",
    "ValidationRule",
    "find_data_files",
    "load_skill",
    "parse_skill_yaml",
]
